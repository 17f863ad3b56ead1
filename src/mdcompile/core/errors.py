"""Compilation error classes."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from mdcompile.core.report import BatchReport


class CompileError(RuntimeError):
    """Compilation failure that stops an entry (or a whole batch)."""


class EntryNotFoundError(CompileError):
    """Raised when an entry document cannot be read."""


class OutputWriteError(CompileError):
    """Raised when a compiled document cannot be persisted."""


class ConfigError(CompileError):
    """Raised when configuration cannot be loaded or fails validation."""


class BatchAbortedError(CompileError):
    """Raised when a batch stops on the first failed entry.

    The partially filled batch report is kept so callers can still show what
    was compiled before the failure.
    """

    def __init__(self, message: str, report: Optional["BatchReport"] = None) -> None:
        super().__init__(message)
        self.report = report


__all__ = [
    "CompileError",
    "EntryNotFoundError",
    "OutputWriteError",
    "ConfigError",
    "BatchAbortedError",
]
