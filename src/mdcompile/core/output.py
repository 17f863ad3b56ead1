"""Output writing for compiled documents.

Provides consistent writing of compiled text with:
- Destination naming rules (flat and nested layouts)
- Directory creation
- Atomic replacement of any previous output
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mdcompile.core.errors import OutputWriteError
from mdcompile.core.store import DocumentStore, FileSystemStore

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_SUFFIX = ".src.md"
DEFAULT_OUTPUT_SUFFIX = ".md"
DEFAULT_NESTED_FILENAME = "SKILL.md"


class DestinationRule(ABC):
    """Maps an entry document to the path its compiled output is written to."""

    output_dir: Path

    @abstractmethod
    def destination(self, entry: Path) -> Path:
        ...


@dataclass(frozen=True)
class FlatRule(DestinationRule):
    """``<output_dir>/<entry name with source suffix replaced>``.

    Example:
        ``agents/reviewer.src.md`` -> ``<output_dir>/reviewer.md``
    """

    output_dir: Path
    source_suffix: str = DEFAULT_SOURCE_SUFFIX
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX

    def destination(self, entry: Path) -> Path:
        name = Path(entry).name
        if self.source_suffix and name.endswith(self.source_suffix):
            name = name[: -len(self.source_suffix)] + self.output_suffix
        else:
            name = Path(name).stem + self.output_suffix
        return Path(self.output_dir) / name


@dataclass(frozen=True)
class NestedRule(DestinationRule):
    """``<output_dir>/<entry's parent directory name>/<filename>``.

    Example:
        ``skills/pdf/src.md`` -> ``<output_dir>/pdf/SKILL.md``
    """

    output_dir: Path
    filename: str = DEFAULT_NESTED_FILENAME

    def destination(self, entry: Path) -> Path:
        return Path(self.output_dir) / Path(entry).parent.name / self.filename


class OutputWriter:
    """Persist compiled documents through a document store.

    With ``dry_run`` the destination is computed but nothing is written.
    """

    def __init__(self, store: Optional[DocumentStore] = None, *, dry_run: bool = False) -> None:
        self.store = store or FileSystemStore()
        self.dry_run = dry_run

    def write(self, entry: Path, content: str, rule: DestinationRule) -> Path:
        """Write ``content`` to the destination ``rule`` derives for ``entry``.

        Returns:
            The destination path.

        Raises:
            OutputWriteError: If the destination cannot be written
        """
        target = rule.destination(entry)
        if self.dry_run:
            logger.info("[dry-run] Would write %s", target)
            return target
        try:
            self.store.write_text(target, content)
        except OSError as exc:
            raise OutputWriteError(f"Cannot write {target}: {exc}") from exc
        logger.info("Wrote %s", target)
        return target


__all__ = [
    "DEFAULT_SOURCE_SUFFIX",
    "DEFAULT_OUTPUT_SUFFIX",
    "DEFAULT_NESTED_FILENAME",
    "DestinationRule",
    "FlatRule",
    "NestedRule",
    "OutputWriter",
]
