"""Resolve include arguments to document identities.

An argument is always interpreted relative to the directory of the document
that contains it. Resolution is purely lexical so that the same argument
against the same base always yields the same identity, whether or not the
target exists.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Union


def _strip_quotes(raw: str) -> str:
    raw = raw.strip()
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {"'", '"'}:
        return raw[1:-1].strip()
    return raw


def resolve_reference(argument: str, base_dir: Union[str, Path]) -> Path:
    """Resolve ``argument`` against ``base_dir`` into an absolute, normalised path.

    Args:
        argument: Directive argument, e.g. ``../shared/rules.md``
        base_dir: Directory of the document containing the directive

    Returns:
        Absolute path with ``.`` and ``..`` segments collapsed.
    """
    normalized = _strip_quotes(argument).replace("\\", "/")
    base = Path(base_dir)
    if not base.is_absolute():
        base = Path.cwd() / base
    return Path(os.path.normpath(base / normalized))


def canonical_identity(path: Union[str, Path]) -> Path:
    """Absolute, lexically normalised form of an existing document path."""
    path = Path(path)
    if not path.is_absolute():
        path = Path.cwd() / path
    return Path(os.path.normpath(path))


def document_dir(identity: Path) -> Path:
    """Directory used as base location for directives inside ``identity``."""
    return identity.parent


__all__ = ["resolve_reference", "canonical_identity", "document_dir"]
