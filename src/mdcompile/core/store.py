"""Document stores.

A store supplies raw text by identity and accepts writes of compiled text.
The file system store backs real compilation runs; the in-memory store keeps
tests and embedding callers free of disk I/O.
"""
from __future__ import annotations

import fnmatch
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from mdcompile.core.utils.io import read_text, write_text


class DocumentStore(ABC):
    """Read/write access to document text keyed by absolute path."""

    @abstractmethod
    def read_text(self, identity: Path) -> str:
        """Return the text stored at ``identity``.

        Raises:
            FileNotFoundError: If nothing is stored there
            OSError: For any other read failure
        """
        ...

    @abstractmethod
    def write_text(self, identity: Path, content: str) -> Path:
        """Persist ``content`` at ``identity``, replacing prior content."""
        ...

    @abstractmethod
    def is_file(self, identity: Path) -> bool:
        ...

    @abstractmethod
    def list_dir(self, directory: Path) -> List[Path]:
        """Return the direct children of ``directory`` (files and directories), sorted."""
        ...

    @abstractmethod
    def is_dir(self, identity: Path) -> bool:
        ...

    def glob(self, directory: Path, pattern: str) -> List[Path]:
        """Return direct children of ``directory`` whose name matches ``pattern``."""
        return [p for p in self.list_dir(directory) if fnmatch.fnmatch(p.name, pattern)]


class FileSystemStore(DocumentStore):
    """Document store backed by the local file system."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read_text(self, identity: Path) -> str:
        return read_text(identity, encoding=self.encoding)

    def write_text(self, identity: Path, content: str) -> Path:
        write_text(identity, content, encoding=self.encoding)
        return identity

    def is_file(self, identity: Path) -> bool:
        return Path(identity).is_file()

    def is_dir(self, identity: Path) -> bool:
        return Path(identity).is_dir()

    def list_dir(self, directory: Path) -> List[Path]:
        directory = Path(directory)
        if not directory.is_dir():
            return []
        return sorted(directory.iterdir())


class MemoryStore(DocumentStore):
    """Dictionary-backed store; directories are implied by stored paths."""

    def __init__(self, documents: Optional[Dict[Union[str, Path], str]] = None) -> None:
        self.documents: Dict[Path, str] = {}
        for key, value in (documents or {}).items():
            self.documents[Path(key)] = value
        self.reads: List[Path] = []

    def read_text(self, identity: Path) -> str:
        identity = Path(identity)
        self.reads.append(identity)
        if identity not in self.documents:
            if self.is_dir(identity):
                raise IsADirectoryError(f"Is a directory: {identity}")
            raise FileNotFoundError(f"Document not found: {identity}")
        return self.documents[identity]

    def write_text(self, identity: Path, content: str) -> Path:
        identity = Path(identity)
        self.documents[identity] = content
        return identity

    def is_file(self, identity: Path) -> bool:
        return Path(identity) in self.documents

    def is_dir(self, identity: Path) -> bool:
        identity = Path(identity)
        return any(identity in path.parents for path in self.documents)

    def list_dir(self, directory: Path) -> List[Path]:
        directory = Path(directory)
        children = set()
        for path in self.documents:
            if directory in path.parents:
                children.add(directory / path.relative_to(directory).parts[0])
        return sorted(children)


__all__ = ["DocumentStore", "FileSystemStore", "MemoryStore"]
