"""Tests for document stores."""
from __future__ import annotations

from pathlib import Path

import pytest

from mdcompile.core.store import FileSystemStore, MemoryStore


class TestMemoryStore:
    def test_read_write_roundtrip(self) -> None:
        store = MemoryStore({"/docs/a.md": "A"})
        assert store.read_text(Path("/docs/a.md")) == "A"

        store.write_text(Path("/out/b.md"), "B")
        assert store.read_text(Path("/out/b.md")) == "B"

    def test_missing_document_raises_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            MemoryStore().read_text(Path("/nope.md"))

    def test_directory_read_raises_is_a_directory(self) -> None:
        store = MemoryStore({"/docs/sub/a.md": "A"})
        with pytest.raises(IsADirectoryError):
            store.read_text(Path("/docs/sub"))

    def test_list_dir_and_glob(self) -> None:
        store = MemoryStore(
            {
                "/src/agents/b.src.md": "",
                "/src/agents/a.src.md": "",
                "/src/agents/notes.md": "",
                "/src/agents/nested/c.src.md": "",
            }
        )
        assert store.list_dir(Path("/src/agents")) == [
            Path("/src/agents/a.src.md"),
            Path("/src/agents/b.src.md"),
            Path("/src/agents/nested"),
            Path("/src/agents/notes.md"),
        ]
        assert store.glob(Path("/src/agents"), "*.src.md") == [
            Path("/src/agents/a.src.md"),
            Path("/src/agents/b.src.md"),
        ]
        assert store.is_dir(Path("/src/agents/nested"))
        assert not store.is_file(Path("/src/agents/nested"))


class TestFileSystemStore:
    def test_write_creates_parents_and_overwrites(self, tmp_path: Path) -> None:
        store = FileSystemStore()
        target = tmp_path / "out" / "deep" / "a.md"

        store.write_text(target, "first")
        store.write_text(target, "second")

        assert target.read_text(encoding="utf-8") == "second"
        assert [p.name for p in target.parent.iterdir()] == ["a.md"]

    def test_read_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            FileSystemStore().read_text(tmp_path / "missing.md")

    def test_list_dir_of_missing_directory_is_empty(self, tmp_path: Path) -> None:
        assert FileSystemStore().list_dir(tmp_path / "absent") == []
