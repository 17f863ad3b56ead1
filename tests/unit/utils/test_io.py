from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from mdcompile.core.utils.io import ensure_directory, read_text, read_yaml, write_text


def test_write_text_creates_parents_and_replaces(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "out.md"

    write_text(target, "first")
    write_text(target, "second")

    assert target.read_text(encoding="utf-8") == "second"
    assert [p.name for p in target.parent.iterdir()] == ["out.md"]


def test_read_text_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_text(tmp_path / "missing.md")


def test_read_yaml_defaults_and_errors(tmp_path: Path) -> None:
    broken = tmp_path / "broken.yaml"
    broken.write_text("a: [", encoding="utf-8")

    assert read_yaml(tmp_path / "missing.yaml", default={}) == {}
    assert read_yaml(broken, default={"x": 1}) == {"x": 1}
    with pytest.raises(yaml.YAMLError):
        read_yaml(broken, raise_on_error=True)


def test_ensure_directory(tmp_path: Path) -> None:
    f = tmp_path / "file"
    f.write_text("", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        ensure_directory(f)
    assert ensure_directory(tmp_path / "new" / "dir").is_dir()
