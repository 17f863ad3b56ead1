"""Helpers for laying out source trees in temporary projects."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping

import yaml


def write_tree(root: Path, files: Mapping[str, str]) -> Dict[str, Path]:
    """Write ``{relative_path: content}`` under ``root`` and return the paths."""
    written: Dict[str, Path] = {}
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        written[rel] = path
    return written


def write_project_config(root: Path, data: Mapping[str, Any], name: str = "project.yaml") -> Path:
    """Write a project config layer into ``<root>/.mdcompile/config/``."""
    cfg_dir = root / ".mdcompile" / "config"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    path = cfg_dir / name
    path.write_text(yaml.safe_dump(dict(data), sort_keys=False), encoding="utf-8")
    return path


def claude_sources(root: Path) -> Dict[str, Path]:
    """Two agents and two skills sharing fragments, in the default layout."""
    return write_tree(
        root,
        {
            ".claude-src/shared/tone.md": "Be concise.",
            ".claude-src/shared/rules.md": "Rules:\n@include(tone.md)\n",
            ".claude-src/agents/reviewer.src.md": "# Reviewer\n@include(../shared/rules.md)\nReview code.\n",
            ".claude-src/agents/planner.src.md": "# Planner\n@include(../shared/tone.md)\n",
            ".claude-src/agents/README.md": "not an entry",
            ".claude-src/skills/pdf/src.md": "# PDF\n@include(../../shared/tone.md)\n",
            ".claude-src/skills/excel/src.md": "# Excel\n@include(notes.md)\n",
            ".claude-src/skills/excel/notes.md": "Sheets only.",
            ".claude-src/skills/empty/README.md": "no src.md here",
        },
    )
