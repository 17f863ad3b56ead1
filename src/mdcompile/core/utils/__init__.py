"""Shared utilities (file I/O, dictionary merging, project root detection)."""
from .io import atomic_write, ensure_directory, ensure_parent_dir, read_text, read_yaml, write_text
from .merge import deep_merge, merge_arrays, merge_layers
from .paths import resolve_project_root

__all__ = [
    "atomic_write",
    "ensure_directory",
    "ensure_parent_dir",
    "read_text",
    "read_yaml",
    "write_text",
    "deep_merge",
    "merge_arrays",
    "merge_layers",
    "resolve_project_root",
]
