"""Merging of configuration layers.

Mappings merge key by key. Lists (such as ``collections``) are replaced by a
later layer unless the later list starts with a marker:

- ``"+"``: append the remaining items to the earlier list
- ``"="``: replace, same as no marker
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

APPEND_MARKER = "+"
REPLACE_MARKER = "="


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Combine two lists from successive layers.

    Example:
        >>> merge_arrays([1, 2], ["+", 3])
        [1, 2, 3]
    """
    if not override:
        return list(base)
    marker, rest = override[0], override[1:]
    if marker == APPEND_MARKER:
        return [*base, *rest]
    if marker == REPLACE_MARKER:
        return list(rest)
    return list(override)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new mapping with ``override`` layered over ``base``.

    Neither input is modified.
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = merge_arrays(current, value)
        else:
            merged[key] = value
    return merged


def merge_layers(layers: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Fold ``layers`` from lowest to highest priority."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged = deep_merge(merged, layer)
    return merged


__all__ = ["APPEND_MARKER", "REPLACE_MARKER", "deep_merge", "merge_arrays", "merge_layers"]
