"""Include directive scanning.

Finds every ``@include(<path>)`` marker in a block of text. A marker must fit
on one line; the argument is trimmed of surrounding whitespace.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

INCLUDE_PATTERN = re.compile(r"@include\(([^)\r\n]+)\)")


@dataclass(frozen=True)
class Directive:
    """A single ``@include(...)`` occurrence.

    Attributes:
        raw: The full matched text, e.g. ``@include(../shared/rules.md)``
        argument: The reference between the parentheses, whitespace trimmed
        start: Offset of the first character of the match
        end: Offset one past the last character of the match
        line: Line number of the match (0-indexed)
    """

    raw: str
    argument: str
    start: int
    end: int
    line: int


def scan_directives(text: str) -> List[Directive]:
    """Return the include directives in ``text`` in document order."""
    directives: List[Directive] = []
    line = 0
    cursor = 0
    for match in INCLUDE_PATTERN.finditer(text):
        argument = match.group(1).strip()
        if not argument:
            continue
        line += text.count("\n", cursor, match.start())
        cursor = match.start()
        directives.append(
            Directive(
                raw=match.group(0),
                argument=argument,
                start=match.start(),
                end=match.end(),
                line=line,
            )
        )
    return directives


def has_directives(text: str) -> bool:
    """Cheap check used to skip scanning documents without any marker."""
    return "@include(" in text


__all__ = ["INCLUDE_PATTERN", "Directive", "scan_directives", "has_directives"]
