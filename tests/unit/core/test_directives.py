"""Tests for include directive scanning."""
from __future__ import annotations

from mdcompile.core.directives import has_directives, scan_directives


def test_no_directives_returns_empty_list() -> None:
    assert scan_directives("plain text, no markers") == []
    assert scan_directives("") == []


def test_extracts_trimmed_argument_and_span() -> None:
    text = "before @include(  shared/a.md  ) after"
    [directive] = scan_directives(text)

    assert directive.argument == "shared/a.md"
    assert directive.raw == "@include(  shared/a.md  )"
    assert text[directive.start : directive.end] == directive.raw


def test_preserves_document_order() -> None:
    text = "@include(b.md) x @include(a.md) y @include(c.md)"
    assert [d.argument for d in scan_directives(text)] == ["b.md", "a.md", "c.md"]


def test_does_not_match_across_line_breaks() -> None:
    text = "@include(first\nsecond.md)\n@include(ok.md)"
    assert [d.argument for d in scan_directives(text)] == ["ok.md"]


def test_blank_argument_is_not_a_directive() -> None:
    assert scan_directives("@include(   ) and @include()") == []


def test_reports_zero_indexed_line_numbers() -> None:
    text = "line0\n@include(a.md)\nline2\n\n@include(b.md) @include(c.md)"
    assert [(d.argument, d.line) for d in scan_directives(text)] == [("a.md", 1), ("b.md", 4), ("c.md", 4)]


def test_duplicate_directives_keep_distinct_spans() -> None:
    text = "@include(a.md)-@include(a.md)"
    first, second = scan_directives(text)
    assert first.start == 0
    assert second.start == first.end + 1


def test_has_directives() -> None:
    assert has_directives("x @include(a) y")
    assert not has_directives("x include(a) y")
