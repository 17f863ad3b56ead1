"""Recursive expansion of ``@include(...)`` directives.

Each directive is resolved against the directory of the document that
contains it, loaded, expanded in turn, and substituted at its own position.
Directives whose target cannot be loaded, that would re-enter a document
already being expanded, or that go past the depth limit are left verbatim
and recorded as diagnostics.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Literal, Optional, Set, Tuple

from mdcompile.core.directives import Directive, has_directives, scan_directives
from mdcompile.core.loader import ContentLoader
from mdcompile.core.paths import canonical_identity, document_dir, resolve_reference
from mdcompile.core.report import CompileReport, Diagnostic, DiagnosticKind
from mdcompile.core.store import DocumentStore, FileSystemStore

logger = logging.getLogger(__name__)

CycleMode = Literal["path", "visited"]
CYCLE_MODES = ("path", "visited")
DEFAULT_MAX_DEPTH = 64


@dataclass
class ExpansionContext:
    """State threaded through one entry's expansion.

    ``stack`` holds the documents from the entry down to the one currently
    being expanded. ``visited`` only grows. Which of the two decides cycles
    depends on the expander's cycle mode.
    """

    base_dir: Path
    report: CompileReport
    visited: Set[Path] = field(default_factory=set)
    stack: List[Path] = field(default_factory=list)
    depth: int = 0
    # identity -> (expanded text, depth it was expanded from)
    cache: Optional[Dict[Path, Tuple[str, int]]] = None

    @property
    def current(self) -> Optional[Path]:
        return self.stack[-1] if self.stack else None


@dataclass
class ExpansionResult:
    text: str
    report: CompileReport

    @property
    def dependencies(self) -> List[Path]:
        return list(self.report.dependencies)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self.report.diagnostics)


class IncludeExpander:
    """Expand include directives recursively.

    Args:
        store: Where document text comes from (file system by default)
        cycle_mode: ``"path"`` flags a document only while it is an ancestor
            of the current one; ``"visited"`` flags any document already
            included anywhere in the same entry.
        max_depth: Deepest include nesting expanded before directives are
            left as-is
        cache_includes: Reuse the expansion of a document within one entry
    """

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        *,
        cycle_mode: CycleMode = "path",
        max_depth: int = DEFAULT_MAX_DEPTH,
        cache_includes: bool = False,
    ) -> None:
        if cycle_mode not in CYCLE_MODES:
            raise ValueError(f"Unknown cycle mode: {cycle_mode!r} (expected one of {CYCLE_MODES})")
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.store = store or FileSystemStore()
        self.loader = ContentLoader(self.store)
        self.cycle_mode = cycle_mode
        self.max_depth = max_depth
        self.cache_includes = cache_includes

    def new_context(
        self,
        base_dir: Path,
        *,
        entry: Optional[Path] = None,
        report: Optional[CompileReport] = None,
    ) -> ExpansionContext:
        """Create a fresh context; the entry (if any) counts as being expanded."""
        context = ExpansionContext(
            base_dir=Path(base_dir),
            report=report or CompileReport(entry=entry),
            cache={} if self.cache_includes else None,
        )
        if entry is not None:
            context.visited.add(entry)
            context.stack.append(entry)
        return context

    def expand_entry(self, entry: Path, *, report: Optional[CompileReport] = None) -> ExpansionResult:
        """Load and fully expand an entry document.

        Raises:
            EntryNotFoundError: If the entry itself cannot be read
        """
        identity = canonical_identity(entry)
        text = self.loader.load_entry(identity)
        context = self.new_context(document_dir(identity), entry=identity, report=report)
        expanded = self.expand(text, context)
        return ExpansionResult(text=expanded, report=context.report)

    def expand_text(self, text: str, base_dir: Path) -> ExpansionResult:
        """Expand ``text`` that is not backed by a stored document."""
        context = self.new_context(Path(base_dir))
        return ExpansionResult(text=self.expand(text, context), report=context.report)

    def expand(self, text: str, context: ExpansionContext) -> str:
        """Expand every directive in ``text`` using ``context.base_dir``."""
        if not has_directives(text):
            return text

        pieces: List[str] = []
        cursor = 0
        for directive in scan_directives(text):
            replacement = self._expand_directive(directive, context)
            if replacement is None:
                continue
            pieces.append(text[cursor : directive.start])
            pieces.append(replacement)
            cursor = directive.end
        pieces.append(text[cursor:])
        return "".join(pieces)

    def _expand_directive(self, directive: Directive, context: ExpansionContext) -> Optional[str]:
        identity = resolve_reference(directive.argument, context.base_dir)
        source = context.current

        if self._is_cycle(identity, context):
            chain = " -> ".join(str(p) for p in [*context.stack, identity])
            self._diagnose(context, "cycle", directive, identity, f"Circular include detected: {chain}")
            return None

        cached = context.cache.get(identity) if context.cache is not None else None
        # Text expanded from a shallower depth may hide a depth limit hit further down.
        if cached is not None and context.depth <= cached[1]:
            logger.debug("Reusing expansion of %s", identity)
            return cached[0]

        if context.depth >= self.max_depth:
            self._diagnose(
                context,
                "depth",
                directive,
                identity,
                f"Include depth exceeded (>{self.max_depth}) at {directive.argument}",
            )
            return None

        content = self.loader.load(identity, directive=directive, source=source, report=context.report)
        if content is None:
            return None

        logger.debug("Including %s (depth %d)", identity, context.depth + 1)
        context.report.record_dependency(identity)
        context.visited.add(identity)
        context.stack.append(identity)
        parent_dir, parent_depth = context.base_dir, context.depth
        diagnostics_before = len(context.report.diagnostics)
        context.base_dir = document_dir(identity)
        context.depth = parent_depth + 1
        try:
            expanded = self.expand(content, context)
        finally:
            context.base_dir, context.depth = parent_dir, parent_depth
            context.stack.pop()

        # A subtree that hit no diagnostics expands the same from any parent at
        # the same depth or shallower.
        if context.cache is not None and len(context.report.diagnostics) == diagnostics_before:
            context.cache[identity] = (expanded, parent_depth)
        return expanded

    def _is_cycle(self, identity: Path, context: ExpansionContext) -> bool:
        if self.cycle_mode == "visited":
            return identity in context.visited
        return identity in context.stack

    def _diagnose(
        self,
        context: ExpansionContext,
        kind: DiagnosticKind,
        directive: Directive,
        identity: Path,
        message: str,
    ) -> None:
        source = context.current
        logger.warning("%s (in %s, entry %s)", message, source or "<text>", context.report.entry or "<text>")
        context.report.add_diagnostic(
            Diagnostic(
                kind=kind,
                reference=directive.argument,
                identity=identity,
                source=source,
                line=directive.line,
                message=message,
                entry=context.report.entry,
            )
        )


def expand_includes(
    text: str,
    base_dir: Path,
    *,
    store: Optional[DocumentStore] = None,
    cycle_mode: CycleMode = "path",
) -> str:
    """Convenience wrapper: expand ``text`` and return only the compiled text."""
    expander = IncludeExpander(store, cycle_mode=cycle_mode)
    return expander.expand_text(text, base_dir).text


__all__ = [
    "CycleMode",
    "CYCLE_MODES",
    "DEFAULT_MAX_DEPTH",
    "ExpansionContext",
    "ExpansionResult",
    "IncludeExpander",
    "expand_includes",
]
