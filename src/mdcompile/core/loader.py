"""Content loading for include targets and entry documents."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from mdcompile.core.directives import Directive
from mdcompile.core.errors import EntryNotFoundError
from mdcompile.core.report import CompileReport, Diagnostic
from mdcompile.core.store import DocumentStore

logger = logging.getLogger(__name__)


class ContentLoader:
    """Fetch document text from a store.

    Nested references fail soft: a failed read is logged, recorded on the
    report and turned into ``None`` so the directive stays in the output.
    Entry documents fail hard with :class:`EntryNotFoundError`.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def load(
        self,
        identity: Path,
        *,
        directive: Optional[Directive] = None,
        source: Optional[Path] = None,
        report: Optional[CompileReport] = None,
    ) -> Optional[str]:
        try:
            return self.store.read_text(identity)
        except (OSError, UnicodeDecodeError) as exc:
            reference = directive.argument if directive else str(identity)
            message = f"Cannot include {reference}: {exc}"
            entry = report.entry if report is not None else None
            logger.warning("%s (in %s, entry %s)", message, source or "<text>", entry or "<text>")
            if report is not None:
                report.add_diagnostic(
                    Diagnostic(
                        kind="missing",
                        reference=reference,
                        identity=identity,
                        source=source,
                        line=directive.line if directive else 0,
                        message=message,
                        entry=entry,
                    )
                )
            return None

    def load_entry(self, identity: Path) -> str:
        try:
            return self.store.read_text(identity)
        except (OSError, UnicodeDecodeError) as exc:
            raise EntryNotFoundError(f"Cannot read entry {identity}: {exc}") from exc


__all__ = ["ContentLoader"]
