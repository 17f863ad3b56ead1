"""Batch driver: compile entry documents and write their output."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from mdcompile.core.config import CompileSettings
from mdcompile.core.entries import EntryCollection
from mdcompile.core.errors import BatchAbortedError, CompileError
from mdcompile.core.expander import IncludeExpander
from mdcompile.core.output import DestinationRule, OutputWriter
from mdcompile.core.paths import canonical_identity
from mdcompile.core.report import BatchReport, CompileReport
from mdcompile.core.store import DocumentStore, FileSystemStore

logger = logging.getLogger(__name__)


class Compiler:
    """Compile entries from the configured collections.

    Every entry gets a fresh expansion context, so documents included by one
    entry never count as cycles for another.
    """

    def __init__(
        self,
        settings: CompileSettings,
        *,
        store: Optional[DocumentStore] = None,
        dry_run: bool = False,
    ) -> None:
        self.settings = settings
        self.store = store or FileSystemStore(encoding=settings.encoding)
        self.expander = IncludeExpander(
            self.store,
            cycle_mode=settings.cycle_detection,  # type: ignore[arg-type]
            max_depth=settings.max_depth,
            cache_includes=settings.cache_includes,
        )
        self.writer = OutputWriter(self.store, dry_run=dry_run)

    def discover(self, collections: Optional[Iterable[EntryCollection]] = None) -> List[Tuple[EntryCollection, Path]]:
        """List ``(collection, entry)`` pairs across collections, in config order."""
        found: List[Tuple[EntryCollection, Path]] = []
        for collection in collections if collections is not None else self.settings.collections:
            entries = collection.discover(self.store)
            if not entries:
                logger.info("No entries found for collection %s in %s", collection.name, collection.source_dir)
            found.extend((collection, entry) for entry in entries)
        return found

    def compile_entry(
        self,
        entry: Path,
        collection: Optional[EntryCollection] = None,
        *,
        rule: Optional[DestinationRule] = None,
    ) -> CompileReport:
        """Expand one entry and write its output.

        The destination comes from ``rule``, else ``collection``, else the
        primary collection.

        Raises:
            EntryNotFoundError: If the entry cannot be read
            OutputWriteError: If the output cannot be written
        """
        identity = canonical_identity(entry)
        if rule is None:
            collection = collection or self.settings.primary_collection
            if collection is None:
                raise CompileError("No collection configured to derive an output path from")
            rule = collection.rule

        logger.info("Compiling %s", identity.name)
        report = CompileReport(entry=identity, collection=collection.name if collection else None)
        result = self.expander.expand_entry(identity, report=report)
        report.output_path = self.writer.write(identity, result.text, rule)
        return report

    def compile_all(self, collections: Optional[Iterable[EntryCollection]] = None) -> BatchReport:
        """Compile every discovered entry.

        Under the ``abort`` failure policy the first failing entry stops the
        batch with :class:`BatchAbortedError`; under ``continue`` failures are
        recorded on their reports and the batch carries on.
        """
        batch = BatchReport()
        for collection, entry in self.discover(collections):
            try:
                report = self.compile_entry(entry, collection)
            except CompileError as exc:
                logger.error("Error compiling %s: %s", entry, exc)
                failed = CompileReport(entry=canonical_identity(entry), collection=collection.name, error=str(exc))
                batch.add_report(failed)
                if self.settings.failure_policy == "abort":
                    raise BatchAbortedError(f"Compilation aborted at {entry}: {exc}", report=batch) from exc
                continue
            batch.add_report(report)
        return batch


__all__ = ["Compiler"]
