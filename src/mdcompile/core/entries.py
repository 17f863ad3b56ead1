"""Entry collections: where entry documents live and where their output goes."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping

from mdcompile.core.errors import CompileError, ConfigError
from mdcompile.core.output import (
    DEFAULT_NESTED_FILENAME,
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_SOURCE_SUFFIX,
    DestinationRule,
    FlatRule,
    NestedRule,
)
from mdcompile.core.store import DocumentStore

CollectionKind = Literal["flat", "nested"]


@dataclass(frozen=True)
class EntryCollection:
    """A root directory of entry documents sharing one destination rule.

    ``flat`` collections hold entries directly (``<source>/*<source_suffix>``).
    ``nested`` collections hold one entry per subdirectory
    (``<source>/<name>/<entry_filename>``), each compiled to
    ``<output>/<name>/<output_filename>``.
    """

    name: str
    kind: CollectionKind
    source_dir: Path
    output_dir: Path
    source_suffix: str = DEFAULT_SOURCE_SUFFIX
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX
    entry_filename: str = "src.md"
    output_filename: str = DEFAULT_NESTED_FILENAME

    @property
    def rule(self) -> DestinationRule:
        if self.kind == "nested":
            return NestedRule(self.output_dir, filename=self.output_filename)
        return FlatRule(self.output_dir, source_suffix=self.source_suffix, output_suffix=self.output_suffix)

    def discover(self, store: DocumentStore) -> List[Path]:
        """Return this collection's entry documents, sorted by path.

        Raises:
            CompileError: If the source directory cannot be listed
        """
        try:
            return self._discover(store)
        except OSError as exc:
            raise CompileError(f"Cannot list entries of collection {self.name!r} in {self.source_dir}: {exc}") from exc

    def _discover(self, store: DocumentStore) -> List[Path]:
        if self.kind == "nested":
            entries = []
            for child in store.list_dir(self.source_dir):
                candidate = child / self.entry_filename
                if store.is_dir(child) and store.is_file(candidate):
                    entries.append(candidate)
            return entries
        return [p for p in store.glob(self.source_dir, f"*{self.source_suffix}") if store.is_file(p)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "source": str(self.source_dir),
            "output": str(self.output_dir),
        }

    @classmethod
    def from_config(cls, data: Mapping[str, Any], *, root: Path, defaults: Mapping[str, Any]) -> "EntryCollection":
        """Build a collection from one ``collections`` config item.

        Relative ``source``/``output`` directories are anchored at ``root``.
        """
        try:
            name = str(data["name"])
            source = Path(str(data["source"]))
            output = Path(str(data["output"]))
        except KeyError as exc:
            raise ConfigError(f"Collection is missing required key {exc}") from exc
        kind = data.get("kind", "flat")
        if kind not in ("flat", "nested"):
            raise ConfigError(f"Collection {name!r} has unknown kind {kind!r}")
        return cls(
            name=name,
            kind=kind,
            source_dir=source if source.is_absolute() else root / source,
            output_dir=output if output.is_absolute() else root / output,
            source_suffix=str(data.get("source_suffix", defaults.get("source_suffix", DEFAULT_SOURCE_SUFFIX))),
            output_suffix=str(data.get("output_suffix", defaults.get("output_suffix", DEFAULT_OUTPUT_SUFFIX))),
            entry_filename=str(data.get("entry_filename", "src.md")),
            output_filename=str(data.get("output_filename", DEFAULT_NESTED_FILENAME)),
        )


__all__ = ["CollectionKind", "EntryCollection"]
