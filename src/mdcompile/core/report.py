"""Compilation reporting dataclasses.

Provides structured reports for compile operations: one per entry, and one
aggregating a batch run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

DiagnosticKind = Literal["missing", "cycle", "depth"]


@dataclass(frozen=True)
class Diagnostic:
    """A directive that was left unexpanded in the compiled output."""

    kind: DiagnosticKind
    reference: str
    identity: Optional[Path]
    source: Optional[Path]
    line: int
    message: str
    entry: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "reference": self.reference,
            "identity": str(self.identity) if self.identity else None,
            "source": str(self.source) if self.source else None,
            "line": self.line,
            "message": self.message,
            "entry": str(self.entry) if self.entry else None,
        }

    def __str__(self) -> str:
        where = f"{self.source}:{self.line + 1}" if self.source else f"line {self.line + 1}"
        return f"[{self.kind}] {where}: {self.message}"


@dataclass
class CompileReport:
    """Report from compiling one entry document.

    Contains everything about what was processed:
    - The entry and its collection
    - Where the output went (if anywhere)
    - Documents included, in resolution order
    - Directives left unexpanded
    - The fatal error, when the entry failed
    """

    entry: Optional[Path]
    collection: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    output_path: Optional[Path] = None
    dependencies: List[Path] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when the entry compiled (diagnostics allowed)."""
        return self.error is None

    @property
    def has_issues(self) -> bool:
        return bool(self.diagnostics or self.error)

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def record_dependency(self, identity: Path) -> None:
        if identity not in self.dependencies:
            self.dependencies.append(identity)

    def diagnostics_of(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for serialization."""
        return {
            "entry": str(self.entry) if self.entry else None,
            "collection": self.collection,
            "timestamp": self.timestamp.isoformat(),
            "output": str(self.output_path) if self.output_path else None,
            "dependencies": [str(p) for p in self.dependencies],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "error": self.error,
        }

    def summary(self) -> str:
        """Generate human-readable summary."""
        name = self.entry.name if self.entry else "<text>"
        if self.error:
            return f"FAILED {name}: {self.error}"
        lines = [f"Compiled {name} -> {self.output_path or '(not written)'}"]
        lines.append(f"  Includes: {len(self.dependencies)}")
        if self.diagnostics:
            lines.append(f"  Diagnostics: {len(self.diagnostics)}")
            for d in self.diagnostics[:3]:
                lines.append(f"    - {d}")
        return "\n".join(lines)


@dataclass
class BatchReport:
    """Report from compiling every entry of one or more collections."""

    timestamp: datetime = field(default_factory=datetime.now)
    reports: List[CompileReport] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.reports)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.reports if r.ok)

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.reports if not r.ok)

    @property
    def diagnostic_count(self) -> int:
        return sum(len(r.diagnostics) for r in self.reports)

    @property
    def ok(self) -> bool:
        return self.failure_count == 0

    @property
    def failures(self) -> List[CompileReport]:
        return [r for r in self.reports if not r.ok]

    def add_report(self, report: CompileReport) -> None:
        self.reports.append(report)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "total": self.total_count,
            "succeeded": self.success_count,
            "failed": self.failure_count,
            "diagnostics": self.diagnostic_count,
            "entries": [r.to_dict() for r in self.reports],
        }

    def summary(self) -> str:
        """Generate batch summary."""
        lines = [
            "Batch Compile Report",
            f"  Total: {self.total_count}",
            f"  Success: {self.success_count}",
            f"  Failed: {self.failure_count}",
            f"  Diagnostics: {self.diagnostic_count}",
        ]

        issues = [r for r in self.reports if r.has_issues]
        if issues:
            lines.append("  Issues:")
            for r in issues[:5]:
                status = "ERROR" if r.error else "WARN"
                name = r.entry.name if r.entry else "<text>"
                lines.append(f"    [{status}] {name}")

        return "\n".join(lines)


__all__ = ["Diagnostic", "DiagnosticKind", "CompileReport", "BatchReport"]
