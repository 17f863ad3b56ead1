"""Batch driver tests (in-memory and on-disk)."""
from __future__ import annotations

from pathlib import Path

import pytest

from mdcompile.core.compiler import Compiler
from mdcompile.core.config import CompileSettings, load_settings
from mdcompile.core.entries import EntryCollection
from mdcompile.core.errors import BatchAbortedError, CompileError, EntryNotFoundError, OutputWriteError
from mdcompile.core.output import NestedRule
from mdcompile.core.store import MemoryStore
from helpers.project import claude_sources


AGENTS = EntryCollection(name="agents", kind="flat", source_dir=Path("/p/src/agents"), output_dir=Path("/p/out/agents"))
SKILLS = EntryCollection(name="skills", kind="nested", source_dir=Path("/p/src/skills"), output_dir=Path("/p/out/skills"))


def _settings(**overrides) -> CompileSettings:
    values = dict(repo_root=Path("/p"), collections=[AGENTS, SKILLS])
    values.update(overrides)
    return CompileSettings(**values)


def _store() -> MemoryStore:
    return MemoryStore(
        {
            "/p/src/shared/tone.md": "calm",
            "/p/src/agents/a.src.md": "A:@include(../shared/tone.md)",
            "/p/src/agents/b.src.md": "B:@include(../shared/tone.md)",
            "/p/src/skills/pdf/src.md": "P:@include(../../shared/tone.md)",
        }
    )


class TestCompileEntry:
    def test_single_entry_uses_primary_collection_rule(self) -> None:
        store = _store()
        report = Compiler(_settings(), store=store).compile_entry(Path("/p/src/agents/a.src.md"))

        assert report.ok
        assert report.collection == "agents"
        assert report.output_path == Path("/p/out/agents/a.md")
        assert store.documents[Path("/p/out/agents/a.md")] == "A:calm"
        assert report.dependencies == [Path("/p/src/shared/tone.md")]

    def test_explicit_rule_wins(self) -> None:
        store = _store()
        rule = NestedRule(Path("/elsewhere"))
        report = Compiler(_settings(), store=store).compile_entry(Path("/p/src/skills/pdf/src.md"), rule=rule)

        assert report.output_path == Path("/elsewhere/pdf/SKILL.md")

    def test_missing_entry_raises(self) -> None:
        with pytest.raises(EntryNotFoundError):
            Compiler(_settings(), store=_store()).compile_entry(Path("/p/src/agents/nope.src.md"))

    def test_no_collections_configured(self) -> None:
        compiler = Compiler(_settings(collections=[]), store=_store())
        with pytest.raises(CompileError, match="No collection"):
            compiler.compile_entry(Path("/p/src/agents/a.src.md"))

    def test_dry_run_reports_destination_without_writing(self) -> None:
        store = _store()
        report = Compiler(_settings(), store=store, dry_run=True).compile_entry(Path("/p/src/agents/a.src.md"))

        assert report.output_path == Path("/p/out/agents/a.md")
        assert Path("/p/out/agents/a.md") not in store.documents

    def test_diagnostics_do_not_fail_the_entry(self) -> None:
        store = MemoryStore({"/p/src/agents/a.src.md": "x @include(gone.md) y"})
        report = Compiler(_settings(), store=store).compile_entry(Path("/p/src/agents/a.src.md"))

        assert report.ok
        assert [d.kind for d in report.diagnostics] == ["missing"]
        assert store.documents[Path("/p/out/agents/a.md")] == "x @include(gone.md) y"


class TestCompileAll:
    def test_compiles_every_collection_in_order(self) -> None:
        store = _store()
        batch = Compiler(_settings(), store=store).compile_all()

        assert batch.ok
        assert [r.output_path for r in batch.reports] == [
            Path("/p/out/agents/a.md"),
            Path("/p/out/agents/b.md"),
            Path("/p/out/skills/pdf/SKILL.md"),
        ]
        assert store.documents[Path("/p/out/skills/pdf/SKILL.md")] == "P:calm"

    def test_entries_do_not_share_cycle_state(self) -> None:
        batch = Compiler(_settings(cycle_detection="visited"), store=_store()).compile_all()
        assert batch.diagnostic_count == 0

    def test_restrict_to_collection(self) -> None:
        batch = Compiler(_settings(), store=_store()).compile_all([SKILLS])
        assert [r.collection for r in batch.reports] == ["skills"]

    def test_empty_batch(self) -> None:
        batch = Compiler(_settings(), store=MemoryStore()).compile_all()
        assert batch.total_count == 0
        assert batch.ok

    def test_discovery_failure_is_a_compile_error(self, monkeypatch) -> None:
        store = _store()

        def list_dir(directory: Path):
            raise PermissionError(f"Permission denied: {directory}")

        monkeypatch.setattr(store, "list_dir", list_dir)

        with pytest.raises(CompileError, match="Permission denied"):
            Compiler(_settings(), store=store).compile_all()

    def test_abort_policy_stops_at_first_failure(self, monkeypatch) -> None:
        compiler = Compiler(_settings(), store=_store())
        _fail_writes_for(monkeypatch, compiler, "a.md")

        with pytest.raises(BatchAbortedError) as excinfo:
            compiler.compile_all()

        batch = excinfo.value.report
        assert batch is not None
        assert batch.total_count == 1
        assert batch.failures[0].entry == Path("/p/src/agents/a.src.md")
        assert "a.md" in batch.failures[0].error

    def test_continue_policy_compiles_remaining_entries(self, monkeypatch) -> None:
        compiler = Compiler(_settings(failure_policy="continue"), store=_store())
        _fail_writes_for(monkeypatch, compiler, "a.md")

        batch = compiler.compile_all()

        assert batch.total_count == 3
        assert batch.failure_count == 1
        assert batch.success_count == 2
        assert not batch.ok


def _fail_writes_for(monkeypatch, compiler: Compiler, name: str) -> None:
    original = compiler.store.write_text

    def write_text(identity: Path, content: str) -> Path:
        if Path(identity).name == name:
            raise PermissionError(f"read-only: {identity}")
        return original(identity, content)

    monkeypatch.setattr(compiler.store, "write_text", write_text)


def test_default_layout_on_disk(isolated_project_env: Path) -> None:
    root = isolated_project_env
    claude_sources(root)

    batch = Compiler(load_settings(root)).compile_all()

    assert batch.ok
    assert batch.total_count == 4
    assert (root / ".claude/agents/reviewer.md").read_text(encoding="utf-8") == (
        "# Reviewer\nRules:\nBe concise.\n\nReview code.\n"
    )
    assert (root / ".claude/agents/planner.md").read_text(encoding="utf-8") == "# Planner\nBe concise.\n"
    assert (root / ".claude/skills/pdf/SKILL.md").read_text(encoding="utf-8") == "# PDF\nBe concise.\n"
    assert (root / ".claude/skills/excel/SKILL.md").read_text(encoding="utf-8") == "# Excel\nSheets only.\n"
    assert not (root / ".claude/agents/README.md").exists()
    assert not (root / ".claude/skills/empty").exists()
