"""
mdcompile compile command.

SUMMARY: Compile entry documents, expanding @include(...) directives

Without an entry argument every configured collection is compiled. With one,
only that entry is compiled, using the primary collection's naming rule
unless --collection names another.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mdcompile.cli import (
    OutputFormatter,
    add_dry_run_flag,
    add_standard_flags,
    add_strict_flag,
    load_cli_settings,
    setup_logging,
)
from mdcompile.core.compiler import Compiler
from mdcompile.core.errors import BatchAbortedError, CompileError
from mdcompile.core.report import BatchReport

SUMMARY = "Compile entry documents (every collection, or a single entry)"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "entry",
        nargs="?",
        help="Path to a single entry document; omit to compile every collection",
    )
    parser.add_argument(
        "--collection",
        "-c",
        action="append",
        dest="collections",
        metavar="NAME",
        help="Restrict the batch to this collection (repeatable); with an entry, use its naming rule",
    )
    parser.add_argument(
        "--keep-going",
        "-k",
        action="store_true",
        help="Compile remaining entries after a failure instead of aborting",
    )
    add_dry_run_flag(parser)
    add_strict_flag(parser)
    add_standard_flags(parser)


def _print_text(formatter: OutputFormatter, batch: BatchReport, *, dry_run: bool) -> None:
    if batch.total_count == 0:
        formatter.text("No entries found to compile")
        return
    verb = "Would create" if dry_run else "Created"
    for report in batch.reports:
        if report.ok:
            formatter.text(f"✓ {verb} {report.output_path}")
        else:
            formatter.text(f"✗ Failed {report.entry}: {report.error}")
        for diagnostic in report.diagnostics:
            formatter.text(f"    ! {diagnostic}")
    formatter.text(
        f"Compiled {batch.success_count}/{batch.total_count} entries"
        f" ({batch.diagnostic_count} unexpanded includes)"
    )


def main(args: argparse.Namespace) -> int:
    """Compile one entry or the full batch."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        settings = load_cli_settings(args)
    except CompileError as e:
        setup_logging(args)
        formatter.error(e, error_code="config_error")
        return 1

    setup_logging(args, settings)
    if args.keep_going:
        settings.failure_policy = "continue"

    compiler = Compiler(settings, dry_run=args.dry_run)
    names = args.collections or []

    try:
        if args.entry:
            if len(names) > 1:
                raise CompileError("A single entry takes at most one --collection")
            collection = settings.get_collection(names[0]) if names else None
            batch = BatchReport()
            batch.add_report(compiler.compile_entry(Path(args.entry), collection))
        else:
            collections = [settings.get_collection(n) for n in names] if names else None
            batch = compiler.compile_all(collections)
    except BatchAbortedError as e:
        data = {"report": e.report.to_dict()} if e.report is not None else None
        formatter.error(e, error_code="compile_aborted", data=data)
        return 1
    except CompileError as e:
        formatter.error(e, error_code="compile_error")
        return 1

    if args.json:
        formatter.json_output({"dry_run": bool(args.dry_run), **batch.to_dict()})
    else:
        _print_text(formatter, batch, dry_run=args.dry_run)

    if not batch.ok:
        return 1
    if args.strict and batch.diagnostic_count:
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(prog="mdcompile compile")
    register_args(parser)
    sys.exit(main(parser.parse_args()))
