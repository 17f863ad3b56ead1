"""
mdcompile list command.

SUMMARY: List entry documents per collection and where they compile to
"""
from __future__ import annotations

import argparse
import sys

from mdcompile.cli import OutputFormatter, add_standard_flags, load_cli_settings, setup_logging
from mdcompile.core.compiler import Compiler
from mdcompile.core.errors import CompileError

SUMMARY = "List entry documents and their output destinations"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--collection",
        "-c",
        action="append",
        dest="collections",
        metavar="NAME",
        help="Only list this collection (repeatable)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        settings = load_cli_settings(args)
        setup_logging(args, settings)
        names = args.collections or []
        collections = [settings.get_collection(n) for n in names] if names else settings.collections
    except CompileError as e:
        formatter.error(e, error_code="config_error")
        return 1

    compiler = Compiler(settings, dry_run=True)
    payload = []
    try:
        for collection in collections:
            rule = collection.rule
            entries = [
                {"entry": str(entry), "destination": str(rule.destination(entry))}
                for entry in collection.discover(compiler.store)
            ]
            payload.append({**collection.to_dict(), "entries": entries})
    except CompileError as e:
        formatter.error(e, error_code="discovery_error")
        return 1

    if args.json:
        formatter.json_output({"collections": payload})
        return 0

    for item in payload:
        formatter.text(f"{item['name']} ({item['kind']}): {item['source']} -> {item['output']}")
        if not item["entries"]:
            formatter.text("  (no entries)")
        for entry in item["entries"]:
            formatter.text(f"  {entry['entry']} -> {entry['destination']}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(prog="mdcompile list")
    register_args(parser)
    sys.exit(main(parser.parse_args()))
