"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for repository root override."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override repository root path",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Compile without writing any output files",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def add_strict_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when any include was left unexpanded",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags shared by every command (--json, --repo-root, --verbose)."""
    add_json_flag(parser)
    add_repo_root_flag(parser)
    add_verbose_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_strict_flag",
    "add_standard_flags",
]
