"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path

from mdcompile.core.config import CompileSettings, load_settings
from mdcompile.core.stdlib_logging import configure_stdlib_logging
from mdcompile.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get repository root from ``--repo-root`` or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()


def load_cli_settings(args: argparse.Namespace) -> CompileSettings:
    return load_settings(get_repo_root(args))


def setup_logging(args: argparse.Namespace, settings: CompileSettings | None = None) -> None:
    """Configure logging from CLI flags, falling back to configured level."""
    level = "DEBUG" if getattr(args, "verbose", False) else (settings.log_level if settings else "WARNING")
    configure_stdlib_logging(
        level=level,
        log_path=settings.log_file if settings else None,
        json_mode=bool(getattr(args, "json", False)),
    )


__all__ = ["get_repo_root", "load_cli_settings", "setup_logging"]
