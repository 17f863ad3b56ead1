from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from mdcompile.core.utils.io import ensure_directory

_INSTALLED_HANDLERS: list[logging.Handler] = []

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_stdlib_logging(
    *,
    level: str = "WARNING",
    log_path: Optional[Path] = None,
    json_mode: bool = False,
) -> None:
    """Configure Python stdlib logging for a CLI run.

    Installs a stderr handler (unless ``json_mode``) and, when ``log_path`` is
    given, a file handler. Calling again replaces the handlers installed by
    the previous call and leaves any others alone.
    """
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    for handler in _INSTALLED_HANDLERS:
        root.removeHandler(handler)
        handler.close()
    _INSTALLED_HANDLERS.clear()

    if json_mode:
        # Keep stdout/stderr machine readable; lastResort would print warnings.
        handler: logging.Handler = logging.NullHandler()
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(handler)
    _INSTALLED_HANDLERS.append(handler)

    if log_path is not None:
        resolved = Path(log_path).resolve()
        ensure_directory(resolved.parent)
        fh = logging.FileHandler(resolved, encoding="utf-8")
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(fh)
        _INSTALLED_HANDLERS.append(fh)


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handlers installed by this module."""
    root = logging.getLogger()
    for handler in _INSTALLED_HANDLERS:
        root.removeHandler(handler)
        handler.close()
    _INSTALLED_HANDLERS.clear()


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
