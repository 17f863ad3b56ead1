"""Project root resolution.

Resolution priority:
1. ``MDCOMPILE_PROJECT_ROOT`` environment variable
2. Git repository root via ``git rev-parse --show-toplevel``
3. The current working directory
"""
from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from mdcompile.core.errors import ConfigError

logger = logging.getLogger(__name__)

PROJECT_ROOT_ENV = "MDCOMPILE_PROJECT_ROOT"


def resolve_project_root() -> Path:
    """Resolve the project root that relative config paths are anchored to.

    Raises:
        ConfigError: If ``MDCOMPILE_PROJECT_ROOT`` points at a missing path.
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        path = Path(env_root).expanduser().resolve()
        if not path.exists():
            raise ConfigError(f"{PROJECT_ROOT_ENV} points at missing path: {path}")
        return path

    cwd = Path.cwd().resolve()
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=str(cwd),
            text=True,
            capture_output=True,
            check=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.CalledProcessError, subprocess.TimeoutExpired):
        logger.debug("No git repository around %s; using it as project root", cwd)
        return cwd

    root_str = (result.stdout or "").strip()
    if not root_str:
        return cwd
    return Path(root_str).expanduser().resolve()


__all__ = ["PROJECT_ROOT_ENV", "resolve_project_root"]
