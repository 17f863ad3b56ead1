import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'mdcompile' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from mdcompile.core.stdlib_logging import reset_stdlib_logging_for_tests
from mdcompile.core.store import MemoryStore


@pytest.fixture(autouse=True)
def _clean_mdcompile_env(monkeypatch):
    """Config overrides from the developer's shell must not leak into tests."""
    for key in list(os.environ):
        if key.startswith("MDCOMPILE_"):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """
    Isolated project root for tests.

    Points MDCOMPILE_PROJECT_ROOT at tmp_path and changes into it, so config
    and relative collection paths resolve inside the temporary project.
    """
    monkeypatch.setenv("MDCOMPILE_PROJECT_ROOT", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def memory_store():
    return MemoryStore()
