"""
mdcompile CLI package.

Commands live in the commands/ subfolder and are discovered by the
dispatcher. Shared pieces:
- _output: text/JSON output
- _args: common argument registration
- _utils: settings loading and logging setup
"""
from ._output import OutputFormatter
from ._args import (
    add_json_flag,
    add_repo_root_flag,
    add_dry_run_flag,
    add_verbose_flag,
    add_strict_flag,
    add_standard_flags,
)
from ._utils import get_repo_root, load_cli_settings, setup_logging

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_strict_flag",
    "add_standard_flags",
    "get_repo_root",
    "load_cli_settings",
    "setup_logging",
]
