"""CLI output formatting.

Every command prints through :class:`OutputFormatter` so ``--json`` gives
machine-readable output on stdout (results) and stderr (errors).
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional


class OutputFormatter:
    """Print command results as text or JSON."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Report a failed command on stderr.

        Args:
            error: The exception that occurred
            message: Optional human-readable message (defaults to str(error))
            error_code: Error code for JSON output
            data: Extra fields for the JSON error object
        """
        msg = message or str(error)
        if self.json_mode:
            payload = {"error": error_code, "message": msg, **(data or {})}
            print(json.dumps(payload, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        """Print ``message`` unless in JSON mode."""
        if not self.json_mode:
            print(message)


__all__ = ["OutputFormatter"]
