"""Top-level mdcompile commands (auto-discovered by the dispatcher)."""
