"""Shared helpers for mdcompile tests."""
