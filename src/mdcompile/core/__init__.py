"""Core compilation engine for mdcompile.

Public API:
- scan_directives / Directive: find ``@include(...)`` markers
- resolve_reference: turn a directive argument into a document identity
- IncludeExpander / expand_includes: recursive expansion
- Compiler: batch driver over configured collections
"""
from .compiler import Compiler
from .config import CompileSettings, ConfigManager, load_settings
from .directives import Directive, scan_directives
from .entries import EntryCollection
from .errors import BatchAbortedError, CompileError, ConfigError, EntryNotFoundError, OutputWriteError
from .expander import ExpansionContext, ExpansionResult, IncludeExpander, expand_includes
from .loader import ContentLoader
from .output import FlatRule, NestedRule, OutputWriter
from .paths import resolve_reference
from .report import BatchReport, CompileReport, Diagnostic
from .store import DocumentStore, FileSystemStore, MemoryStore

__all__ = [
    "Compiler",
    "CompileSettings",
    "ConfigManager",
    "load_settings",
    "Directive",
    "scan_directives",
    "EntryCollection",
    "BatchAbortedError",
    "CompileError",
    "ConfigError",
    "EntryNotFoundError",
    "OutputWriteError",
    "ExpansionContext",
    "ExpansionResult",
    "IncludeExpander",
    "expand_includes",
    "ContentLoader",
    "FlatRule",
    "NestedRule",
    "OutputWriter",
    "resolve_reference",
    "BatchReport",
    "CompileReport",
    "Diagnostic",
    "DocumentStore",
    "FileSystemStore",
    "MemoryStore",
]
