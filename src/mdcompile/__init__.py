"""
mdcompile - Markdown include compiler

Expands ``@include(path)`` directives in source documents into fully
resolved output documents, so shared prose fragments are authored once and
assembled into many agent and skill definitions.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
