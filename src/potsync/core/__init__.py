"""Core utilities shared across the extraction, catalog and sync layers.

Exports:
    BabelImportError: Raised when a Babel-only feature is used without Babel
    is_babel_available: Check whether the optional Babel extra is installed
    require_babel: Fail fast when a feature needs Babel

Python 3.11+.
"""

from .babel_compat import BabelImportError, is_babel_available, require_babel

__all__ = ["BabelImportError", "is_babel_available", "require_babel"]
