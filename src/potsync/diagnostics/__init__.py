"""Diagnostic system for catalog errors.

Errors raised by potsync carry a Diagnostic with a code, an optional line
and a hint, rendered by DiagnosticFormatter.

Python 3.11+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    CatalogError,
    CatalogSyntaxError,
    ConfigurationError,
    DuplicateEntryError,
)
from .formatter import DiagnosticFormatter, OutputFormat

__all__ = [
    "CatalogError",
    "CatalogSyntaxError",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DuplicateEntryError",
    "OutputFormat",
]
