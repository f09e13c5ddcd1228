"""Catalog validation.

Python 3.11+.
"""

from .catalog import (
    ValidationIssue,
    ValidationReport,
    validate_catalog,
    validate_catalogs,
)

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "validate_catalog",
    "validate_catalogs",
]
