"""Diagnostic codes and data structures.

Problem codes grouped by thousand, plus the diagnostic record that
carries them.

Python 3.11+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Catalog syntax errors (rejected by the PO reader)
        2000-2999: Catalog structure errors (model invariants)
        3000-3999: Configuration errors (rejected before processing)
        4000-4999: Validation findings (catalog linting)
    """

    # Catalog syntax errors (1000-1999)
    INVALID_PO_SYNTAX = 1001

    # Catalog structure errors (2000-2999)
    DUPLICATE_ENTRY = 2001

    # Configuration errors (3000-3999)
    INVALID_FUZZY_THRESHOLD = 3001
    UNSUPPORTED_FORMAT = 3002

    # Validation findings (4000-4999)
    MISSING_TRANSLATION = 4001
    MISSING_PLURAL_TRANSLATION = 4002
    FUZZY_TRANSLATION = 4003
    UNPARSEABLE_CATALOG = 4004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One reportable problem: what, where and how to fix it.

    Attributes:
        code: Problem identifier
        message: Human-readable description
        line: 1-based line in the catalog text, when known
        hint: Suggested fix
        source_path: Catalog or source file concerned
        severity: "error" or "warning"
    """

    code: DiagnosticCode
    message: str
    line: int | None = None
    hint: str | None = None
    source_path: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __post_init__(self) -> None:
        if self.line is not None and self.line < 1:
            msg = f"Invalid Diagnostic: line must be >= 1, got {self.line}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return self.message

    def format_error(self) -> str:
        """Render in the default multi-line style.

        Example output:
            error[INVALID_PO_SYNTAX]: Syntax error in po file (line 12)
              --> locales/es/messages.po:12
              = help: Check the quoting of the record near this line
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
