"""Catalog exception hierarchy with structured diagnostics.

All exceptions may carry a Diagnostic object for rich error information.

Python 3.11+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = [
    "CatalogError",
    "CatalogSyntaxError",
    "ConfigurationError",
    "DuplicateEntryError",
]


class CatalogError(Exception):
    """Base exception for all potsync errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize CatalogError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class CatalogSyntaxError(CatalogError):
    """Malformed catalog text.

    Raised by the PO reader. A syntax error is fatal for the catalog being
    read; synchronization reports it against that locale only.

    Attributes:
        line: 1-indexed line of the offending record, when known
        source_path: Path of the catalog, when known
    """

    def __init__(
        self,
        message: str,
        *,
        code: DiagnosticCode = DiagnosticCode.INVALID_PO_SYNTAX,
        line: int | None = None,
        source_path: str | None = None,
        hint: str | None = None,
    ) -> None:
        """Initialize CatalogSyntaxError.

        Args:
            message: Human-readable description of the problem
            code: Diagnostic code identifying the problem
            line: Line of the offending record
            source_path: Path of the catalog, when known
            hint: Suggestion for fixing the catalog
        """
        super().__init__(
            Diagnostic(
                code=code,
                message=message,
                line=line,
                hint=hint,
                source_path=source_path,
            )
        )
        self.line = line
        self.source_path = source_path


class DuplicateEntryError(CatalogError):
    """A second entry was added for an occupied (context, msgid) slot.

    Attributes:
        context: Context of the duplicated entry ("" when absent)
        msgid: Message identifier of the duplicated entry
    """

    def __init__(self, context: str, msgid: str) -> None:
        """Initialize DuplicateEntryError.

        Args:
            context: Context of the duplicated entry
            msgid: Message identifier of the duplicated entry
        """
        label = f"'{msgid}' (context '{context}')" if context else f"'{msgid}'"
        super().__init__(
            Diagnostic(
                code=DiagnosticCode.DUPLICATE_ENTRY,
                message=f"Duplicate catalog entry {label}",
                hint="Each context/msgid pair may appear only once per catalog",
            )
        )
        self.context = context
        self.msgid = msgid


class ConfigurationError(CatalogError, ValueError):
    """Invalid configuration, rejected before any processing begins.

    Subclasses ValueError so callers validating arguments generically
    still catch it.
    """
