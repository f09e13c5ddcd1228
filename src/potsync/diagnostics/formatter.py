"""Rendering of diagnostics for terminals and tools.

Python 3.11+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Diagnostic rendering style."""

    RUST = "rust"
    """Header line, ``-->`` location and ``= help`` hint (default)."""

    JSON = "json"
    """One JSON object per line."""


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turns Diagnostic objects into text.

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        >>> print(formatter.format(diagnostic))
        {"code": "MISSING_TRANSLATION", "code_value": 4001, ...}
    """

    output_format: OutputFormat = OutputFormat.RUST

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured style."""
        match self.output_format:
            case OutputFormat.JSON:
                return json.dumps(self._as_dict(diagnostic), ensure_ascii=False)
            case _:
                return self._as_rust(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics.

        Multi-line renderings are separated by a blank line, JSON objects
        by a single newline.
        """
        separator = "\n" if self.output_format is OutputFormat.JSON else "\n\n"
        return separator.join(map(self.format, diagnostics))

    def _as_rust(self, diagnostic: Diagnostic) -> str:
        lines = [f"{diagnostic.severity}[{diagnostic.code.name}]: {diagnostic.message}"]
        if diagnostic.line is not None and diagnostic.source_path:
            lines.append(f"  --> {diagnostic.source_path}:{diagnostic.line}")
        elif diagnostic.line is not None:
            lines.append(f"  --> line {diagnostic.line}")
        elif diagnostic.source_path:
            lines.append(f"  --> {diagnostic.source_path}")
        if diagnostic.hint:
            lines.append(f"  = help: {diagnostic.hint}")
        return "\n".join(lines)

    def _as_dict(self, diagnostic: Diagnostic) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }
        if diagnostic.line is not None:
            data["line"] = diagnostic.line
        if diagnostic.source_path:
            data["source_path"] = diagnostic.source_path
        if diagnostic.hint:
            data["hint"] = diagnostic.hint
        return data
