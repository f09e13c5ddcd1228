"""Catalog linting: untranslated and unreviewed entries.

Python 3.11+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from potsync.catalog.model import Catalog, CatalogEntry
from potsync.catalog.pofile import parse_catalog
from potsync.diagnostics import CatalogError, Diagnostic, DiagnosticCode
from potsync.extraction.files import collect_files, relative_source_id

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "validate_catalog",
    "validate_catalogs",
]

logger = logging.getLogger(__name__)

_DEFAULT_CONTEXT_LABEL = "default"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One finding about one catalog entry.

    Attributes:
        file: Catalog the entry belongs to
        context: Entry context, "default" when the entry has none
        msgid: Entry msgid ("" for catalog-level issues)
        message: Human-readable description
        code: Diagnostic code of the finding
        line: Line in the catalog text, for catalogs that failed to parse
    """

    file: str
    context: str
    msgid: str
    message: str
    code: DiagnosticCode
    line: int | None = None

    def format(self) -> str:
        """Format the issue as a single line.

        Example:
            >>> ValidationIssue(
            ...     "locales/es/messages.po", "default", "Save",
            ...     "Missing translation", DiagnosticCode.MISSING_TRANSLATION,
            ... ).format()
            'locales/es/messages.po [default] Save: Missing translation'
        """
        location = self.file if self.line is None else f"{self.file}:{self.line}"
        if not self.msgid:
            return f"{location}: {self.message}"
        return f"{location} [{self.context}] {self.msgid}: {self.message}"

    def to_diagnostic(self) -> Diagnostic:
        """Convert to a Diagnostic for the rust and json output styles.

        Fuzzy findings are warnings; everything else is an error.
        """
        message = self.message
        if self.msgid:
            message = f"[{self.context}] {self.msgid}: {self.message}"
        return Diagnostic(
            code=self.code,
            message=message,
            line=self.line,
            source_path=self.file,
            severity="warning" if self.code is DiagnosticCode.FUZZY_TRANSLATION else "error",
        )


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Result of validating a set of catalogs.

    Attributes:
        issues: Findings, in catalog then entry order
        files: Catalogs that were checked
        skipped: Inputs that were not collected
    """

    issues: tuple[ValidationIssue, ...] = ()
    files: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        """Check if no issue was found."""
        return not self.issues

    @property
    def issue_count(self) -> int:
        """Number of findings."""
        return len(self.issues)


def _is_blank(text: str) -> bool:
    return not text.strip()


def _entry_issues(
    entry: CatalogEntry, *, source: str, strict: bool
) -> Iterable[ValidationIssue]:
    context = entry.context or _DEFAULT_CONTEXT_LABEL
    slots = entry.slots
    if entry.is_plural:
        if not slots or any(_is_blank(slot) for slot in slots):
            yield ValidationIssue(
                source,
                context,
                entry.msgid,
                "Missing plural translation",
                DiagnosticCode.MISSING_PLURAL_TRANSLATION,
            )
    elif not slots or _is_blank(slots[0]):
        yield ValidationIssue(
            source,
            context,
            entry.msgid,
            "Missing translation",
            DiagnosticCode.MISSING_TRANSLATION,
        )
    if strict and entry.is_fuzzy:
        yield ValidationIssue(
            source,
            context,
            entry.msgid,
            "Fuzzy flag present under --strict mode",
            DiagnosticCode.FUZZY_TRANSLATION,
        )


def validate_catalog(
    catalog: Catalog, *, source: str = "", strict: bool = False
) -> tuple[ValidationIssue, ...]:
    """Find untranslated (and, when strict, fuzzy) entries of a catalog.

    Obsolete entries are skipped. Plural size mismatches are not reported.

    Args:
        catalog: Catalog to check
        source: Catalog name used in issues
        strict: Also report entries flagged fuzzy

    Returns:
        Issues in (context, msgid) order
    """
    issues: list[ValidationIssue] = []
    for entry in catalog.sorted_entries():
        if entry.is_obsolete or not entry.msgid:
            continue
        issues.extend(_entry_issues(entry, source=source, strict=strict))
    return tuple(issues)


def validate_catalogs(
    inputs: Iterable[str] = ("locales",),
    *,
    cwd: str | Path | None = None,
    strict: bool = False,
) -> ValidationReport:
    """Validate every .po catalog under the given files and directories.

    A catalog that cannot be read or parsed is reported as an issue
    rather than aborting the run.
    """
    collected = collect_files(inputs, cwd=cwd, extensions=(".po",))
    issues: list[ValidationIssue] = []
    files: list[str] = []
    for path in collected.files:
        source = relative_source_id(path, cwd)
        files.append(source)
        try:
            catalog = parse_catalog(path.read_text(encoding="utf-8"), source_path=source)
        except (CatalogError, OSError, UnicodeDecodeError) as error:
            logger.warning("Could not parse %s: %s", source, error)
            detail = error.diagnostic if isinstance(error, CatalogError) else None
            issues.append(
                ValidationIssue(
                    source,
                    _DEFAULT_CONTEXT_LABEL,
                    "",
                    f"Catalog could not be parsed: {detail.message if detail else error}",
                    DiagnosticCode.UNPARSEABLE_CATALOG,
                    line=detail.line if detail else None,
                )
            )
            continue
        issues.extend(validate_catalog(catalog, source=source, strict=strict))
    return ValidationReport(
        issues=tuple(issues), files=tuple(files), skipped=collected.skipped
    )
