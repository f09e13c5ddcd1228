"""Message aggregation: occurrences to the canonical message set."""

from __future__ import annotations

from collections.abc import Iterable

from .scanner import scan_source
from .types import ExtractedMessage, MessageKey, Occurrence, SourceUnit

__all__ = ["aggregate", "extract_messages"]


def aggregate(occurrences: Iterable[Occurrence]) -> tuple[ExtractedMessage, ...]:
    """Group occurrences by message key and merge their references.

    The result is ordered by context (empty first), then msgid, then plural
    id, and does not depend on the order of the input.

    Args:
        occurrences: Call-sites from any number of sources

    Returns:
        One ExtractedMessage per distinct MessageKey
    """
    references: dict[MessageKey, set[str]] = {}
    for occurrence in occurrences:
        references.setdefault(occurrence.key, set()).add(occurrence.reference)
    return tuple(
        ExtractedMessage(key=key, references=tuple(refs))
        for key, refs in sorted(references.items(), key=lambda item: item[0])
    )


def extract_messages(units: Iterable[SourceUnit]) -> tuple[ExtractedMessage, ...]:
    """Scan every unit and aggregate the combined occurrences."""
    return aggregate(
        occurrence
        for unit in units
        for occurrence in scan_source(unit.text, unit.source_id)
    )
