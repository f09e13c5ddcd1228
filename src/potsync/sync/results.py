"""Synchronization result types.

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from potsync.enums import SyncStatus
from potsync.extraction.types import ExtractedMessage

__all__ = ["LocaleSyncResult", "SyncSummary"]


@dataclass(frozen=True, slots=True)
class LocaleSyncResult:
    """Result of synchronizing a single locale catalog.

    Attributes:
        locale: Locale code
        status: Outcome (written, unchanged, pending, error)
        created: New entries, fuzzy-seeded ones included
        updated: Existing entries whose references, flags or plural id changed
        fuzzy: New entries seeded from a similar translation
        obsoleted: Entries newly flagged obsolete
        catalog_created: True when the locale had no catalog before
        headers_filled: Mandatory headers that were missing or blank
        error: Exception if status is ERROR, None otherwise
        source_path: Human-readable catalog location
    """

    locale: str
    status: SyncStatus
    created: int = 0
    updated: int = 0
    fuzzy: int = 0
    obsoleted: int = 0
    catalog_created: bool = False
    headers_filled: int = 0
    error: Exception | None = None
    source_path: str | None = None

    @property
    def is_error(self) -> bool:
        """Check if synchronizing this locale failed."""
        return self.status == SyncStatus.ERROR

    @property
    def changed(self) -> bool:
        """Check if the catalog was (or, in a dry run, would be) rewritten."""
        return self.status in (SyncStatus.WRITTEN, SyncStatus.PENDING)


@dataclass(frozen=True, slots=True)
class SyncSummary:
    """Immutable aggregate of a synchronization run.

    Attributes:
        results: Per-locale results, in the order locales were given
        messages: Aggregated messages the catalogs were synchronized against

    Example:
        >>> summary = synchronize(units, ["es", "fr"], store)
        >>> summary.per_locale["es"].created
        3
        >>> for result in summary.get_errors():
        ...     print(f"{result.source_path}: {result.error}")
    """

    results: tuple[LocaleSyncResult, ...]
    messages: tuple[ExtractedMessage, ...] = ()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"SyncSummary(locales={len(self.results)}, "
            f"messages={len(self.messages)}, "
            f"created={self.created}, "
            f"updated={self.updated}, "
            f"errors={self.errors})"
        )

    @property
    def per_locale(self) -> Mapping[str, LocaleSyncResult]:
        """Results keyed by locale code."""
        return {result.locale: result for result in self.results}

    @property
    def created(self) -> int:
        """Total entries created across all locales."""
        return sum(r.created for r in self.results)

    @property
    def updated(self) -> int:
        """Total entries updated across all locales."""
        return sum(r.updated for r in self.results)

    @property
    def errors(self) -> int:
        """Number of locales that failed."""
        return sum(1 for r in self.results if r.is_error)

    def get_errors(self) -> tuple[LocaleSyncResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_by_locale(self, locale: str) -> LocaleSyncResult | None:
        """Get the result for a specific locale."""
        return self.per_locale.get(locale)

    @property
    def has_errors(self) -> bool:
        """Check if any locale failed."""
        return self.errors > 0

    @property
    def all_successful(self) -> bool:
        """Check if every locale was synchronized without error."""
        return self.errors == 0
