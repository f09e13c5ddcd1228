"""Synchronization entry points: extracted messages to per-locale catalogs.

Each locale is read, merged and written independently. A failure in one
locale (malformed catalog, I/O error, unsafe locale code) is recorded in
that locale's result and the remaining locales are still processed.

Python 3.11+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from potsync.constants import DEFAULT_FUZZY_THRESHOLD
from potsync.core.babel_compat import is_babel_available
from potsync.diagnostics import CatalogError
from potsync.enums import SyncStatus
from potsync.extraction.aggregator import extract_messages
from potsync.locale_utils import is_known_locale

from .merger import CatalogMerger, validate_fuzzy_threshold
from .results import LocaleSyncResult, SyncSummary

if TYPE_CHECKING:
    from potsync.catalog.store import CatalogStore
    from potsync.extraction.types import ExtractedMessage, SourceUnit

__all__ = ["synchronize", "synchronize_locale", "synchronize_messages"]

logger = logging.getLogger(__name__)


def synchronize_locale(
    locale: str,
    messages: Iterable[ExtractedMessage],
    store: CatalogStore,
    merger: CatalogMerger,
    *,
    is_default_locale: bool = False,
    dry_run: bool = False,
) -> LocaleSyncResult:
    """Synchronize one locale catalog, capturing failures in the result.

    The catalog is written only when the merge changed it and dry_run is
    False.
    """
    source_path = store.describe_path(locale)
    try:
        catalog = store.read(locale)
        merged = merger.merge(
            catalog, messages, locale=locale, is_default_locale=is_default_locale
        )
        if not merged.changed:
            status = SyncStatus.UNCHANGED
        elif dry_run:
            status = SyncStatus.PENDING
        else:
            store.write(locale, merged.catalog)
            status = SyncStatus.WRITTEN
    except (CatalogError, OSError, ValueError) as error:
        logger.error("Failed to synchronize %s (%s): %s", locale, source_path, error)
        return LocaleSyncResult(
            locale=locale,
            status=SyncStatus.ERROR,
            error=error,
            source_path=source_path,
        )

    logger.info(
        "%s: %s (created=%d, updated=%d, fuzzy=%d, obsoleted=%d)",
        locale,
        status,
        merged.created,
        merged.updated,
        merged.fuzzy,
        merged.obsoleted,
    )
    return LocaleSyncResult(
        locale=locale,
        status=status,
        created=merged.created,
        updated=merged.updated,
        fuzzy=merged.fuzzy,
        obsoleted=merged.obsoleted,
        catalog_created=merged.catalog_created,
        headers_filled=merged.headers_filled,
        source_path=source_path,
    )


def synchronize_messages(
    messages: Iterable[ExtractedMessage],
    locales: Iterable[str],
    store: CatalogStore,
    *,
    default_locale: str | None = None,
    fuzzy: bool = True,
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
    dry_run: bool = False,
) -> SyncSummary:
    """Synchronize an already aggregated message set into locale catalogs.

    Args:
        messages: Aggregated messages (see aggregate())
        locales: Locale codes; duplicates are processed once
        store: Catalog store
        default_locale: Locale whose new entries are pre-filled with the
            source text
        fuzzy: Seed new entries from similar existing translations
        fuzzy_threshold: Minimum similarity for a fuzzy match, in [0, 1]
        dry_run: Compute results without writing any catalog

    Returns:
        SyncSummary with one result per locale

    Raises:
        ConfigurationError: If fuzzy_threshold is outside [0, 1]; raised
            before any catalog is read
    """
    merger = CatalogMerger(fuzzy=fuzzy, fuzzy_threshold=fuzzy_threshold)
    message_set = tuple(messages)
    check_locales = is_babel_available()

    results: list[LocaleSyncResult] = []
    for locale in dict.fromkeys(locales):
        if check_locales and not is_known_locale(locale):
            logger.warning("Locale %r is not a known CLDR locale", locale)
        results.append(
            synchronize_locale(
                locale,
                message_set,
                store,
                merger,
                is_default_locale=locale == default_locale,
                dry_run=dry_run,
            )
        )
    return SyncSummary(results=tuple(results), messages=message_set)


def synchronize(
    sources: Iterable[SourceUnit],
    locales: Iterable[str],
    store: CatalogStore,
    *,
    default_locale: str | None = None,
    fuzzy: bool = True,
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
    dry_run: bool = False,
) -> SyncSummary:
    """Scan sources, aggregate their messages and synchronize locale catalogs.

    Args:
        sources: Source units to scan
        locales: Locale codes to synchronize
        store: Catalog store
        default_locale: Locale pre-filled with the source text
        fuzzy: Enable fuzzy matching
        fuzzy_threshold: Minimum similarity for a fuzzy match, in [0, 1]
        dry_run: Compute results without writing any catalog

    Returns:
        SyncSummary; ``summary.messages`` is the aggregated message set

    Raises:
        ConfigurationError: If fuzzy_threshold is outside [0, 1]

    Example:
        >>> store = PathCatalogStore("locales/{locale}")
        >>> units = [SourceUnit("app.ts", "t('Save')")]
        >>> summary = synchronize(units, ["es"], store, fuzzy_threshold=0.7)
        >>> summary.per_locale["es"].status
        <SyncStatus.WRITTEN: 'written'>
    """
    validate_fuzzy_threshold(fuzzy_threshold)
    return synchronize_messages(
        extract_messages(sources),
        locales,
        store,
        default_locale=default_locale,
        fuzzy=fuzzy,
        fuzzy_threshold=fuzzy_threshold,
        dry_run=dry_run,
    )
