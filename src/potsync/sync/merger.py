"""Catalog merge engine: reconciles extracted messages with one catalog.

For each extracted message, in aggregated order:

1. Exact match on (context, msgid): refresh references, clear the fuzzy
   and obsolete flags, update the plural id. Translations are untouched.
2. Otherwise, with fuzzy matching enabled: copy the translation of the
   most similar live entry of the same context, if its similarity reaches
   the threshold, into a new entry flagged fuzzy.
3. Otherwise: create an empty entry (pre-filled with the source text for
   the default locale).

Entries no message referred to are then flagged obsolete, never deleted,
and missing or blank mandatory headers are filled in.

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from potsync.catalog.model import Catalog, CatalogEntry, default_headers
from potsync.constants import DEFAULT_FUZZY_THRESHOLD, FLAG_FUZZY, FLAG_OBSOLETE
from potsync.diagnostics import ConfigurationError, Diagnostic, DiagnosticCode
from potsync.extraction.types import ExtractedMessage

from .similarity import similarity

__all__ = ["CatalogMerger", "MergeResult", "validate_fuzzy_threshold"]

logger = logging.getLogger(__name__)


def validate_fuzzy_threshold(threshold: object) -> float:
    """Check a fuzzy threshold and return it as a float.

    Raises:
        ConfigurationError: If threshold is not a number in [0, 1]
    """
    if (
        isinstance(threshold, bool)
        or not isinstance(threshold, (int, float))
        or math.isnan(threshold)
        or not 0.0 <= threshold <= 1.0
    ):
        raise ConfigurationError(
            Diagnostic(
                code=DiagnosticCode.INVALID_FUZZY_THRESHOLD,
                message=f"Fuzzy threshold must be a number between 0 and 1, got {threshold!r}",
                hint="Use a value such as 0.6; 1 accepts only identical msgids",
            )
        )
    return float(threshold)


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Outcome of merging messages into one catalog.

    Attributes:
        catalog: The merged catalog
        created: New entries, including those seeded by a fuzzy match
        updated: Exact matches whose references, flags or plural id changed
        fuzzy: New entries seeded from a similar entry (subset of created)
        obsoleted: Entries newly flagged obsolete
        catalog_created: True when no catalog existed before
        headers_filled: Mandatory headers that were missing or blank
    """

    catalog: Catalog
    created: int = 0
    updated: int = 0
    fuzzy: int = 0
    obsoleted: int = 0
    catalog_created: bool = False
    headers_filled: int = 0

    @property
    def changed(self) -> bool:
        """True when the catalog differs from what was read."""
        return (
            self.catalog_created
            or self.headers_filled > 0
            or self.created > 0
            or self.updated > 0
            or self.obsoleted > 0
        )


class CatalogMerger:
    """Merges aggregated messages into per-locale catalogs.

    Holds only configuration; every merge() call is independent.

    Example:
        >>> merger = CatalogMerger(fuzzy_threshold=0.5)
        >>> result = merger.merge(None, messages, locale="es")
        >>> result.catalog_created
        True
    """

    __slots__ = ("_fuzzy", "_fuzzy_threshold")

    def __init__(
        self,
        *,
        fuzzy: bool = True,
        fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
    ) -> None:
        """Initialize the merger.

        Args:
            fuzzy: Seed new entries from similar existing translations
            fuzzy_threshold: Minimum similarity for a fuzzy match, in [0, 1]

        Raises:
            ConfigurationError: If fuzzy_threshold is outside [0, 1]
        """
        self._fuzzy = fuzzy
        self._fuzzy_threshold = validate_fuzzy_threshold(fuzzy_threshold)

    @property
    def fuzzy(self) -> bool:
        """Whether fuzzy matching is enabled."""
        return self._fuzzy

    @property
    def fuzzy_threshold(self) -> float:
        """Minimum similarity accepted for a fuzzy match."""
        return self._fuzzy_threshold

    def merge(
        self,
        catalog: Catalog | None,
        messages: Iterable[ExtractedMessage],
        *,
        locale: str,
        is_default_locale: bool = False,
    ) -> MergeResult:
        """Merge messages into a catalog, updating it in place.

        Args:
            catalog: Existing catalog, or None to start a new one
            messages: Aggregated messages, in aggregator order
            locale: Locale of the catalog (used for new catalogs and headers)
            is_default_locale: Pre-fill new entries with their source text

        Returns:
            MergeResult with the merged catalog and change counts
        """
        catalog_created = catalog is None
        if catalog is None:
            catalog = Catalog.create(locale)
        plural_count = catalog.plural_count

        # Fuzzy donors are the live entries present before this pass, so
        # entries created below never seed each other.
        candidates: dict[str, list[CatalogEntry]] = {}
        if self._fuzzy:
            for context, bucket in catalog.entries.items():
                live = [e for e in bucket.values() if not e.is_fuzzy and not e.is_obsolete]
                if live:
                    candidates[context] = live

        visited: set[tuple[str, str]] = set()
        created = updated = fuzzy = 0

        for message in messages:
            slot = (message.context, message.msgid)
            if slot in visited:
                logger.warning(
                    "Message %r (context %r) is used with conflicting plural forms; "
                    "keeping the first",
                    message.msgid,
                    message.context,
                )
                continue
            visited.add(slot)

            entry = catalog.get(*slot)
            if entry is not None:
                if self._refresh(entry, message):
                    updated += 1
                continue

            donor = self._best_candidate(message, candidates.get(message.context, ()))
            if donor is not None:
                text = list(donor.text) if isinstance(donor.text, list) else donor.text
                catalog.add(
                    CatalogEntry(
                        msgid=message.msgid,
                        context=message.context,
                        plural_id=message.plural_id,
                        text=text,
                        flags=[FLAG_FUZZY],
                        references=list(message.references),
                    )
                )
                fuzzy += 1
            else:
                catalog.add(
                    CatalogEntry(
                        msgid=message.msgid,
                        context=message.context,
                        plural_id=message.plural_id,
                        text=self._initial_text(message, plural_count, is_default_locale),
                        references=list(message.references),
                    )
                )
            created += 1

        obsoleted = 0
        for entry in catalog:
            if (entry.context, entry.msgid) in visited:
                continue
            if entry.add_flag(FLAG_OBSOLETE):
                logger.debug("Obsoleted %r (context %r) in %s", entry.msgid, entry.context, locale)
                obsoleted += 1

        headers_filled = self._fill_headers(catalog, locale)

        return MergeResult(
            catalog=catalog,
            created=created,
            updated=updated,
            fuzzy=fuzzy,
            obsoleted=obsoleted,
            catalog_created=catalog_created,
            headers_filled=headers_filled,
        )

    @staticmethod
    def _refresh(entry: CatalogEntry, message: ExtractedMessage) -> bool:
        changed = False
        references = list(message.references)
        if entry.references != references:
            entry.references = references
            changed = True
        cleared_fuzzy = entry.remove_flag(FLAG_FUZZY)
        cleared_obsolete = entry.remove_flag(FLAG_OBSOLETE)
        if cleared_fuzzy or cleared_obsolete:
            changed = True
        if entry.plural_id != message.plural_id:
            entry.plural_id = message.plural_id
            changed = True
        return changed

    def _best_candidate(
        self, message: ExtractedMessage, candidates: Iterable[CatalogEntry]
    ) -> CatalogEntry | None:
        if not self._fuzzy:
            return None
        threshold = self._fuzzy_threshold
        best: CatalogEntry | None = None
        best_score = -1.0
        target = message.msgid
        for candidate in candidates:
            longest = max(len(target), len(candidate.msgid))
            if longest and 1.0 - abs(len(target) - len(candidate.msgid)) / longest < threshold:
                # Length difference alone rules the candidate out
                continue
            score = similarity(target, candidate.msgid)
            if score >= threshold and score > best_score:
                best, best_score = candidate, score
        if best is not None:
            logger.debug(
                "Fuzzy match %r -> %r (similarity %.3f)", best.msgid, target, best_score
            )
        return best

    @staticmethod
    def _initial_text(
        message: ExtractedMessage, plural_count: int, is_default_locale: bool
    ) -> str | list[str]:
        if message.is_plural:
            if is_default_locale:
                return [message.msgid] + [message.plural_id] * (plural_count - 1)
            return [""] * plural_count
        return message.msgid if is_default_locale else ""

    @staticmethod
    def _fill_headers(catalog: Catalog, locale: str) -> int:
        filled = 0
        for name, value in default_headers(locale).items():
            if not catalog.headers.get(name, "").strip():
                catalog.headers[name] = value
                filled += 1
        return filled
