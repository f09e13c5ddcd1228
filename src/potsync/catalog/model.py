"""Catalog data model: per-locale translation entries and headers.

A Catalog is a two-level mapping context -> msgid -> CatalogEntry.
Iteration follows insertion order; the serializer applies the sorted
order used on disk.

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from potsync.constants import (
    DEFAULT_PLURAL_COUNT,
    FLAG_FUZZY,
    FLAG_OBSOLETE,
    MANDATORY_HEADERS,
)
from potsync.diagnostics import DuplicateEntryError

__all__ = [
    "Catalog",
    "CatalogEntry",
    "default_headers",
    "parse_plural_count",
]

_NPLURALS_PATTERN = re.compile(r"nplurals\s*=\s*(\d+)")


def parse_plural_count(plural_forms: str | None) -> int:
    """Read nplurals from a Plural-Forms header value.

    Args:
        plural_forms: Header value, e.g. "nplurals=3; plural=(n==1 ? 0 : 1);"

    Returns:
        Declared number of plural forms, or DEFAULT_PLURAL_COUNT when the
        header is missing, malformed, or declares zero forms.

    Example:
        >>> parse_plural_count("nplurals=3; plural=(n%10==1 ? 0 : 2);")
        3
        >>> parse_plural_count(None)
        2
    """
    if not plural_forms:
        return DEFAULT_PLURAL_COUNT
    match = _NPLURALS_PATTERN.search(plural_forms)
    if match is None:
        return DEFAULT_PLURAL_COUNT
    count = int(match.group(1))
    return count if count > 0 else DEFAULT_PLURAL_COUNT


def default_headers(locale: str) -> dict[str, str]:
    """Build the mandatory header block for a new catalog."""
    return {name: value.format(locale=locale) for name, value in MANDATORY_HEADERS}


@dataclass(slots=True)
class CatalogEntry:
    """One translation record of a locale catalog.

    Attributes:
        msgid: Source-language message identifier
        context: Disambiguating context ("" when absent)
        plural_id: Source plural form ("" for non-plural entries)
        text: Translation; a string for non-plural entries, one string per
            plural slot for plural entries
        flags: Flag words in file order ("fuzzy", "obsolete", "c-format", ...)
        references: Source locations ("path:line")
        translator_comments: "# " comment lines
        extracted_comments: "#. " comment lines
        previous_context: msgctxt before the last msgid change, if recorded
        previous_msgid: msgid before the last change, if recorded
        previous_plural_id: msgid_plural before the last change, if recorded
    """

    msgid: str
    context: str = ""
    plural_id: str = ""
    text: str | list[str] = ""
    flags: list[str] = field(default_factory=list)
    references: list[str] = field(default_factory=list)
    translator_comments: list[str] = field(default_factory=list)
    extracted_comments: list[str] = field(default_factory=list)
    previous_context: str | None = None
    previous_msgid: str | None = None
    previous_plural_id: str | None = None

    @property
    def is_plural(self) -> bool:
        """True when the entry carries a plural identifier."""
        return bool(self.plural_id)

    @property
    def is_fuzzy(self) -> bool:
        """True when the translation is flagged for review."""
        return FLAG_FUZZY in self.flags

    @property
    def is_obsolete(self) -> bool:
        """True when the message no longer appears in the sources."""
        return FLAG_OBSOLETE in self.flags

    @property
    def slots(self) -> list[str]:
        """Translation text as a list of slots, whatever its stored shape."""
        if isinstance(self.text, list):
            return list(self.text)
        return [self.text]

    def add_flag(self, flag: str) -> bool:
        """Append a flag if missing. Returns True when the flags changed."""
        if flag in self.flags:
            return False
        self.flags.append(flag)
        return True

    def remove_flag(self, flag: str) -> bool:
        """Remove every occurrence of a flag. Returns True when the flags changed."""
        if flag not in self.flags:
            return False
        self.flags = [existing for existing in self.flags if existing != flag]
        return True


@dataclass(slots=True)
class Catalog:
    """Per-locale translation catalog.

    Attributes:
        headers: Header fields in file order
        entries: context -> msgid -> entry
        header_comments: Comment lines above the header record
        header_fuzzy: True when the header record is flagged fuzzy
    """

    headers: dict[str, str] = field(default_factory=dict)
    entries: dict[str, dict[str, CatalogEntry]] = field(default_factory=dict)
    header_comments: list[str] = field(default_factory=list)
    header_fuzzy: bool = False

    @classmethod
    def create(cls, locale: str) -> Catalog:
        """Create an empty catalog seeded with the mandatory headers.

        Example:
            >>> Catalog.create("es").headers["Language"]
            'es'
        """
        return cls(headers=default_headers(locale))

    @property
    def locale(self) -> str | None:
        """Value of the Language header, if set."""
        return self.headers.get("Language") or None

    @property
    def plural_count(self) -> int:
        """Number of plural forms declared by the Plural-Forms header."""
        return parse_plural_count(self.headers.get("Plural-Forms"))

    def get(self, context: str, msgid: str) -> CatalogEntry | None:
        """Look up the entry occupying a (context, msgid) slot."""
        bucket = self.entries.get(context)
        if bucket is None:
            return None
        return bucket.get(msgid)

    def bucket(self, context: str) -> dict[str, CatalogEntry]:
        """Entries of one context, keyed by msgid (empty if none)."""
        return self.entries.get(context, {})

    def add(self, entry: CatalogEntry) -> CatalogEntry:
        """Insert an entry into its (context, msgid) slot.

        Raises:
            DuplicateEntryError: If the slot is already occupied
        """
        bucket = self.entries.setdefault(entry.context, {})
        if entry.msgid in bucket:
            raise DuplicateEntryError(entry.context, entry.msgid)
        bucket[entry.msgid] = entry
        return entry

    def __iter__(self) -> Iterator[CatalogEntry]:
        """Iterate entries in insertion order, context by context."""
        for bucket in self.entries.values():
            yield from bucket.values()

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self.entries.values())

    def __contains__(self, key: object) -> bool:
        """Support ``(context, msgid) in catalog``."""
        match key:
            case (str() as context, str() as msgid):
                return self.get(context, msgid) is not None
            case _:
                return False

    def sorted_entries(self) -> list[CatalogEntry]:
        """Entries ordered by (context, msgid), as written to disk."""
        return sorted(self, key=lambda entry: (entry.context, entry.msgid))
