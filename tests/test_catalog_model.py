"""Tests for catalog.model: CatalogEntry, Catalog and header helpers."""

from __future__ import annotations

import pytest

from potsync.catalog.model import (
    Catalog,
    CatalogEntry,
    default_headers,
    parse_plural_count,
)
from potsync.diagnostics import DiagnosticCode, DuplicateEntryError


class TestParsePluralCount:
    """Reading nplurals from Plural-Forms."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("nplurals=3; plural=(n%10==1 ? 0 : 2);", 3),
            ("nplurals = 1; plural=0;", 1),
            ("nplurals=6; plural=(n==0 ? 0 : n==1 ? 1 : 5);", 6),
            (None, 2),
            ("", 2),
            ("plural=(n != 1);", 2),
            ("nplurals=0; plural=0;", 2),
        ],
    )
    def test_plural_count(self, header: str | None, expected: int) -> None:
        """Missing, malformed or zero counts fall back to two forms."""
        assert parse_plural_count(header) == expected


class TestDefaultHeaders:
    """Mandatory header block."""

    def test_default_headers_order_and_values(self) -> None:
        """Headers are seeded in a fixed order with the locale filled in."""
        headers = default_headers("pt-BR")

        assert list(headers.items()) == [
            ("Project-Id-Version", "PACKAGE VERSION"),
            ("Language", "pt-BR"),
            ("MIME-Version", "1.0"),
            ("Content-Type", "text/plain; charset=UTF-8"),
            ("Content-Transfer-Encoding", "8bit"),
            ("Plural-Forms", "nplurals=2; plural=(n != 1);"),
        ]


class TestCatalogEntry:
    """Entry flags and text shape helpers."""

    def test_add_flag_once(self) -> None:
        """add_flag reports whether the flags changed."""
        entry = CatalogEntry("Save", flags=["c-format"])

        assert entry.add_flag("fuzzy")
        assert not entry.add_flag("fuzzy")
        assert entry.flags == ["c-format", "fuzzy"]
        assert entry.is_fuzzy

    def test_remove_flag_keeps_others(self) -> None:
        """remove_flag leaves unrelated flags in place."""
        entry = CatalogEntry("Save", flags=["obsolete", "c-format"])

        assert entry.remove_flag("obsolete")
        assert not entry.remove_flag("obsolete")
        assert entry.flags == ["c-format"]
        assert not entry.is_obsolete

    def test_slots_for_both_shapes(self) -> None:
        """slots returns a fresh list for string and list texts."""
        single = CatalogEntry("a", text="A")
        plural = CatalogEntry("a", plural_id="as", text=["A", "As"])

        assert single.slots == ["A"]
        assert plural.slots == ["A", "As"]
        assert plural.slots is not plural.text
        assert plural.is_plural and not single.is_plural


class TestCatalog:
    """Two-level context -> msgid mapping."""

    def test_create_seeds_headers(self) -> None:
        """A new catalog carries the mandatory headers."""
        catalog = Catalog.create("es")

        assert catalog.locale == "es"
        assert catalog.plural_count == 2
        assert len(catalog) == 0

    def test_add_and_get(self) -> None:
        """Entries are found by (context, msgid)."""
        catalog = Catalog()
        entry = catalog.add(CatalogEntry("Open", context="menu"))

        assert catalog.get("menu", "Open") is entry
        assert catalog.get("", "Open") is None
        assert ("menu", "Open") in catalog
        assert ("", "Open") not in catalog
        assert "Open" not in catalog

    def test_duplicate_slot_rejected(self) -> None:
        """Adding a second entry to a slot raises DuplicateEntryError."""
        catalog = Catalog()
        catalog.add(CatalogEntry("Open", context="menu"))

        with pytest.raises(DuplicateEntryError) as exc_info:
            catalog.add(CatalogEntry("Open", context="menu", plural_id="Opens"))

        assert exc_info.value.context == "menu"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.DUPLICATE_ENTRY

    def test_same_msgid_in_two_contexts(self) -> None:
        """Contexts are independent slots."""
        catalog = Catalog()
        catalog.add(CatalogEntry("Open", context="door"))
        catalog.add(CatalogEntry("Open", context="file"))

        assert len(catalog) == 2
        assert list(catalog.bucket("door")) == ["Open"]
        assert catalog.bucket("missing") == {}

    def test_iteration_is_insertion_order(self) -> None:
        """Iteration keeps insertion order; sorted_entries sorts."""
        catalog = Catalog()
        for context, msgid in [("b", "z"), ("", "y"), ("b", "a"), ("", "b")]:
            catalog.add(CatalogEntry(msgid, context=context))

        assert [(e.context, e.msgid) for e in catalog] == [
            ("b", "z"),
            ("b", "a"),
            ("", "y"),
            ("", "b"),
        ]
        assert [(e.context, e.msgid) for e in catalog.sorted_entries()] == [
            ("", "b"),
            ("", "y"),
            ("b", "a"),
            ("b", "z"),
        ]

    def test_locale_none_when_blank(self) -> None:
        """A blank Language header means no locale."""
        assert Catalog(headers={"Language": ""}).locale is None
