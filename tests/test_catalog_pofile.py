"""Tests for catalog.pofile: the polib-backed PO reader and writer.

Reading covers every record construct, the header record, ``#~`` obsolete
records and the errors polib reports. Writing covers the record layout the
catalog model maps to, obsolete placement and the absence of wrapping.
"""

from __future__ import annotations

import io
import logging

import pytest
from hypothesis import event, given

from potsync.catalog.model import Catalog, CatalogEntry
from potsync.catalog.pofile import parse_catalog, serialize_catalog
from potsync.diagnostics import CatalogSyntaxError, DiagnosticCode, DuplicateEntryError

from tests.strategies import catalogs

HEADER = (
    'msgid ""\n'
    'msgstr ""\n'
    '"Language: es\\n"\n'
    '"Plural-Forms: nplurals=3; plural=(n==1 ? 0 : n==2 ? 1 : 2);\\n"\n'
)

# ============================================================================
# READING
# ============================================================================


class TestReadRecords:
    """Record constructs."""

    def test_simple_entry(self) -> None:
        """msgid/msgstr pairs become entries."""
        catalog = parse_catalog('msgid "Hello"\nmsgstr "Hola"\n')

        entry = catalog.get("", "Hello")
        assert entry is not None
        assert entry.text == "Hola"
        assert not entry.is_plural

    def test_all_comment_kinds(self) -> None:
        """Each comment marker lands in its own field."""
        source = (
            "# Translator note\n"
            "#. Extracted note\n"
            "#: src/a.ts:1 src/b.ts:2\n"
            "#: src/c.ts:3\n"
            "#, c-format, fuzzy\n"
            '#| msgid "Opne"\n'
            'msgctxt "menu"\n'
            'msgid "Open"\n'
            'msgstr "Abrir"\n'
        )

        entry = parse_catalog(source).get("menu", "Open")

        assert entry is not None
        assert entry.translator_comments == ["Translator note"]
        assert entry.extracted_comments == ["Extracted note"]
        assert entry.references == ["src/a.ts:1", "src/b.ts:2", "src/c.ts:3"]
        assert entry.flags == ["c-format", "fuzzy"]
        assert entry.previous_msgid == "Opne"
        assert entry.previous_context is None
        assert entry.is_fuzzy

    def test_reference_without_line_kept(self) -> None:
        """A reference with no line number is kept as written."""
        source = '#: README.md src/a.ts:4\nmsgid "a"\nmsgstr ""\n'

        entry = parse_catalog(source).get("", "a")

        assert entry is not None
        assert entry.references == ["README.md", "src/a.ts:4"]

    def test_plural_entry_with_gap(self) -> None:
        """msgstr[N] builds a list; missing indices are empty."""
        source = (
            'msgid "{n} file"\n'
            'msgid_plural "{n} files"\n'
            'msgstr[0] "{n} archivo"\n'
            'msgstr[2] "{n} archivos"\n'
        )

        entry = parse_catalog(source).get("", "{n} file")

        assert entry is not None
        assert entry.plural_id == "{n} files"
        assert entry.text == ["{n} archivo", "", "{n} archivos"]

    def test_continuation_lines(self) -> None:
        """Quoted lines after a keyword are concatenated."""
        source = 'msgid ""\n"Hello "\n"world"\nmsgstr ""\n"Hola "\n"mundo"\n'

        catalog = parse_catalog('msgid ""\nmsgstr ""\n\n' + source)

        entry = catalog.get("", "Hello world")
        assert entry is not None
        assert entry.text == "Hola mundo"

    def test_escapes_decoded(self) -> None:
        """PO escapes decode in every string."""
        source = 'msgid "Tab\\there \\"q\\" \\\\"\nmsgstr "a\\nb"\n'

        entry = parse_catalog(source).get("", 'Tab\there "q" \\')

        assert entry is not None
        assert entry.text == "a\nb"

    def test_entries_without_blank_separator(self) -> None:
        """A new msgid after a complete record starts a new record."""
        source = 'msgid "a"\nmsgstr "A"\nmsgid "b"\nmsgstr "B"\n'

        assert len(parse_catalog(source)) == 2

    def test_same_msgid_other_context_is_not_duplicate(self) -> None:
        """Context distinguishes otherwise identical records."""
        source = 'msgid "a"\nmsgstr ""\n\nmsgctxt "c"\nmsgid "a"\nmsgstr ""\n'

        assert len(parse_catalog(source)) == 2

    def test_empty_source(self) -> None:
        """An empty catalog has no headers and no entries."""
        catalog = parse_catalog("")

        assert catalog.headers == {}
        assert len(catalog) == 0

    def test_bom_ignored(self) -> None:
        """A leading byte order mark is ignored."""
        catalog = parse_catalog('\ufeffmsgid "a"\nmsgstr "b"\n')

        assert ("", "a") in catalog

    def test_crlf_matches_lf(self) -> None:
        """CRLF catalogs parse exactly like LF catalogs."""
        lf = HEADER + '\n#: a.ts:1\nmsgid "a"\nmsgstr "b"\n'

        assert parse_catalog(lf.replace("\n", "\r\n")) == parse_catalog(lf)


class TestReadObsolete:
    """``#~`` records."""

    def test_obsolete_records(self) -> None:
        """#~ records are read as entries flagged obsolete."""
        source = (
            'msgid "Live"\n'
            'msgstr "Vivo"\n'
            "\n"
            '#~ msgid "Gone"\n'
            '#~ msgstr ""\n'
            '#~ "Ido"\n'
        )

        catalog = parse_catalog(source)

        live = catalog.get("", "Live")
        gone = catalog.get("", "Gone")
        assert live is not None and gone is not None
        assert not live.is_obsolete
        assert gone.is_obsolete
        assert gone.flags == ["obsolete"]
        assert gone.text == "Ido"

    def test_obsolete_keeps_other_flags(self) -> None:
        """Flags of an obsolete record are kept, obsolete marker last."""
        source = '#, fuzzy\n#~ msgid "Gone"\n#~ msgstr "x"\n'

        entry = parse_catalog(source).get("", "Gone")

        assert entry is not None
        assert entry.flags == ["fuzzy", "obsolete"]

    def test_obsolete_shadowed_by_live_entry(self, caplog: pytest.LogCaptureFixture) -> None:
        """An obsolete record for a live msgid is dropped with a warning."""
        source = (
            'msgid "Save"\n'
            'msgstr "Guardar"\n'
            "\n"
            '#~ msgid "Save"\n'
            '#~ msgstr "Salvar"\n'
        )

        with caplog.at_level(logging.WARNING, logger="potsync.catalog.pofile"):
            catalog = parse_catalog(source, source_path="locales/es/messages.po")

        entry = catalog.get("", "Save")
        assert entry is not None
        assert entry.text == "Guardar"
        assert not entry.is_obsolete
        assert len(catalog) == 1
        assert "Save" in caplog.text
        assert "locales/es/messages.po" in caplog.text

    def test_obsolete_in_other_context_is_kept(self) -> None:
        """Only the exact (context, msgid) slot shadows an obsolete record."""
        source = (
            'msgid "Save"\n'
            'msgstr "Guardar"\n'
            "\n"
            '#~ msgctxt "menu"\n'
            '#~ msgid "Save"\n'
            '#~ msgstr "Salvar"\n'
        )

        catalog = parse_catalog(source)

        entry = catalog.get("menu", "Save")
        assert entry is not None
        assert entry.is_obsolete


class TestReadHeader:
    """Header record handling."""

    def test_header_fields(self) -> None:
        """The first empty-msgid record becomes the header."""
        catalog = parse_catalog(HEADER)

        assert catalog.headers["Language"] == "es"
        assert catalog.plural_count == 3
        assert len(catalog) == 0

    def test_header_comments_and_fuzzy(self) -> None:
        """Comments and the fuzzy flag above the header are kept on the catalog."""
        catalog = parse_catalog("# Spanish catalog\n#, fuzzy\n" + HEADER)

        assert catalog.header_comments == ["Spanish catalog"]
        assert catalog.header_fuzzy

    def test_header_without_fuzzy(self) -> None:
        """A header without flags is not fuzzy."""
        assert not parse_catalog(HEADER).header_fuzzy

    def test_header_values_may_contain_colons(self) -> None:
        """Only the first colon separates name from value."""
        source = 'msgid ""\nmsgstr ""\n"Report-Msgid-Bugs-To: https://example.org\\n"\n'

        catalog = parse_catalog(source)

        assert catalog.headers["Report-Msgid-Bugs-To"] == "https://example.org"


# ============================================================================
# READ ERRORS
# ============================================================================


def _syntax_error(source: str) -> CatalogSyntaxError:
    with pytest.raises(CatalogSyntaxError) as exc_info:
        parse_catalog(source, source_path="locales/es/messages.po")
    return exc_info.value


class TestReadErrors:
    """Malformed catalogs raise CatalogSyntaxError."""

    def test_unknown_keyword(self) -> None:
        """An unknown line is reported with its line number."""
        error = _syntax_error('msgid "a"\nmsgstr ""\nmsgfoo "x"\n')

        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.INVALID_PO_SYNTAX
        assert error.line == 3
        assert error.source_path == "locales/es/messages.po"
        assert "locales/es/messages.po:3" in str(error)

    def test_unescaped_quote(self) -> None:
        """An unescaped double quote inside a string is rejected."""
        error = _syntax_error('msgid "a"b"\nmsgstr ""\n')

        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.INVALID_PO_SYNTAX
        assert error.line == 1

    def test_cause_is_kept(self) -> None:
        """The reader's own error is chained."""
        error = _syntax_error('msgfoo "x"\n')

        assert isinstance(error.__cause__, OSError)

    def test_duplicate_entry(self) -> None:
        """A repeated live (context, msgid) is an error at the second record."""
        source = 'msgid "a"\nmsgstr ""\n\nmsgid "a"\nmsgstr "x"\n'

        error = _syntax_error(source)

        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.DUPLICATE_ENTRY
        assert error.line == 4
        assert isinstance(error.__cause__, DuplicateEntryError)


# ============================================================================
# WRITING
# ============================================================================


class TestSerializeCatalog:
    """PO output for catalogs."""

    def test_full_entry_record(self) -> None:
        """Comment lines precede the keywords; keywords keep their gettext order."""
        catalog = Catalog(headers={"Language": "es"})
        catalog.add(
            CatalogEntry(
                msgid="Open",
                context="menu",
                text="Abrir",
                flags=["fuzzy", "c-format"],
                references=["a.ts:1", "b.ts:2"],
                translator_comments=["checked"],
                extracted_comments=["button label"],
                previous_msgid="Opne",
            )
        )

        text = serialize_catalog(catalog)
        record = text.split("\n\n")[1].splitlines()

        assert text.startswith('msgid ""\nmsgstr ""\n"Language: es\\n"\n')
        assert set(record[:3]) == {"# checked", "#. button label", "#: a.ts:1 b.ts:2"}
        assert record[3:] == [
            "#, fuzzy, c-format",
            '#| msgid "Opne"',
            'msgctxt "menu"',
            'msgid "Open"',
            'msgstr "Abrir"',
        ]

    def test_plural_slots(self) -> None:
        """List texts write one msgstr[i] per slot."""
        catalog = Catalog()
        catalog.add(CatalogEntry("f", plural_id="fs", text=["a", "b", "c"]))

        assert 'msgstr[0] "a"\nmsgstr[1] "b"\nmsgstr[2] "c"\n' in serialize_catalog(catalog)

    def test_empty_plural_list(self) -> None:
        """An empty list still writes msgstr[0]."""
        catalog = Catalog()
        catalog.add(CatalogEntry("f", plural_id="fs", text=[]))

        assert serialize_catalog(catalog).endswith('msgid_plural "fs"\nmsgstr[0] ""\n')

    def test_string_text_on_plural_entry(self) -> None:
        """A string text on a plural entry is written as msgstr[0]."""
        catalog = Catalog()
        catalog.add(CatalogEntry("f", plural_id="fs", text="x"))

        assert serialize_catalog(catalog).endswith('msgstr[0] "x"\n')

    def test_entries_sorted_by_context_then_msgid(self) -> None:
        """Entries are written in (context, msgid) order."""
        catalog = Catalog()
        for context, msgid in [("z", "a"), ("", "b"), ("", "a")]:
            catalog.add(CatalogEntry(msgid, context=context))

        msgids = [
            line for line in serialize_catalog(catalog).splitlines() if line.startswith("msgid ")
        ]

        assert msgids == ['msgid ""', 'msgid "a"', 'msgid "b"', 'msgid "a"']

    def test_obsolete_written_last_as_tilde_records(self) -> None:
        """Obsolete entries become #~ records after every live entry."""
        catalog = Catalog()
        catalog.add(CatalogEntry("a-gone", text="ido", flags=["obsolete"]))
        catalog.add(CatalogEntry("b-live", text="vivo"))

        text = serialize_catalog(catalog)

        assert '#~ msgid "a-gone"\n#~ msgstr "ido"\n' in text
        assert text.index('msgid "b-live"') < text.index('#~ msgid "a-gone"')
        assert "obsolete" not in text

    def test_obsolete_round_trip(self) -> None:
        """A written #~ record reads back as the same obsolete entry."""
        catalog = Catalog()
        catalog.add(CatalogEntry("gone", text="ido", flags=["fuzzy", "obsolete"]))

        assert parse_catalog(serialize_catalog(catalog)) == catalog

    def test_header_comments_and_fuzzy(self) -> None:
        """Header comments and the fuzzy flag precede the header record."""
        catalog = Catalog(header_comments=["Title"], header_fuzzy=True)

        text = serialize_catalog(catalog)

        assert text.startswith("# Title\n")
        assert '#, fuzzy\nmsgid ""\nmsgstr ""\n' in text

    def test_bare_header(self) -> None:
        """A catalog with no header data still writes an empty header record."""
        assert serialize_catalog(Catalog()) == 'msgid ""\nmsgstr ""\n'

    def test_no_line_wrapping(self) -> None:
        """Long strings stay on one line."""
        catalog = Catalog()
        catalog.add(CatalogEntry("word " * 40, text="palabra " * 40))

        lines = serialize_catalog(catalog).splitlines()

        assert any(line.startswith('msgid "word word') for line in lines)
        assert not any(line.startswith('"word') for line in lines)

    def test_multiline_text_uses_continuation_lines(self) -> None:
        """Embedded newlines split a string into continuation lines."""
        catalog = Catalog()
        catalog.add(CatalogEntry("a", text="uno\ndos"))

        assert 'msgstr ""\n"uno\\n"\n"dos"\n' in serialize_catalog(catalog)

    def test_ends_with_single_newline(self) -> None:
        """Output ends with exactly one newline."""
        catalog = Catalog()
        catalog.add(CatalogEntry("a"))

        text = serialize_catalog(catalog)

        assert text.endswith('msgstr ""\n')
        assert not text.endswith("\n\n")


# ============================================================================
# ROUND TRIP
# ============================================================================


class TestRoundTrip:
    """Write -> read preserves catalogs."""

    @given(catalogs())
    def test_serialize_then_parse(self, catalog: Catalog) -> None:
        """parse_catalog(serialize_catalog(c)) == c."""
        event(f"entries={min(len(catalog), 5)}")

        assert parse_catalog(serialize_catalog(catalog)) == catalog

    @given(catalogs())
    def test_serialize_is_a_fixed_point(self, catalog: Catalog) -> None:
        """Serializing a parsed catalog reproduces the same text."""
        text = serialize_catalog(catalog)

        assert serialize_catalog(parse_catalog(text)) == text


class TestBabelReadsOutput:
    """Babel's PO reader accepts what the writer produces."""

    @pytest.fixture(autouse=True)
    def _require_babel(self) -> None:
        pytest.importorskip("babel")

    def test_catalog_entries(self) -> None:
        """Contexts, plurals and escapes survive a read by Babel."""
        from babel.messages.pofile import read_po  # noqa: PLC0415

        catalog = Catalog(headers={"Language": "es"})
        catalog.add(CatalogEntry('Say "hi"\n', text='Di "hola"\n'))
        catalog.add(CatalogEntry("Open", context="menu", text="Abrir"))
        catalog.add(CatalogEntry("{n} file", plural_id="{n} files", text=["a", "b"]))
        catalog.add(CatalogEntry("Gone", text="Ido", flags=["obsolete"]))

        babel_catalog = read_po(io.StringIO(serialize_catalog(catalog)))

        quoted = babel_catalog.get('Say "hi"\n')
        assert quoted is not None
        assert quoted.string == 'Di "hola"\n'
        contextual = babel_catalog.get("Open", context="menu")
        assert contextual is not None
        assert contextual.string == "Abrir"
        plural = babel_catalog.get("{n} file")
        assert plural is not None
        assert plural.id == ("{n} file", "{n} files")
        assert plural.string == ("a", "b")
        assert "Gone" in babel_catalog.obsolete
