"""Gettext PO reading and writing through polib.

polib owns the file format: quoting, escapes, continuation lines, the
header record and ``#~`` obsolete records. This module only maps between
polib's POFile/POEntry and the catalog model:

- Contexts, plural ids and previous-message fields use "" (or None) where
  polib uses None.
- Plural translations become list texts, with gaps filled by "".
- The "obsolete" flag of the model is polib's ``obsolete`` attribute, so
  obsolete entries are written as ``#~`` records after the live ones.
- Lines are never wrapped, so rewriting a catalog only changes the lines
  whose content changed.

Python 3.11+.
"""

from __future__ import annotations

import logging
import re

import polib

from potsync.constants import FLAG_FUZZY, FLAG_OBSOLETE
from potsync.diagnostics import CatalogSyntaxError, DiagnosticCode, DuplicateEntryError

from .model import Catalog, CatalogEntry

__all__ = ["parse_catalog", "serialize_catalog"]

logger = logging.getLogger(__name__)

# polib reports the offending line as "(line N)" in its error messages.
_ERROR_LINE_PATTERN = re.compile(r"line (\d+)")

# Written before the first record when polib has no header comment.
_EMPTY_HEADER_COMMENT = "#\n"


def _reference(path: str, line: str | int) -> str:
    return f"{path}:{line}" if line else path


def _text(po_entry: polib.POEntry) -> str | list[str]:
    if po_entry.msgstr_plural:
        slots = {int(index): value for index, value in po_entry.msgstr_plural.items()}
        return [slots.get(index, "") for index in range(max(slots) + 1)]
    if po_entry.msgid_plural:
        return [po_entry.msgstr]
    return po_entry.msgstr


def _header_fuzzy(po_file: polib.POFile) -> bool:
    # A bool before any parse, the header flag list after one.
    flags = po_file.metadata_is_fuzzy
    return flags is True or (isinstance(flags, list) and FLAG_FUZZY in flags)


def _to_entry(po_entry: polib.POEntry) -> CatalogEntry:
    flags = [flag for flag in po_entry.flags if flag]
    if po_entry.obsolete and FLAG_OBSOLETE not in flags:
        flags.append(FLAG_OBSOLETE)
    return CatalogEntry(
        msgid=po_entry.msgid,
        context=po_entry.msgctxt or "",
        plural_id=po_entry.msgid_plural or "",
        text=_text(po_entry),
        flags=flags,
        references=[_reference(path, line) for path, line in po_entry.occurrences],
        translator_comments=po_entry.tcomment.split("\n") if po_entry.tcomment else [],
        extracted_comments=po_entry.comment.split("\n") if po_entry.comment else [],
        previous_context=po_entry.previous_msgctxt,
        previous_msgid=po_entry.previous_msgid,
        previous_plural_id=po_entry.previous_msgid_plural,
    )


def _to_po_entry(entry: CatalogEntry) -> polib.POEntry:
    po_entry = polib.POEntry(
        msgid=entry.msgid,
        msgctxt=entry.context or None,
        msgid_plural=entry.plural_id,
        tcomment="\n".join(entry.translator_comments),
        comment="\n".join(entry.extracted_comments),
        # References are written verbatim; polib joins "path:line" itself.
        occurrences=[(reference, "") for reference in entry.references],
        flags=[flag for flag in entry.flags if flag != FLAG_OBSOLETE],
        obsolete=entry.is_obsolete,
        previous_msgctxt=entry.previous_context,
        previous_msgid=entry.previous_msgid,
        previous_msgid_plural=entry.previous_plural_id,
    )
    match entry.text:
        case list() as slots:
            po_entry.msgstr_plural = dict(enumerate(slots or [""]))
        case str() as text if entry.plural_id:
            po_entry.msgstr_plural = {0: text}
        case str() as text:
            po_entry.msgstr = text
    return po_entry


def _load(source: str, source_path: str | None) -> polib.POFile:
    try:
        return polib.pofile(source, wrapwidth=0)
    except (OSError, ValueError) as error:
        match = _ERROR_LINE_PATTERN.search(str(error))
        raise CatalogSyntaxError(
            str(error),
            line=int(match.group(1)) if match else None,
            source_path=source_path,
            hint="Check the quoting and keywords of the record at this line",
        ) from error


def parse_catalog(source: str, *, source_path: str | None = None) -> Catalog:
    """Parse PO text into a Catalog.

    Live records are added first. An obsolete record whose (context, msgid)
    is already taken by a live record is dropped with a warning, and so is
    a second obsolete record for the same slot.

    Args:
        source: PO text
        source_path: Catalog name used in errors and log messages

    Returns:
        Parsed catalog

    Raises:
        CatalogSyntaxError: If polib rejects the text, or two live records
            share a (context, msgid) slot

    Example:
        >>> catalog = parse_catalog('msgid "Save"\\nmsgstr "Guardar"\\n')
        >>> catalog.get("", "Save").text
        'Guardar'
    """
    source = source.removeprefix("\ufeff")
    if not source.strip():
        return Catalog()

    po_file = _load(source, source_path)
    catalog = Catalog(
        headers=dict(po_file.metadata),
        header_comments=po_file.header.split("\n") if po_file.header else [],
        header_fuzzy=_header_fuzzy(po_file),
    )

    for po_entry in po_file:
        if po_entry.obsolete:
            continue
        try:
            catalog.add(_to_entry(po_entry))
        except DuplicateEntryError as error:
            raise CatalogSyntaxError(
                str(error),
                code=DiagnosticCode.DUPLICATE_ENTRY,
                line=po_entry.linenum or None,
                source_path=source_path,
                hint="Each context/msgid pair may appear only once per catalog",
            ) from error

    for po_entry in po_file.obsolete_entries():
        entry = _to_entry(po_entry)
        if (entry.context, entry.msgid) in catalog:
            logger.warning(
                "Dropping obsolete record %r in %s: the slot is already taken",
                entry.msgid,
                source_path or "<catalog>",
            )
            continue
        catalog.add(entry)
    return catalog


def serialize_catalog(catalog: Catalog) -> str:
    """Serialize a Catalog to PO text.

    Live entries are written in (context, msgid) order, followed by the
    obsolete ones in the same order. Header fields follow polib's standard
    order, then the remaining names sorted. Output is deterministic and
    never wrapped.

    Args:
        catalog: Catalog to write

    Returns:
        PO text ending with exactly one newline
    """
    po_file = polib.POFile(wrapwidth=0)
    po_file.header = "\n".join(catalog.header_comments)
    po_file.metadata = dict(catalog.headers)
    po_file.metadata_is_fuzzy = catalog.header_fuzzy
    for entry in catalog.sorted_entries():
        po_file.append(_to_po_entry(entry))

    text = str(po_file)
    if not catalog.header_comments:
        text = text.removeprefix(_EMPTY_HEADER_COMMENT)
    return text.rstrip("\n") + "\n"
