"""Gettext template (POT) writer.

Renders extracted message sets as gettext templates. Output is
deterministic: records are ordered by (context, msgid), lines are never
wrapped, and no timestamp is written unless one is passed in.

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from potsync.constants import TEMPLATE_HEADERS

from .escapes import escape_po_string

if TYPE_CHECKING:
    from potsync.extraction.types import ExtractedMessage

__all__ = ["render_template"]

_CREATION_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _quote(value: str) -> str:
    return f'"{escape_po_string(value)}"'


def _header_record(headers: Iterable[tuple[str, str]]) -> list[str]:
    lines = ['msgid ""', 'msgstr ""']
    lines.extend(_quote(f"{name}: {value}\n") for name, value in headers)
    return lines


def _message_record(message: ExtractedMessage) -> list[str]:
    lines = []
    if message.references:
        lines.append(f"#: {' '.join(message.references)}")
    if message.context:
        lines.append(f"msgctxt {_quote(message.context)}")
    lines.append(f"msgid {_quote(message.msgid)}")
    if message.plural_id:
        lines.append(f"msgid_plural {_quote(message.plural_id)}")
        lines.append('msgstr[0] ""')
        lines.append('msgstr[1] ""')
    else:
        lines.append('msgstr ""')
    return lines


def render_template(
    messages: Iterable[ExtractedMessage],
    *,
    creation_date: datetime | str | None = None,
) -> str:
    """Render extracted messages as a gettext template (POT).

    Args:
        messages: Aggregated messages
        creation_date: Value for POT-Creation-Date; omitted when None

    Returns:
        Template text ending with exactly one newline. Identical input
        always yields byte-identical output.

    Example:
        >>> from potsync.extraction.types import ExtractedMessage, MessageKey
        >>> text = render_template([ExtractedMessage(MessageKey("", "Hi"), ("a.ts:1",))])
        >>> text.splitlines()[-3:]
        ['#: a.ts:1', 'msgid "Hi"', 'msgstr ""']
    """
    headers = list(TEMPLATE_HEADERS)
    if creation_date is not None:
        if isinstance(creation_date, datetime):
            creation_date = creation_date.strftime(_CREATION_DATE_FORMAT)
        headers.insert(1, ("POT-Creation-Date", creation_date))

    records = [_header_record(headers)]
    records.extend(
        _message_record(message) for message in sorted(messages, key=lambda m: m.key)
    )
    return "\n\n".join("\n".join(record) for record in records) + "\n"
