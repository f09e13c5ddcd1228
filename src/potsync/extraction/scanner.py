"""Source scanner for translatable call-sites.

Recognizes four call shapes, tried in this order at every position:

    tnp(context, singular, plural)
    tn(singular, plural)
    tp(context, msgid)
    t(msgid)

The callee must start at a word boundary, so ``i18n.t("x")`` matches while
``_t("x")`` and ``gett("x")`` do not. Arguments are non-empty string
literals quoted with ', " or `; an escaped quote does not close a
literal. Whitespace, newlines included, may surround the parentheses and
commas. Anything after the recognized literals is ignored.

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

import re

from potsync.syntax.escapes import decode_literal
from potsync.syntax.lines import LineOffsetCache

from .types import (
    ContextualMessage,
    ContextualPluralMessage,
    Occurrence,
    PlainMessage,
    PluralMessage,
)

__all__ = ["scan_source"]


def _literal(name: str) -> str:
    quote = f"q_{name}"
    return rf"(?P<{quote}>['\"`])(?P<{name}>(?:\\[\s\S]|(?!(?P={quote}))[^\\])+)(?P={quote})"


_COMMA = r"\s*,\s*"

_CALL_PATTERN = re.compile(
    r"\b(?:"
    rf"tnp\s*\(\s*{_literal('tnp_ctx')}{_COMMA}{_literal('tnp_id')}{_COMMA}{_literal('tnp_pl')}"
    rf"|tn\s*\(\s*{_literal('tn_id')}{_COMMA}{_literal('tn_pl')}"
    rf"|tp\s*\(\s*{_literal('tp_ctx')}{_COMMA}{_literal('tp_id')}"
    rf"|t\s*\(\s*{_literal('t_id')}"
    r")"
)


def scan_source(text: str, source_id: str) -> list[Occurrence]:
    """Find every translatable call-site in a source text.

    Args:
        text: Source text to scan
        source_id: Identifier used in references (usually a relative path)

    Returns:
        Occurrences in source order, one per call-site. Repeated messages
        are not merged here; see aggregate().

    Example:
        >>> [o.msgid for o in scan_source("t('Save'); tp('menu', 'Open')", "a.ts")]
        ['Save', 'Open']
    """
    lines: LineOffsetCache | None = None
    occurrences: list[Occurrence] = []
    for match in _CALL_PATTERN.finditer(text):
        if lines is None:
            lines = LineOffsetCache(text)
        line = lines.get_line(match.start())
        groups = match.groupdict()
        if groups["tnp_id"] is not None:
            occurrences.append(
                ContextualPluralMessage(
                    context=decode_literal(groups["tnp_ctx"]),
                    msgid=decode_literal(groups["tnp_id"]),
                    plural_id=decode_literal(groups["tnp_pl"]),
                    source=source_id,
                    line=line,
                )
            )
        elif groups["tn_id"] is not None:
            occurrences.append(
                PluralMessage(
                    msgid=decode_literal(groups["tn_id"]),
                    plural_id=decode_literal(groups["tn_pl"]),
                    source=source_id,
                    line=line,
                )
            )
        elif groups["tp_id"] is not None:
            occurrences.append(
                ContextualMessage(
                    context=decode_literal(groups["tp_ctx"]),
                    msgid=decode_literal(groups["tp_id"]),
                    source=source_id,
                    line=line,
                )
            )
        else:
            occurrences.append(
                PlainMessage(
                    msgid=decode_literal(groups["t_id"]),
                    source=source_id,
                    line=line,
                )
            )
    return occurrences
