"""Message types produced by the extraction pipeline.

Occurrences are a closed set of frozen variants, one per call shape.
Consumers narrow them with ``match`` instead of probing optional fields:

    match occurrence:
        case PluralMessage(msgid=msgid, plural_id=plural):
            ...
        case PlainMessage(msgid=msgid):
            ...

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from potsync.enums import MessageShape

__all__ = [
    "ContextualMessage",
    "ContextualPluralMessage",
    "ExtractedMessage",
    "MessageKey",
    "Occurrence",
    "PlainMessage",
    "PluralMessage",
    "SourceUnit",
]


@dataclass(frozen=True, slots=True, order=True)
class MessageKey:
    """Identity of a message: (context, msgid, plural_id).

    Absent context and plural id are empty strings, so keys without a
    context sort before keys with one.

    Example:
        >>> sorted([MessageKey("menu", "Open"), MessageKey("", "Save")])[0].msgid
        'Save'
    """

    context: str
    msgid: str
    plural_id: str = ""

    @property
    def is_plural(self) -> bool:
        """True when the message has a plural form."""
        return bool(self.plural_id)


def _reference(source: str, line: int) -> str:
    return f"{source}:{line}"


@dataclass(frozen=True, slots=True)
class PlainMessage:
    """``t(msgid)`` call-site."""

    msgid: str
    source: str
    line: int

    @property
    def key(self) -> MessageKey:
        return MessageKey("", self.msgid)

    @property
    def shape(self) -> MessageShape:
        return MessageShape.PLAIN

    @property
    def reference(self) -> str:
        return _reference(self.source, self.line)


@dataclass(frozen=True, slots=True)
class ContextualMessage:
    """``tp(context, msgid)`` call-site."""

    context: str
    msgid: str
    source: str
    line: int

    @property
    def key(self) -> MessageKey:
        return MessageKey(self.context, self.msgid)

    @property
    def shape(self) -> MessageShape:
        return MessageShape.CONTEXTUAL

    @property
    def reference(self) -> str:
        return _reference(self.source, self.line)


@dataclass(frozen=True, slots=True)
class PluralMessage:
    """``tn(msgid, plural)`` call-site."""

    msgid: str
    plural_id: str
    source: str
    line: int

    @property
    def key(self) -> MessageKey:
        return MessageKey("", self.msgid, self.plural_id)

    @property
    def shape(self) -> MessageShape:
        return MessageShape.PLURAL

    @property
    def reference(self) -> str:
        return _reference(self.source, self.line)


@dataclass(frozen=True, slots=True)
class ContextualPluralMessage:
    """``tnp(context, msgid, plural)`` call-site."""

    context: str
    msgid: str
    plural_id: str
    source: str
    line: int

    @property
    def key(self) -> MessageKey:
        return MessageKey(self.context, self.msgid, self.plural_id)

    @property
    def shape(self) -> MessageShape:
        return MessageShape.CONTEXTUAL_PLURAL

    @property
    def reference(self) -> str:
        return _reference(self.source, self.line)


Occurrence: TypeAlias = PlainMessage | ContextualMessage | PluralMessage | ContextualPluralMessage


@dataclass(frozen=True, slots=True)
class ExtractedMessage:
    """Canonical message with every place it is used.

    References are deduplicated and sorted on construction.

    Attributes:
        key: Message identity
        references: "source:line" locations, sorted and unique
    """

    key: MessageKey
    references: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Normalize references to a sorted, duplicate-free tuple."""
        object.__setattr__(self, "references", tuple(sorted(set(self.references))))

    @property
    def msgid(self) -> str:
        return self.key.msgid

    @property
    def context(self) -> str:
        return self.key.context

    @property
    def plural_id(self) -> str:
        return self.key.plural_id

    @property
    def is_plural(self) -> bool:
        return self.key.is_plural


@dataclass(frozen=True, slots=True)
class SourceUnit:
    """One scannable text with the identifier used in references.

    Attributes:
        source_id: Identifier written into references (usually a relative path)
        text: Full source text
    """

    source_id: str
    text: str
