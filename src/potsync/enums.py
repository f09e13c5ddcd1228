"""Enumerations for potsync type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.11+.
"""

from enum import StrEnum


class MessageShape(StrEnum):
    """Shape of a translatable call-site.

    StrEnum provides automatic string conversion: str(MessageShape.PLAIN) == "plain"
    """

    PLAIN = "plain"
    """t('msgid')"""

    CONTEXTUAL = "contextual"
    """tp('context', 'msgid')"""

    PLURAL = "plural"
    """tn('msgid', 'plural')"""

    CONTEXTUAL_PLURAL = "contextual_plural"
    """tnp('context', 'msgid', 'plural')"""


class SyncStatus(StrEnum):
    """Outcome of synchronizing a single locale catalog.

    StrEnum provides automatic string conversion: str(SyncStatus.WRITTEN) == "written"
    """

    WRITTEN = "written"
    """Catalog changed and was persisted."""

    UNCHANGED = "unchanged"
    """Nothing changed; the catalog on disk was left untouched."""

    PENDING = "pending"
    """Catalog changed but was not persisted (dry run)."""

    ERROR = "error"
    """Reading, merging or writing the catalog failed."""


class CompileFormat(StrEnum):
    """Runtime artifact format produced by the compiler.

    StrEnum provides automatic string conversion: str(CompileFormat.JSON) == "json"
    """

    JSON = "json"
    """JSON translation catalog."""

    MO = "mo"
    """GNU gettext binary catalog."""


__all__ = [
    "CompileFormat",
    "MessageShape",
    "SyncStatus",
]
