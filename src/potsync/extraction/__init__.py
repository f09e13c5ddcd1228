"""Message extraction: scanning sources and aggregating messages.

Python 3.11+.
"""

from .aggregator import aggregate, extract_messages
from .files import CollectedFiles, collect_files, read_sources
from .scanner import scan_source
from .types import (
    ContextualMessage,
    ContextualPluralMessage,
    ExtractedMessage,
    MessageKey,
    Occurrence,
    PlainMessage,
    PluralMessage,
    SourceUnit,
)

__all__ = [
    "CollectedFiles",
    "ContextualMessage",
    "ContextualPluralMessage",
    "ExtractedMessage",
    "MessageKey",
    "Occurrence",
    "PlainMessage",
    "PluralMessage",
    "SourceUnit",
    "aggregate",
    "collect_files",
    "extract_messages",
    "read_sources",
    "scan_source",
]
