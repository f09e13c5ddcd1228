"""Fuzzy catalog synchronization.

Python 3.11+.
"""

from .merger import CatalogMerger, MergeResult, validate_fuzzy_threshold
from .orchestrator import synchronize, synchronize_locale, synchronize_messages
from .results import LocaleSyncResult, SyncSummary
from .similarity import levenshtein_distance, similarity

__all__ = [
    "CatalogMerger",
    "LocaleSyncResult",
    "MergeResult",
    "SyncSummary",
    "levenshtein_distance",
    "similarity",
    "synchronize",
    "synchronize_locale",
    "synchronize_messages",
    "validate_fuzzy_threshold",
]
