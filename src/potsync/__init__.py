"""potsync - message extraction and fuzzy gettext catalog synchronization.

Scans source text for translatable call-sites (t, tp, tn, tnp), builds a
canonical message set, and merges it into per-locale gettext catalogs,
carrying translations across small msgid edits with fuzzy matching.

Public API:
    scan_source - Find call-sites in one source text
    aggregate - Merge occurrences into the canonical message set
    synchronize - Scan sources and synchronize locale catalogs
    synchronize_messages - Synchronize an already aggregated message set
    CatalogMerger - Merge engine for a single catalog
    PathCatalogStore - File system catalog store
    parse_catalog / serialize_catalog - PO reader and writer (polib)
    render_template - POT writer
    extract / compile_catalogs / validate_catalogs - File system workflows

Exceptions:
    CatalogError - Base exception class
    CatalogSyntaxError - Malformed catalog text
    DuplicateEntryError - Two entries for one (context, msgid) slot
    ConfigurationError - Invalid options, rejected before processing

Submodules:
    potsync.extraction - Scanner, aggregator and source collection
    potsync.catalog - Catalog model, PO mapping and stores
    potsync.syntax - Source literal escapes and the POT writer
    potsync.sync - Similarity metric, merge engine and results
    potsync.validation - Catalog linting
"""

from .catalog import Catalog, CatalogEntry, parse_catalog, serialize_catalog
from .catalog.store import CatalogStore, InMemoryCatalogStore, PathCatalogStore
from .compiler import compile_catalogs
from .diagnostics import (
    CatalogError,
    CatalogSyntaxError,
    ConfigurationError,
    DuplicateEntryError,
)
from .enums import CompileFormat, MessageShape, SyncStatus
from .extraction import (
    ExtractedMessage,
    MessageKey,
    SourceUnit,
    aggregate,
    extract_messages,
    scan_source,
)
from .sync import (
    CatalogMerger,
    LocaleSyncResult,
    SyncSummary,
    similarity,
    synchronize,
    synchronize_messages,
)
from .syntax import render_template
from .validation import validate_catalog, validate_catalogs
from .workflow import ExtractResult, extract

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("potsync")
except PackageNotFoundError:
    # Development mode: package not installed
    __version__ = "0.0.0+dev"

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CatalogError",
    "CatalogMerger",
    "CatalogStore",
    "CatalogSyntaxError",
    "CompileFormat",
    "ConfigurationError",
    "DuplicateEntryError",
    "ExtractResult",
    "ExtractedMessage",
    "InMemoryCatalogStore",
    "LocaleSyncResult",
    "MessageKey",
    "MessageShape",
    "PathCatalogStore",
    "SourceUnit",
    "SyncStatus",
    "SyncSummary",
    "__version__",
    "aggregate",
    "compile_catalogs",
    "extract",
    "extract_messages",
    "parse_catalog",
    "render_template",
    "scan_source",
    "serialize_catalog",
    "similarity",
    "synchronize",
    "synchronize_messages",
    "validate_catalog",
    "validate_catalogs",
]
