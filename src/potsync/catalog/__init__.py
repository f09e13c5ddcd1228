"""Per-locale catalog model and its PO file mapping.

The PO reader and writer (polib based) live in potsync.catalog.pofile,
the filesystem adapter in potsync.catalog.store.

Python 3.11+.
"""

from .model import Catalog, CatalogEntry, default_headers, parse_plural_count
from .pofile import parse_catalog, serialize_catalog

__all__ = [
    "Catalog",
    "CatalogEntry",
    "default_headers",
    "parse_catalog",
    "parse_plural_count",
    "serialize_catalog",
]
