"""Hypothesis strategies for potsync property-based testing.

Usage:
    from tests.strategies import catalogs, extracted_messages
    from tests.strategies.catalogs import source_literals
"""

from .catalogs import (
    catalog_entries,
    catalogs,
    comment_texts,
    contexts,
    encode_literal,
    extracted_messages,
    flag_lists,
    header_maps,
    message_texts,
    msgids,
    reference_lists,
    source_literals,
)

__all__ = [
    "catalog_entries",
    "catalogs",
    "comment_texts",
    "contexts",
    "encode_literal",
    "extracted_messages",
    "flag_lists",
    "header_maps",
    "message_texts",
    "msgids",
    "reference_lists",
    "source_literals",
]
