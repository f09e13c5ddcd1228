"""Shared constants for potsync.

This module provides centralized configuration constants used across
the extraction, catalog and synchronization packages. Placing constants
here avoids circular imports and provides a single source of truth.

Constants are grouped by domain:
- Fuzzy matching: Similarity threshold defaults
- Source collection: Extensions and ignored directories
- Catalog layout: File names and header defaults
- Input limits: Size constraints for scanned sources

Python 3.11+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Fuzzy matching
    "DEFAULT_FUZZY_THRESHOLD",
    # Source collection
    "DEFAULT_EXTRACT_EXTENSIONS",
    "IGNORED_DIRECTORIES",
    # Catalog layout
    "DEFAULT_CATALOG_FILENAME",
    "DEFAULT_LOCALES_TEMPLATE",
    "DEFAULT_TEMPLATE_FILENAME",
    "DEFAULT_PLURAL_COUNT",
    "DEFAULT_PLURAL_FORMS",
    "PROJECT_VERSION_PLACEHOLDER",
    "MANDATORY_HEADERS",
    "TEMPLATE_HEADERS",
    # Flags
    "FLAG_FUZZY",
    "FLAG_OBSOLETE",
    # Input limits
    "MAX_SOURCE_SIZE",
]

# ============================================================================
# FUZZY MATCHING
# ============================================================================

# Minimum normalized similarity for an old msgid to donate its translation.
DEFAULT_FUZZY_THRESHOLD: float = 0.6

# ============================================================================
# SOURCE COLLECTION
# ============================================================================

DEFAULT_EXTRACT_EXTENSIONS: tuple[str, ...] = (
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".mjs",
    ".cjs",
    ".svelte",
    ".vue",
    ".astro",
    ".md",
    ".mdx",
)

# Directory names never descended into while collecting sources.
IGNORED_DIRECTORIES: frozenset[str] = frozenset(
    {"node_modules", ".git", "dist", "build", "coverage"}
)

# ============================================================================
# CATALOG LAYOUT
# ============================================================================

DEFAULT_CATALOG_FILENAME: str = "messages.po"
DEFAULT_TEMPLATE_FILENAME: str = "messages.pot"

# Path template for per-locale catalog directories.
DEFAULT_LOCALES_TEMPLATE: str = "locales/{locale}"

PROJECT_VERSION_PLACEHOLDER: str = "PACKAGE VERSION"

# Germanic two-form rule. Choosing the real rule for a language is left to
# translators; the engine only seeds this default.
DEFAULT_PLURAL_COUNT: int = 2
DEFAULT_PLURAL_FORMS: str = "nplurals=2; plural=(n != 1);"

# Headers every locale catalog must carry, in the order they are seeded.
# "{locale}" in a value is replaced with the catalog's locale code.
MANDATORY_HEADERS: tuple[tuple[str, str], ...] = (
    ("Project-Id-Version", PROJECT_VERSION_PLACEHOLDER),
    ("Language", "{locale}"),
    ("MIME-Version", "1.0"),
    ("Content-Type", "text/plain; charset=UTF-8"),
    ("Content-Transfer-Encoding", "8bit"),
    ("Plural-Forms", DEFAULT_PLURAL_FORMS),
)

# Header block of the extraction template (POT). POT-Creation-Date is only
# emitted when a timestamp is passed explicitly.
TEMPLATE_HEADERS: tuple[tuple[str, str], ...] = (
    ("Project-Id-Version", PROJECT_VERSION_PLACEHOLDER),
    ("Language", ""),
    ("MIME-Version", "1.0"),
    ("Content-Type", "text/plain; charset=UTF-8"),
    ("Content-Transfer-Encoding", "8bit"),
)

# ============================================================================
# FLAGS
# ============================================================================

FLAG_FUZZY: str = "fuzzy"
FLAG_OBSOLETE: str = "obsolete"

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB of text).
# Larger files are skipped by the extractor rather than scanned.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024
