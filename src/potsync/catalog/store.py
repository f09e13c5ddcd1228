"""Catalog persistence: the store protocol and its implementations.

Stores only move catalogs between the merge engine and some persistence
medium. Parsing and serialization are delegated to potsync.catalog.pofile.

Python 3.11+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from potsync.constants import DEFAULT_CATALOG_FILENAME, DEFAULT_LOCALES_TEMPLATE

from .pofile import parse_catalog, serialize_catalog

if TYPE_CHECKING:
    from .model import Catalog

__all__ = [
    "CatalogStore",
    "InMemoryCatalogStore",
    "PathCatalogStore",
]

logger = logging.getLogger(__name__)


class CatalogStore(Protocol):
    """Protocol for reading and writing per-locale catalogs.

    This is a Protocol (structural typing) rather than ABC so that any
    object with matching methods works as a store.

    Example:
        >>> class DictStore:
        ...     def read(self, locale: str) -> Catalog | None: ...
        ...     def write(self, locale: str, catalog: Catalog) -> None: ...
        ...     def describe_path(self, locale: str) -> str: ...
    """

    def read(self, locale: str) -> Catalog | None:
        """Read the catalog of a locale.

        Returns:
            The catalog, or None when the locale has no catalog yet

        Raises:
            CatalogSyntaxError: If the stored catalog is malformed
            OSError: If the catalog exists but cannot be read
        """

    def write(self, locale: str, catalog: Catalog) -> None:
        """Persist the catalog of a locale.

        Raises:
            OSError: If the catalog cannot be written
        """

    def describe_path(self, locale: str) -> str:
        """Return a human-readable location for diagnostics."""


def _validate_locale(locale: str) -> None:
    """Reject locale codes that could escape the catalog directory.

    Raises:
        ValueError: If locale is empty or contains path components
    """
    if not locale:
        msg = "Locale code cannot be empty"
        raise ValueError(msg)
    if ".." in locale:
        msg = f"Path traversal sequences not allowed in locale: '{locale}'"
        raise ValueError(msg)
    if "/" in locale or "\\" in locale:
        msg = f"Path separators not allowed in locale: '{locale}'"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PathCatalogStore:
    """File system catalog store using a path template.

    Catalogs live at ``<base_path with {locale} substituted>/<filename>``.

    Security:
        Locale codes containing path separators or ".." are rejected, and
        every resolved path is checked against a fixed root directory.

    Example:
        >>> store = PathCatalogStore("locales/{locale}")
        >>> store.describe_path("es")
        'locales/es/messages.po'

    Attributes:
        base_path: Directory template with a {locale} placeholder
        filename: Catalog file name inside each locale directory
        root_dir: Fixed root for traversal checks. Defaults to the static
            prefix of base_path.
    """

    base_path: str = DEFAULT_LOCALES_TEMPLATE
    filename: str = DEFAULT_CATALOG_FILENAME
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Resolve the root directory and validate the template.

        Raises:
            ValueError: If base_path has no {locale} placeholder or filename
                is not a plain file name
        """
        if "{locale}" not in self.base_path:
            msg = (
                f"base_path must contain '{{locale}}' placeholder for locale substitution, "
                f"got: '{self.base_path}'"
            )
            raise ValueError(msg)
        if not self.filename or Path(self.filename).name != self.filename:
            msg = f"filename must be a plain file name, got: '{self.filename}'"
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            static_prefix = self.base_path.split("{locale}")[0].rstrip("/\\")
            resolved = Path(static_prefix).resolve() if static_prefix else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    def path_for(self, locale: str) -> Path:
        """Resolve the catalog path of a locale.

        Raises:
            ValueError: If the locale is unsafe or the path escapes the root
        """
        _validate_locale(locale)
        locale_dir = Path(self.base_path.replace("{locale}", locale))
        full_path = (locale_dir / self.filename).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = (
                "Path traversal detected: resolved path escapes root directory. "
                f"locale='{locale}'"
            )
            raise ValueError(msg) from None
        return full_path

    def describe_path(self, locale: str) -> str:
        """Return the catalog path of a locale as written in the template."""
        return f"{self.base_path.replace('{locale}', locale)}/{self.filename}"

    def read(self, locale: str) -> Catalog | None:
        """Read and parse the catalog of a locale.

        Returns:
            Parsed catalog, or None if the file does not exist

        Raises:
            ValueError: If the locale is unsafe
            CatalogSyntaxError: If the catalog is malformed
            OSError: If the file exists but cannot be read
        """
        path = self.path_for(locale)
        if not path.is_file():
            logger.debug("No catalog for %s at %s", locale, path)
            return None
        source = path.read_text(encoding="utf-8")
        return parse_catalog(source, source_path=self.describe_path(locale))

    def write(self, locale: str, catalog: Catalog) -> None:
        """Serialize and write the catalog of a locale, creating directories.

        Raises:
            ValueError: If the locale is unsafe
            OSError: If the file cannot be written
        """
        path = self.path_for(locale)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(serialize_catalog(catalog), encoding="utf-8", newline="\n")
        logger.debug("Wrote catalog for %s to %s", locale, path)


@dataclass(slots=True)
class InMemoryCatalogStore:
    """Catalog store keeping serialized catalogs in a dict.

    Catalogs are stored as PO text, so every read parses and every write
    serializes exactly as the file system store does.

    Attributes:
        files: locale -> PO text
        writes: Locales written, in order
    """

    files: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def read(self, locale: str) -> Catalog | None:
        source = self.files.get(locale)
        if source is None:
            return None
        return parse_catalog(source, source_path=self.describe_path(locale))

    def write(self, locale: str, catalog: Catalog) -> None:
        self.files[locale] = serialize_catalog(catalog)
        self.writes.append(locale)

    def describe_path(self, locale: str) -> str:
        return f"<memory>/{locale}"
