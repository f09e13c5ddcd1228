"""Optional Babel dependency gate.

potsync installs in two flavours:
    - ``pip install potsync``: extraction, synchronization, JSON compile
    - ``pip install potsync[babel]``: adds MO compile and CLDR locale checks

Babel is imported lazily, only inside the accessors below, so the core
install never touches it. Every Babel-backed feature calls require_babel()
first and fails with the same install hint.

Usage:
    from potsync.core.babel_compat import require_babel

    def compile_mo() -> None:
        require_babel("MO compilation")
        from babel.messages import mofile
        ...

Python 3.11+.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:
    from babel.core import UnknownLocaleError as UnknownLocaleErrorType
    from babel.messages.catalog import Catalog as BabelCatalog

__all__ = [
    "BabelImportError",
    "BabelMofileProtocol",
    "get_babel_catalog_class",
    "get_babel_mofile",
    "get_unknown_locale_error",
    "is_babel_available",
    "require_babel",
]


# pylint: disable=unnecessary-ellipsis
class BabelMofileProtocol(Protocol):
    """The part of babel.messages.mofile that the MO compiler calls."""

    def write_mo(
        self,
        fileobj: BinaryIO,
        catalog: BabelCatalog,
        use_fuzzy: bool = False,
    ) -> None:
        """Write a catalog in GNU MO format."""
        ...
# pylint: enable=unnecessary-ellipsis


@lru_cache(maxsize=1)
def _check_babel_available() -> bool:
    try:
        import babel  # noqa: F401, PLC0415  # pylint: disable=unused-import
    except ImportError:
        return False
    return True


class BabelImportError(ImportError):
    """A Babel-backed feature was used without the babel extra.

    Attributes:
        feature: What needed Babel, as shown in the message
    """

    def __init__(self, feature: str) -> None:
        super().__init__(f"{feature} requires Babel. Install with: pip install potsync[babel]")
        self.feature = feature


def is_babel_available() -> bool:
    """True when Babel can be imported. The check runs once per process."""
    return _check_babel_available()


def require_babel(feature: str) -> None:
    """Raise BabelImportError naming feature unless Babel is installed."""
    if not _check_babel_available():
        raise BabelImportError(feature)


def get_unknown_locale_error() -> type[UnknownLocaleErrorType]:
    """Return babel.core.UnknownLocaleError.

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("Locale lookup")
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    return UnknownLocaleError


def get_babel_catalog_class() -> type[BabelCatalog]:
    """Return babel.messages.catalog.Catalog, the MO compiler's staging type.

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("MO compilation")
    from babel.messages.catalog import Catalog  # noqa: PLC0415

    return Catalog


def get_babel_mofile() -> BabelMofileProtocol:
    """Return the babel.messages.mofile module.

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("MO compilation")
    from babel.messages import mofile  # noqa: PLC0415

    return mofile
