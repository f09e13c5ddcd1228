"""Locale utilities for catalog directory names and CLDR lookups.

Locale codes name catalog directories, so they are kept exactly as the
caller spells them. Normalization to POSIX form happens only when asking
Babel about a locale.

Python 3.11+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from .core.babel_compat import get_unknown_locale_error, require_babel

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "is_known_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Spell a locale the way Babel and MO headers expect (``_`` separators).

    Args:
        locale_code: Code as written in the catalog path, e.g. "pt-BR"

    Returns:
        The same code with hyphens replaced, e.g. "pt_BR"

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("es")
        'es'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Look up the CLDR data for a locale code. Results are cached.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        The parsed babel.Locale

    Raises:
        BabelImportError: If Babel is not installed
        babel.core.UnknownLocaleError: If CLDR has no such locale
        ValueError: If the code cannot be parsed at all
    """
    require_babel("Locale lookup")
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def is_known_locale(locale_code: str) -> bool:
    """Check whether CLDR knows a locale code.

    Unknown codes are still valid catalog names; callers use this only to
    warn about likely typos such as "sp" for "es".

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        True if Babel can parse the locale, False otherwise

    Raises:
        BabelImportError: If Babel is not installed
    """
    unknown_locale_error = get_unknown_locale_error()
    try:
        get_babel_locale(locale_code)
    except (unknown_locale_error, ValueError):
        return False
    return True
