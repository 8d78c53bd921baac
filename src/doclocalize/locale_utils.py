"""Locale utilities for dictionary identifiers.

Dictionary files are named after their locale (de_DE.ini, pt-BR.ini).
Identifiers are kept verbatim for ordering and output paths; these helpers
map them onto Babel locales for validation and display.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "locale_display_name",
    "normalize_locale",
    "try_babel_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (pt-BR), while Babel/POSIX uses underscores (pt_BR).
    Only used for Babel lookups; dictionary ids are never rewritten.

    Args:
        locale_code: BCP-47 or POSIX locale code (e.g., "pt-BR", "de_DE")

    Returns:
        POSIX-formatted locale code (e.g., "pt_BR", "de_DE")

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("de_DE")  # Already normalized
        'de_DE'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def try_babel_locale(locale_code: str) -> Locale | None:
    """Get a Babel Locale, or None if Babel does not recognize the code.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object, or None for unknown or malformed codes
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        return get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError, TypeError):
        return None


def locale_display_name(locale_code: str) -> str:
    """Return the locale's name in its own language.

    Falls back to the raw code when Babel does not know the locale.

    Example:
        >>> locale_display_name("de_DE")
        'Deutsch (Deutschland)'
        >>> locale_display_name("xx_custom")
        'xx_custom'
    """
    locale = try_babel_locale(locale_code)
    if locale is None:
        return locale_code
    return locale.get_display_name() or locale_code
