"""Type aliases for the dictionary domain.

Provides semantic type aliases used throughout the dictionary package
and by user code when annotating loader and multiplier call sites.

Python 3.13+.
"""

from collections.abc import Mapping
from typing import TypeAlias

__all__ = [
    "EntryTree",
    "KeyPath",
    "LocaleFilter",
    "LocaleId",
]

LocaleId: TypeAlias = str
"""Locale identifier taken from a dictionary file's base name (e.g., 'de_DE', 'pt-BR')."""

KeyPath: TypeAlias = str
"""Dotted lookup path into a dictionary (e.g., 'section1.subsection2.token3')."""

EntryTree: TypeAlias = Mapping[str, "EntryTree | str"]
"""Nested translation map: one level per key path segment, string leaves."""

LocaleFilter: TypeAlias = str | frozenset[str] | list[str] | tuple[str, ...] | set[str]
"""Whitelist/blacklist value: a single locale id or a collection of ids."""
