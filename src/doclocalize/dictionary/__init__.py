"""Locale dictionary package.

Provides the full dictionary stack: type aliases, the immutable dictionary
model, format parsers and directory loading.

Submodules:
    types    - PEP 695 type aliases (LocaleId, KeyPath, EntryTree, LocaleFilter)
    model    - LocaleDictionary, DictionarySet
    formats  - DictionaryParser protocol, INI/CSV/JSON parsers, parser registry
    loading  - load_dictionaries, DictionaryLoadResult, LoadSummary

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from doclocalize.dictionary.formats import (
    PARSERS,
    CsvDictionaryParser,
    DictionaryParser,
    IniDictionaryParser,
    JsonDictionaryParser,
    get_parser,
)
from doclocalize.dictionary.loading import (
    DictionaryLoadResult,
    LoadSummary,
    load_dictionaries,
)
from doclocalize.dictionary.model import DictionarySet, LocaleDictionary
from doclocalize.dictionary.types import EntryTree, KeyPath, LocaleFilter, LocaleId
from doclocalize.enums import DictionaryFormat, LoadStatus

__all__ = [
    # Model
    "LocaleDictionary",
    "DictionarySet",
    # Loader
    "load_dictionaries",
    # Parsers
    "DictionaryParser",
    "IniDictionaryParser",
    "CsvDictionaryParser",
    "JsonDictionaryParser",
    "PARSERS",
    "get_parser",
    # Load tracking
    "DictionaryFormat",
    "LoadStatus",
    "DictionaryLoadResult",
    "LoadSummary",
    # Type aliases for user code type annotations
    "EntryTree",
    "KeyPath",
    "LocaleFilter",
    "LocaleId",
]
