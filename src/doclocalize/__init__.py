"""doclocalize - build-time document localization.

Multiplies a source document into one copy per locale, replacing tokens
such as ``R.section1.token2`` with strings from per-locale dictionary files
(.ini, .csv, .json). Substitution happens once, at build time.

Public API:
    Localizer - Pipeline: load dictionaries once, process documents
    LocalizerConfig - Immutable run configuration
    Document - Input/output document (path + bytes)
    DictionarySet - Ordered, immutable set of locale dictionaries
    LocaleDictionary - Translations for one locale
    load_dictionaries - Load a locale directory
    expand - Multiply one document across a dictionary set
    substitute - Replace tokens in text against one dictionary
    DelimiterSpec - Token prefix/suffix/stop-condition configuration
    FilenameTemplate - Output path template

Exceptions:
    LocalizationError - Base exception class
    DictionaryNotFoundError - No usable dictionary
    DictionaryParseError - Malformed dictionary file
    NullContentError - Document without content
    StreamingUnsupportedError - Document with streamed content

Submodules:
    doclocalize.dictionary - Dictionary model, formats and loading
    doclocalize.templating - Token scanning and filename templates
    doclocalize.diagnostics - Error types and diagnostic codes
    doclocalize.cli - Command-line entry point
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    DictionaryNotFoundError,
    DictionaryParseError,
    LocalizationError,
    NullContentError,
    StreamingUnsupportedError,
)
from .dictionary import DictionarySet, LocaleDictionary, load_dictionaries
from .document import Document
from .multiplier import MissingTranslation, expand
from .pipeline import Localizer, LocalizerConfig
from .templating import DelimiterSpec, FilenameTemplate, substitute

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("doclocalize")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DelimiterSpec",
    "DictionaryNotFoundError",
    "DictionaryParseError",
    "DictionarySet",
    "Document",
    "FilenameTemplate",
    "LocaleDictionary",
    "LocalizationError",
    "Localizer",
    "LocalizerConfig",
    "MissingTranslation",
    "NullContentError",
    "StreamingUnsupportedError",
    "__version__",
    "expand",
    "load_dictionaries",
    "substitute",
]
