"""Diagnostic system for localization errors.

Provides structured error diagnostics with codes, locations and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    DictionaryNotFoundError,
    DictionaryParseError,
    DocumentDecodeError,
    DocumentEncodeError,
    DocumentError,
    InvalidLocaleError,
    LocalizationError,
    NullContentError,
    StreamingUnsupportedError,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DictionaryNotFoundError",
    "DictionaryParseError",
    "DocumentDecodeError",
    "DocumentEncodeError",
    "DocumentError",
    "InvalidLocaleError",
    "LocalizationError",
    "NullContentError",
    "StreamingUnsupportedError",
]
