"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Dictionary loading errors
        2000-2999: Document errors
        3000-3999: Translation warnings
    """

    # Dictionary loading errors (1000-1999)
    DICTIONARY_NOT_FOUND = 1001
    DICTIONARY_DIRECTORY_MISSING = 1002
    DICTIONARY_PARSE_FAILED = 1003
    DICTIONARY_KEY_CONFLICT = 1004
    DICTIONARY_DUPLICATE_LOCALE = 1005
    DICTIONARY_TOO_LARGE = 1006
    LOCALE_UNKNOWN = 1007

    # Document errors (2000-2999)
    DOCUMENT_NULL_CONTENT = 2001
    DOCUMENT_STREAMING_UNSUPPORTED = 2002
    DOCUMENT_DECODE_FAILED = 2003
    DOCUMENT_ENCODE_FAILED = 2004

    # Translation warnings (3000-3999)
    TRANSLATION_MISSING = 3001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context to point
    a user at the offending dictionary file or document.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        source_path: Dictionary file or document the error refers to
        line: Line number in source_path (1-indexed), if known
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    source_path: str | None = None
    line: int | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[DICTIONARY_PARSE_FAILED]: Row 3 has 1 column(s), expected 2
              --> locales/fr_FR.csv:3
              = help: Write each row as key,value

        Returns:
            Formatted error message
        """
        parts = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.source_path is not None:
            location = self.source_path if self.line is None else f"{self.source_path}:{self.line}"
            parts.append(f"  --> {location}")
        if self.hint:
            parts.append(f"  = help: {self.hint}")
        return "\n".join(parts)
