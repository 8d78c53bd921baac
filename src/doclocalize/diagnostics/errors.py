"""Localization exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic for rich error information.
Loading and expansion return these exceptions as values; raising them is
left to the caller (see doclocalize.pipeline.Localizer).

Python 3.13+.
"""

from .codes import Diagnostic

__all__ = [
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


class LocalizationError(Exception):
    """Base exception for all doclocalize errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocalizationError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class DictionaryNotFoundError(LocalizationError):
    """No usable locale dictionary was found.

    Raised when the locale directory is missing, or when nothing is left
    after scanning and whitelist/blacklist filtering. Prevents the whole
    run from starting.
    """


class DictionaryParseError(LocalizationError):
    """A dictionary file could not be parsed into a nested string map.

    Attributes:
        source_path: File that failed to parse (empty if not applicable)
    """

    def __init__(self, message: str | Diagnostic, *, source_path: str = "") -> None:
        """Initialize DictionaryParseError.

        Args:
            message: Error message string OR Diagnostic object
            source_path: File that failed to parse
        """
        super().__init__(message)
        self.source_path = source_path


class InvalidLocaleError(DictionaryParseError):
    """Dictionary file name is not a locale identifier Babel recognizes."""


class DocumentError(LocalizationError):
    """A document cannot be expanded.

    Attributes:
        document_path: Path of the rejected document
    """

    def __init__(self, message: str | Diagnostic, *, document_path: str = "") -> None:
        """Initialize DocumentError.

        Args:
            message: Error message string OR Diagnostic object
            document_path: Path of the rejected document
        """
        super().__init__(message)
        self.document_path = document_path


class NullContentError(DocumentError):
    """Document arrived without any content."""


class StreamingUnsupportedError(DocumentError):
    """Document content is a stream; content must be fully buffered."""


class DocumentDecodeError(DocumentError):
    """Document content is not valid in the configured text encoding."""


class DocumentEncodeError(DocumentError):
    """A localized copy cannot be represented in the configured text encoding."""
