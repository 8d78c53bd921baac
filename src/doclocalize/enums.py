"""Enumerations for doclocalize type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class DictionaryFormat(StrEnum):
    """On-disk format of a locale dictionary file.

    StrEnum provides automatic string conversion: str(DictionaryFormat.INI) == "ini"
    """

    INI = "ini"
    """Section/key=value format: [section1] token2 = Inhalt2"""

    CSV = "csv"
    """Flat two-column format: section1.token2,Inhalt2"""

    JSON = "json"
    """Nested JSON object: {"section1": {"token2": "Inhalt2"}}"""


class ContentKind(StrEnum):
    """How a document carries its content.

    StrEnum provides automatic string conversion: str(ContentKind.BUFFER) == "buffer"
    """

    BUFFER = "buffer"
    """Content fully read into memory as bytes"""

    NULL = "null"
    """Document has no content at all"""

    STREAM = "stream"
    """Content is an unread stream"""


class LoadStatus(StrEnum):
    """Outcome of loading a single dictionary file.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """File parsed and included in the dictionary set"""

    FILTERED = "filtered"
    """Locale excluded by whitelist or blacklist (file not parsed)"""

    UNSUPPORTED = "unsupported"
    """File extension has no registered parser (file ignored)"""

    ERROR = "error"
    """File could not be read or parsed"""


__all__ = [
    "ContentKind",
    "DictionaryFormat",
    "LoadStatus",
]
