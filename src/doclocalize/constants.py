"""Shared constants for doclocalize.

Centralized defaults used across the dictionary, templating and pipeline
packages. Placing constants here avoids circular imports and provides a
single source of truth.

Python 3.13+.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Token delimiters
    "DEFAULT_PREFIX",
    "DEFAULT_STOP_CONDITION",
    "PATH_SEPARATOR",
    # Output paths
    "DEFAULT_FILENAME_TEMPLATE",
    "FILENAME_PLACEHOLDERS",
    # Dictionary loading
    "DEFAULT_LOCALES_DIR",
    "DEFAULT_ENCODING",
    "MAX_DICTIONARY_SIZE",
    # Logging
    "LOG_TRUNCATE",
]

# ============================================================================
# TOKEN DELIMITERS
# ============================================================================

# Prefix that introduces a token when no delimiter is configured: R.token1
DEFAULT_PREFIX: str = "R."

# A stop-condition token ends at the first character that cannot appear in a
# dotted key path. Whitespace and markup punctuation (< > " ' & = ; ...) all
# fall in this class.
DEFAULT_STOP_CONDITION: re.Pattern[str] = re.compile(r"[^\w.\-]")

# Separator between nesting levels in a key path: section1.subsection2.token3
PATH_SEPARATOR: str = "."

# ============================================================================
# OUTPUT PATHS
# ============================================================================

DEFAULT_FILENAME_TEMPLATE: str = "${path}/${name}-${lang}.${ext}"

# Closed set of placeholders understood by the filename templater.
FILENAME_PLACEHOLDERS: frozenset[str] = frozenset({"path", "name", "ext", "lang"})

# ============================================================================
# DICTIONARY LOADING
# ============================================================================

DEFAULT_LOCALES_DIR: str = "./locales"

DEFAULT_ENCODING: str = "utf-8"

# Maximum size of a single dictionary file in bytes (10 MB).
# Larger files are rejected as parse errors instead of being read into memory.
MAX_DICTIONARY_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# LOGGING
# ============================================================================

# Untrusted values (token paths, file content) are truncated to this many
# characters before they reach log records.
LOG_TRUNCATE: int = 80
