"""Dictionary file formats.

Every supported on-disk format is parsed into the same nested string map.
The parser for a file is chosen by its extension alone.

Components:
    DictionaryParser - Protocol for format parsers (structural typing)
    IniDictionaryParser - Section/key=value files (.ini)
    CsvDictionaryParser - Flat two-column key,value files (.csv)
    JsonDictionaryParser - Nested JSON objects (.json)
    get_parser - Extension-based parser lookup

Python 3.13+.
"""

from __future__ import annotations

import configparser
import csv
import io
import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import PurePath
from typing import Protocol

from doclocalize.constants import LOG_TRUNCATE, PATH_SEPARATOR
from doclocalize.diagnostics import Diagnostic, DiagnosticCode, DictionaryParseError
from doclocalize.dictionary.types import EntryTree, KeyPath
from doclocalize.enums import DictionaryFormat

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "DictionaryParser",
    # Concrete parsers
    "IniDictionaryParser",
    "CsvDictionaryParser",
    "JsonDictionaryParser",
    # Registry
    "PARSERS",
    "get_parser",
    # Tree construction
    "build_tree",
    "tree_from_mapping",
]

logger = logging.getLogger(__name__)

# Section that holds keys written before the first [section] header.
_ROOT_SECTION = "__doclocalize_root__"
# configparser copies its default section into every other section; point it
# at a name no real file uses so [DEFAULT] is treated as an ordinary section.
_UNUSED_DEFAULT_SECTION = "__doclocalize_unused_default__"

_QUOTES = ("'", '"')


def _parse_error(
    code: DiagnosticCode,
    message: str,
    source_path: str,
    *,
    line: int | None = None,
    hint: str | None = None,
) -> DictionaryParseError:
    diagnostic = Diagnostic(
        code=code,
        message=message,
        hint=hint,
        source_path=source_path,
        line=line,
    )
    return DictionaryParseError(diagnostic, source_path=source_path)


def build_tree(
    pairs: Iterable[tuple[KeyPath, str]], source_path: str = "<string>"
) -> dict[str, object]:
    """Nest (dotted path, value) pairs into a tree.

    Later duplicates of the same leaf path replace earlier ones.

    Args:
        pairs: Dotted key paths with their translated strings
        source_path: Source identifier for error messages

    Returns:
        Nested dict with string leaves

    Raises:
        DictionaryParseError: If a path has an empty segment, or a path is
            used both as a leaf and as a section
    """
    tree: dict[str, object] = {}
    for path, value in pairs:
        segments = path.split(PATH_SEPARATOR)
        if not all(segments):
            raise _parse_error(
                DiagnosticCode.DICTIONARY_PARSE_FAILED,
                f"Empty segment in key {path!r}",
                source_path,
                hint="Key paths look like section.key with no empty parts",
            )
        node = tree
        for depth, segment in enumerate(segments[:-1]):
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                prefix = PATH_SEPARATOR.join(segments[: depth + 1])
                raise _parse_error(
                    DiagnosticCode.DICTIONARY_KEY_CONFLICT,
                    f"Key {prefix!r} is both a translation and a section (via {path!r})",
                    source_path,
                )
            node = child
        leaf = segments[-1]
        if isinstance(node.get(leaf), dict):
            raise _parse_error(
                DiagnosticCode.DICTIONARY_KEY_CONFLICT,
                f"Key {path!r} is both a translation and a section",
                source_path,
            )
        if leaf in node:
            logger.debug("Duplicate key %r in %s, keeping last value", path, source_path)
        node[leaf] = value
    return tree


def _has_surrogate(text: str) -> bool:
    return any("\ud800" <= char <= "\udfff" for char in text)


def _flatten(
    mapping: Mapping[object, object], source_path: str, prefix: str = ""
) -> Iterator[tuple[KeyPath, str]]:
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise _parse_error(
                DiagnosticCode.DICTIONARY_PARSE_FAILED,
                f"Keys must be strings, got {type(key).__name__}",
                source_path,
            )
        path = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else key
        match value:
            case str():
                if _has_surrogate(path) or _has_surrogate(value):
                    raise _parse_error(
                        DiagnosticCode.DICTIONARY_PARSE_FAILED,
                        f"Unpaired surrogate in entry {path!r}",
                        source_path,
                        hint="Write non-BMP characters literally or as a surrogate pair",
                    )
                yield path, value
            case bool():
                # Checked before int: bool is an int subclass
                yield path, "true" if value else "false"
            case int() | float():
                yield path, str(value)
            case Mapping():
                yield from _flatten(value, source_path, path)
            case _:
                raise _parse_error(
                    DiagnosticCode.DICTIONARY_PARSE_FAILED,
                    f"Value for {path!r} must be a string or object, got {type(value).__name__}",
                    source_path,
                )


def tree_from_mapping(
    mapping: Mapping[object, object], source_path: str = "<string>"
) -> dict[str, object]:
    """Normalize an in-memory mapping into a nested string map.

    Keys may be dotted paths, nested mappings, or a mix of both.
    Numbers and booleans are converted to strings.

    Args:
        mapping: Nested mapping of translations
        source_path: Source identifier for error messages

    Returns:
        Nested dict with string leaves

    Raises:
        DictionaryParseError: On non-string keys, unsupported values or
            conflicting paths
    """
    return build_tree(_flatten(mapping, source_path), source_path)


class DictionaryParser(Protocol):
    """Protocol for dictionary format parsers.

    Implementations turn the text of one dictionary file into a nested
    string map. Register new formats in PARSERS keyed by file extension.

    Example:
        >>> class PropertiesParser:
        ...     format = DictionaryFormat.INI
        ...     def parse(self, source: str, source_path: str = "<string>") -> EntryTree:
        ...         pairs = (line.split("=", 1) for line in source.splitlines() if "=" in line)
        ...         return build_tree(((k.strip(), v.strip()) for k, v in pairs), source_path)
    """

    @property
    def format(self) -> DictionaryFormat:
        """Format handled by this parser."""
        ...

    def parse(self, source: str, source_path: str = "<string>") -> EntryTree:
        """Parse dictionary source text.

        Args:
            source: Decoded file content
            source_path: Source identifier for error messages

        Returns:
            Nested string map

        Raises:
            DictionaryParseError: If source is malformed
        """
        ...


@dataclass(frozen=True, slots=True)
class IniDictionaryParser:
    """Parser for section/key=value files.

    Keys before the first section header are top level. Section names are
    split on dots, so [section1.subsection2] nests two levels deep, and keys
    may be dotted themselves. Every line is trimmed and parsed on its own;
    values never continue onto the next line. Keys keep their case, values
    are not interpolated, and values wrapped in matching quotes are unquoted.

    Example:
        >>> IniDictionaryParser().parse("token1 = Inhalt1\\n[section1]\\ntoken2 = Inhalt2\\n")
        {'token1': 'Inhalt1', 'section1': {'token2': 'Inhalt2'}}
    """

    format: DictionaryFormat = DictionaryFormat.INI

    def parse(self, source: str, source_path: str = "<string>") -> EntryTree:
        """Parse section/key=value source into a nested string map."""
        parser = configparser.ConfigParser(
            delimiters=("=",),
            comment_prefixes=(";", "#"),
            interpolation=None,
            strict=True,
            default_section=_UNUSED_DEFAULT_SECTION,
        )
        # Preserve key case (ConfigParser lowercases by default)
        parser.optionxform = str  # type: ignore[assignment, method-assign]
        # Every line stands alone: indented lines are entries, not continuations.
        # One output line per input line keeps error line numbers intact.
        stripped = "\n".join(line.strip() for line in io.StringIO(source))
        try:
            parser.read_string(f"[{_ROOT_SECTION}]\n{stripped}", source=source_path)
        except configparser.Error as e:
            raise _parse_error(
                DiagnosticCode.DICTIONARY_PARSE_FAILED,
                f"Invalid section/key=value syntax: {str(e)[:LOG_TRUNCATE * 2]}",
                source_path,
                line=_config_error_line(e),
                hint="Write one key = value per line below optional [section] headers",
            ) from e
        return build_tree(self._pairs(parser), source_path)

    @staticmethod
    def _pairs(parser: configparser.ConfigParser) -> Iterator[tuple[KeyPath, str]]:
        for section in parser.sections():
            prefix = "" if section == _ROOT_SECTION else section.strip()
            for key, value in parser.items(section, raw=True):
                path = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else key
                yield path, _unquote(value)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _config_error_line(error: configparser.Error) -> int | None:
    lineno = getattr(error, "lineno", None)
    if lineno is None and isinstance(error, configparser.ParsingError) and error.errors:
        lineno = error.errors[0][0]
    # Account for the synthetic root section header
    return lineno - 1 if isinstance(lineno, int) and lineno > 1 else None


@dataclass(frozen=True, slots=True)
class CsvDictionaryParser:
    """Parser for flat two-column key,value files.

    Uses standard CSV quoting, so values may contain commas when quoted.
    Blank rows and rows whose key starts with '#' are skipped. Dotted keys
    nest like section names in the section/key=value format.

    Example:
        >>> CsvDictionaryParser().parse('token1,contenu1\\nsection1.token2,"contenu, 2"\\n')
        {'token1': 'contenu1', 'section1': {'token2': 'contenu, 2'}}
    """

    format: DictionaryFormat = DictionaryFormat.CSV

    def parse(self, source: str, source_path: str = "<string>") -> EntryTree:
        """Parse key,value rows into a nested string map."""
        return build_tree(self._pairs(source, source_path), source_path)

    @staticmethod
    def _pairs(source: str, source_path: str) -> Iterator[tuple[KeyPath, str]]:
        reader = csv.reader(io.StringIO(source, newline=""), skipinitialspace=True, strict=True)
        try:
            for row in reader:
                if not any(cell.strip() for cell in row):
                    continue
                if row[0].lstrip().startswith("#"):
                    continue
                if len(row) != 2:
                    raise _parse_error(
                        DiagnosticCode.DICTIONARY_PARSE_FAILED,
                        f"Row has {len(row)} column(s), expected 2",
                        source_path,
                        line=reader.line_num,
                        hint="Write each row as key,value and quote values containing commas",
                    )
                yield row[0].strip(), row[1]
        except csv.Error as e:
            raise _parse_error(
                DiagnosticCode.DICTIONARY_PARSE_FAILED,
                f"Invalid CSV: {e}",
                source_path,
                line=reader.line_num,
            ) from e


@dataclass(frozen=True, slots=True)
class JsonDictionaryParser:
    """Parser for nested JSON objects.

    The document root must be an object. Leaves must be strings, numbers or
    booleans; arrays and null are rejected.

    Example:
        >>> JsonDictionaryParser().parse('{"section1": {"token2": "conteúdo2"}}')
        {'section1': {'token2': 'conteúdo2'}}
    """

    format: DictionaryFormat = DictionaryFormat.JSON

    def parse(self, source: str, source_path: str = "<string>") -> EntryTree:
        """Parse a JSON object into a nested string map."""
        try:
            data = json.loads(source)
        except json.JSONDecodeError as e:
            raise _parse_error(
                DiagnosticCode.DICTIONARY_PARSE_FAILED,
                f"Invalid JSON: {e.msg}",
                source_path,
                line=e.lineno,
            ) from e
        if not isinstance(data, dict):
            raise _parse_error(
                DiagnosticCode.DICTIONARY_PARSE_FAILED,
                f"JSON root must be an object, got {type(data).__name__}",
                source_path,
            )
        return tree_from_mapping(data, source_path)


PARSERS: Mapping[str, DictionaryParser] = {
    ".ini": IniDictionaryParser(),
    ".csv": CsvDictionaryParser(),
    ".json": JsonDictionaryParser(),
}
"""Registered parsers keyed by lowercase file extension (with leading dot)."""


def get_parser(path: str | PurePath) -> DictionaryParser | None:
    """Return the parser registered for a file's extension.

    Args:
        path: Dictionary file path

    Returns:
        Parser instance, or None if the extension is not supported
    """
    return PARSERS.get(PurePath(path).suffix.lower())
