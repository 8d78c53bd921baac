"""Dictionary loading from a locale directory.

Scans a directory of per-locale dictionary files, applies whitelist and
blacklist filtering, parses the selected files and returns an ordered
DictionarySet together with every error encountered.

Components:
    load_dictionaries - Directory scan, filtering and parsing
    DictionaryLoadResult - Immutable result of a single file
    LoadSummary - Immutable aggregate of all results from one scan

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from doclocalize.constants import DEFAULT_ENCODING, MAX_DICTIONARY_SIZE
from doclocalize.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DictionaryNotFoundError,
    DictionaryParseError,
    InvalidLocaleError,
    LocalizationError,
)
from doclocalize.dictionary.formats import DictionaryParser, get_parser
from doclocalize.dictionary.model import DictionarySet, LocaleDictionary
from doclocalize.dictionary.types import LocaleFilter, LocaleId
from doclocalize.enums import LoadStatus
from doclocalize.locale_utils import try_babel_locale

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Loader
    "load_dictionaries",
    # Filtering
    "normalize_locale_filter",
    "select_locales",
    # Load result types
    "DictionaryLoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DictionaryLoadResult:
    """Result of handling a single file in the locale directory.

    Attributes:
        locale: Candidate locale id (file base name without extension)
        source_path: Path of the file
        status: Load status (success, filtered, unsupported, error)
        error: Error if status is ERROR, None otherwise
        entry_count: Number of translated strings loaded (0 unless success)
    """

    locale: LocaleId
    source_path: str
    status: LoadStatus
    error: LocalizationError | None = None
    entry_count: int = 0

    @property
    def is_success(self) -> bool:
        """Check if the file was loaded into the dictionary set."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_filtered(self) -> bool:
        """Check if the locale was excluded by whitelist or blacklist."""
        return self.status == LoadStatus.FILTERED

    @property
    def is_unsupported(self) -> bool:
        """Check if the file extension has no registered parser."""
        return self.status == LoadStatus.UNSUPPORTED

    @property
    def is_error(self) -> bool:
        """Check if the file failed to load."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of the results of one directory scan.

    All statistics are computed properties derived from the ``results`` tuple.

    Attributes:
        directory: Scanned locale directory
        results: All individual file results in directory order

    Example:
        >>> dictionaries, errors = load_dictionaries("locales", ignore_errors=True)
        >>> summary = dictionaries.summary
        >>> for result in summary.get_errors():
        ...     print(f"Skipped {result.source_path}: {result.error}")
    """

    directory: str
    results: tuple[DictionaryLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(directory={self.directory!r}, "
            f"total={self.total_files}, "
            f"ok={self.successful}, "
            f"filtered={self.filtered}, "
            f"unsupported={self.unsupported}, "
            f"errors={self.errors})"
        )

    @property
    def total_files(self) -> int:
        """Total number of files seen in the directory."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of files loaded into the set."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def filtered(self) -> int:
        """Number of files excluded by whitelist or blacklist."""
        return sum(1 for r in self.results if r.is_filtered)

    @property
    def unsupported(self) -> int:
        """Number of files without a registered parser."""
        return sum(1 for r in self.results if r.is_unsupported)

    @property
    def errors(self) -> int:
        """Number of files that failed to load."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def entry_count(self) -> int:
        """Total translated strings across all loaded files."""
        return sum(r.entry_count for r in self.results)

    def get_errors(self) -> tuple[DictionaryLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_successful(self) -> tuple[DictionaryLoadResult, ...]:
        """Get all successful results."""
        return tuple(r for r in self.results if r.is_success)

    def get_filtered(self) -> tuple[DictionaryLoadResult, ...]:
        """Get all results excluded by whitelist or blacklist."""
        return tuple(r for r in self.results if r.is_filtered)

    def get_by_locale(self, locale: LocaleId) -> tuple[DictionaryLoadResult, ...]:
        """Get all results for a specific locale id."""
        return tuple(r for r in self.results if r.locale == locale)

    @property
    def has_errors(self) -> bool:
        """Check if any file failed to load."""
        return self.errors > 0


def normalize_locale_filter(value: LocaleFilter | Iterable[str] | None) -> frozenset[str] | None:
    """Normalize a whitelist or blacklist value.

    Args:
        value: A single locale id, a collection of ids, or None

    Returns:
        Frozen set of ids, or None when no filter was given

    Example:
        >>> normalize_locale_filter("en_US")
        frozenset({'en_US'})
        >>> sorted(normalize_locale_filter(["en_US", "pt-BR"]))
        ['en_US', 'pt-BR']
    """
    if value is None:
        return None
    if isinstance(value, str):
        return frozenset({value})
    return frozenset(value)


def select_locales(
    whitelist: LocaleFilter | Iterable[str] | None,
    blacklist: LocaleFilter | Iterable[str] | None,
) -> tuple[frozenset[str] | None, frozenset[str] | None]:
    """Resolve whitelist/blacklist precedence.

    At most one filter is honored. When both are given the whitelist wins
    and the blacklist is ignored with a warning.

    Returns:
        (allowed ids or None, denied ids or None)
    """
    allow = normalize_locale_filter(whitelist)
    deny = normalize_locale_filter(blacklist)
    if allow is not None and deny is not None:
        logger.warning(
            "Both whitelist and blacklist given; using whitelist %s and ignoring blacklist %s",
            sorted(allow),
            sorted(deny),
        )
        deny = None
    return allow, deny


def _is_selected(
    locale: LocaleId, allow: frozenset[str] | None, deny: frozenset[str] | None
) -> bool:
    if allow is not None:
        return locale in allow
    if deny is not None:
        return locale not in deny
    return True


def _load_file(
    path: Path,
    locale: LocaleId,
    parser: DictionaryParser,
    *,
    validate_locales: bool,
    encoding: str,
) -> LocaleDictionary:
    """Read and parse one dictionary file.

    Raises:
        DictionaryParseError: If the file cannot be read or parsed
        InvalidLocaleError: If validate_locales and Babel rejects the id
    """
    source_path = str(path)
    if validate_locales and try_babel_locale(locale) is None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.LOCALE_UNKNOWN,
            message=f"Unknown locale identifier '{locale}'",
            hint="Name dictionary files after a locale, e.g. de_DE.ini or pt-BR.csv",
            source_path=source_path,
        )
        raise InvalidLocaleError(diagnostic, source_path=source_path)

    try:
        size = path.stat().st_size
        if size > MAX_DICTIONARY_SIZE:
            diagnostic = Diagnostic(
                code=DiagnosticCode.DICTIONARY_TOO_LARGE,
                message=f"Dictionary is {size} bytes, limit is {MAX_DICTIONARY_SIZE}",
                source_path=source_path,
            )
            raise DictionaryParseError(diagnostic, source_path=source_path)
        source = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        diagnostic = Diagnostic(
            code=DiagnosticCode.DICTIONARY_PARSE_FAILED,
            message=f"Cannot read dictionary: {e}",
            source_path=source_path,
        )
        raise DictionaryParseError(diagnostic, source_path=source_path) from e

    entries = parser.parse(source.removeprefix("\ufeff"), source_path)
    return LocaleDictionary(locale, entries, source_path=source_path, format=parser.format)


def load_dictionaries(
    directory: str | Path,
    whitelist: LocaleFilter | Iterable[str] | None = None,
    blacklist: LocaleFilter | Iterable[str] | None = None,
    *,
    ignore_errors: bool = False,
    validate_locales: bool = False,
    encoding: str = DEFAULT_ENCODING,
) -> tuple[DictionarySet | None, tuple[LocalizationError, ...]]:
    """Load every locale dictionary in a directory.

    Only files directly inside ``directory`` are considered; hidden files
    and files without a registered parser are skipped. Each file's base
    name (without extension) is its locale id. Filtered locales are not
    parsed.

    Args:
        directory: Locale directory
        whitelist: Locale id(s) to keep; takes precedence over blacklist
        blacklist: Locale id(s) to drop
        ignore_errors: Skip unparsable files with a warning instead of
            failing the whole load
        validate_locales: Treat ids Babel does not recognize as errors
        encoding: Text encoding of dictionary files

    Returns:
        Tuple of (dictionary set or None, errors). The set is None when the
        load failed; errors then contain the cause. With ignore_errors, the
        set may be returned alongside the errors of skipped files.

    Example:
        >>> dictionaries, errors = load_dictionaries("locales", whitelist=["en_US", "pt-BR"])
        >>> dictionaries.ids
        ('en_US', 'pt-BR')
    """
    dir_path = Path(directory)
    if not dir_path.is_dir():
        diagnostic = Diagnostic(
            code=DiagnosticCode.DICTIONARY_DIRECTORY_MISSING,
            message=f"Locale directory not found: '{dir_path}'",
            hint="Point the locales option at a directory of dictionary files",
            source_path=str(dir_path),
        )
        logger.error("Locale directory not found: %s", dir_path)
        return None, (DictionaryNotFoundError(diagnostic),)

    allow, deny = select_locales(whitelist, blacklist)

    results: list[DictionaryLoadResult] = []
    errors: list[LocalizationError] = []
    loaded: dict[LocaleId, LocaleDictionary] = {}

    files = sorted(
        (p for p in dir_path.iterdir() if p.is_file() and not p.name.startswith(".")),
        key=lambda p: p.name,
    )
    for path in files:
        locale = path.stem
        source_path = str(path)

        parser = get_parser(path)
        if parser is None:
            logger.debug("Ignoring %s: no parser for extension %r", source_path, path.suffix)
            results.append(DictionaryLoadResult(locale, source_path, LoadStatus.UNSUPPORTED))
            continue

        if not _is_selected(locale, allow, deny):
            logger.debug("Locale %s filtered out", locale)
            results.append(DictionaryLoadResult(locale, source_path, LoadStatus.FILTERED))
            continue

        try:
            if locale in loaded:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.DICTIONARY_DUPLICATE_LOCALE,
                    message=(
                        f"Locale '{locale}' already loaded from "
                        f"'{loaded[locale].source_path}'"
                    ),
                    hint="Keep a single dictionary file per locale",
                    source_path=source_path,
                )
                raise DictionaryParseError(diagnostic, source_path=source_path)
            dictionary = _load_file(
                path, locale, parser, validate_locales=validate_locales, encoding=encoding
            )
        except DictionaryParseError as e:
            errors.append(e)
            results.append(DictionaryLoadResult(locale, source_path, LoadStatus.ERROR, error=e))
            if ignore_errors:
                logger.warning("Skipping dictionary %s: %s", source_path, e)
            else:
                logger.error("Failed to load dictionary %s: %s", source_path, e)
            continue

        loaded[locale] = dictionary
        count = dictionary.entry_count
        results.append(
            DictionaryLoadResult(locale, source_path, LoadStatus.SUCCESS, entry_count=count)
        )
        logger.debug("Loaded dictionary %s: %d entries", source_path, count)

    summary = LoadSummary(str(dir_path), tuple(results))

    if errors and not ignore_errors:
        return None, tuple(errors)

    if not loaded:
        diagnostic = Diagnostic(
            code=DiagnosticCode.DICTIONARY_NOT_FOUND,
            message=f"No dictionaries found in '{dir_path}'",
            hint=(
                "Check the whitelist/blacklist and that files end in "
                ".ini, .csv or .json"
            ),
            source_path=str(dir_path),
        )
        logger.error("No dictionaries found in %s (%r)", dir_path, summary)
        return None, (*errors, DictionaryNotFoundError(diagnostic))

    logger.info(
        "Loaded %d dictionaries from %s: %s", len(loaded), dir_path, ", ".join(sorted(loaded))
    )
    return DictionarySet(tuple(loaded.values()), summary=summary), tuple(errors)
