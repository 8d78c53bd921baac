"""Localization pipeline for build hosts.

Wraps the core in the shape a build tool needs: one configuration object,
dictionaries loaded once at construction, and a process() call per input
document.

Key architectural decisions:
- Eager dictionary loading: a missing or broken locale directory fails at
  construction, before any document is touched
- Explicit context: the loaded DictionarySet is passed to every expand()
  call; no module-level state
- Strict mode (default) raises per-document errors; non-strict mode logs
  them and emits nothing for the failed document

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path

from doclocalize.constants import DEFAULT_ENCODING, DEFAULT_LOCALES_DIR, LOG_TRUNCATE
from doclocalize.diagnostics import DictionaryNotFoundError, LocalizationError
from doclocalize.dictionary import (
    DictionarySet,
    LoadSummary,
    LocaleFilter,
    LocaleId,
    load_dictionaries,
)
from doclocalize.dictionary.loading import normalize_locale_filter
from doclocalize.document import Document
from doclocalize.multiplier import MissingTranslation, expand
from doclocalize.templating import DelimiterSpec, FilenameTemplate

__all__ = ["Localizer", "LocalizerConfig"]

logger = logging.getLogger(__name__)

# Plugin-style option names (camelCase) accepted by LocalizerConfig.from_options,
# mapped to dataclass fields. Field names themselves are accepted too.
_OPTION_ALIASES = {
    "includeOriginal": "include_original",
    "warn": "warn_missing",
    "encodeEntities": "encode_entities",
    "ignoreErrors": "ignore_errors",
    "validateLocales": "validate_locales",
}


@dataclass(frozen=True, slots=True)
class LocalizerConfig:
    """Immutable configuration for a Localizer run.

    All fields have defaults; ``LocalizerConfig()`` loads ./locales with the
    "R." prefix and the default filename template.

    Attributes:
        locales: Directory of dictionary files
        whitelist: Locale id(s) to keep (takes precedence over blacklist)
        blacklist: Locale id(s) to drop
        delimiter: Token delimiter; a mapping is converted with
            DelimiterSpec.from_options
        filename: Output filename template; a string is converted
        include_original: Also emit the unmodified input document after
            the localized copies
        warn_missing: Log a warning for every unresolved token
        encode_entities: HTML-encode substituted translations
        ignore_errors: Skip unparsable dictionary files instead of failing
        validate_locales: Reject dictionary ids Babel does not recognize
        strict: Raise document errors (True) or log and skip (False)
        encoding: Text encoding of documents and dictionary files

    Example:
        >>> config = LocalizerConfig(
        ...     locales="test/locales",
        ...     delimiter=DelimiterSpec(prefix="${", suffix="}"),
        ...     filename="${path}/${lang}/${name}.${ext}",
        ... )
        >>> config.filename.template
        '${path}/${lang}/${name}.${ext}'
    """

    locales: str | Path = DEFAULT_LOCALES_DIR
    whitelist: LocaleFilter | None = None
    blacklist: LocaleFilter | None = None
    delimiter: DelimiterSpec = field(default_factory=DelimiterSpec)
    filename: FilenameTemplate = field(default_factory=FilenameTemplate)
    include_original: bool = False
    warn_missing: bool = False
    encode_entities: bool = False
    ignore_errors: bool = False
    validate_locales: bool = False
    strict: bool = True
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self) -> None:
        """Normalize convenience values into their typed forms.

        Raises:
            ValueError: If delimiter or filename values are invalid
            TypeError: If delimiter or filename have an unsupported type
        """
        object.__setattr__(self, "whitelist", normalize_locale_filter(self.whitelist))
        object.__setattr__(self, "blacklist", normalize_locale_filter(self.blacklist))

        match self.delimiter:
            case DelimiterSpec():
                pass
            case Mapping():
                object.__setattr__(self, "delimiter", DelimiterSpec.from_options(self.delimiter))
            case _:
                msg = f"delimiter must be a DelimiterSpec or mapping, got {type(self.delimiter).__name__}"
                raise TypeError(msg)

        match self.filename:
            case FilenameTemplate():
                pass
            case str():
                object.__setattr__(self, "filename", FilenameTemplate(self.filename))
            case _:
                msg = f"filename must be a FilenameTemplate or str, got {type(self.filename).__name__}"
                raise TypeError(msg)

    @classmethod
    def from_options(cls, options: Mapping[str, object] | None = None) -> LocalizerConfig:
        """Build a configuration from a plugin-style option mapping.

        Accepts ``locales``, ``whitelist``, ``blacklist``, ``delimiter``
        (``{prefix, suffix}`` or ``{prefix, stopCondition}``), ``filename``,
        ``includeOriginal``, ``warn``, ``encodeEntities``, ``ignoreErrors``,
        ``validateLocales``, ``strict`` and ``encoding``. Snake_case field
        names are accepted as well.

        Raises:
            ValueError: On unknown option names or invalid values
        """
        if not options:
            return cls()
        names = {f.name for f in fields(cls)}
        kwargs: dict[str, object] = {}
        unknown: list[str] = []
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in names:
                unknown.append(key)
                continue
            kwargs[name] = value
        if unknown:
            msg = f"Unknown option(s): {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        return cls(**kwargs)  # type: ignore[arg-type]


class Localizer:
    """Multiplies documents into localized copies.

    Loads the dictionary set once at construction and reuses it, read-only,
    for every processed document. Instances hold no mutable state after
    construction and may be shared between threads.

    Example:
        >>> localizer = Localizer(LocalizerConfig(locales="test/locales", whitelist="en_US"))
        >>> doc = Document.from_text("test/helloworld.html", "<h1>R.token1</h1>")
        >>> [d.path for d in localizer.process(doc)]
        ['test/helloworld-en_US.html']

    Attributes:
        config: Configuration of this run
        dictionaries: Loaded dictionary set
    """

    __slots__ = ("_config", "_dictionaries", "_load_errors")

    def __init__(self, config: LocalizerConfig | None = None) -> None:
        """Load dictionaries for a run.

        Args:
            config: Run configuration (defaults to LocalizerConfig())

        Raises:
            DictionaryNotFoundError: If no dictionary is available
            DictionaryParseError: If a dictionary file is malformed and
                ignore_errors is off
        """
        self._config = config if config is not None else LocalizerConfig()
        dictionaries, errors = load_dictionaries(
            self._config.locales,
            self._config.whitelist,
            self._config.blacklist,
            ignore_errors=self._config.ignore_errors,
            validate_locales=self._config.validate_locales,
            encoding=self._config.encoding,
        )
        if dictionaries is None:
            raise _load_failure(errors)
        self._dictionaries: DictionarySet = dictionaries
        # Errors of skipped files (ignore_errors=True)
        self._load_errors: tuple[LocalizationError, ...] = errors

    @classmethod
    def from_options(cls, options: Mapping[str, object] | None = None) -> Localizer:
        """Create a Localizer from a plugin-style option mapping.

        See LocalizerConfig.from_options for accepted keys.
        """
        return cls(LocalizerConfig.from_options(options))

    def __repr__(self) -> str:
        return f"Localizer(locales={self.locales!r}, directory={str(self._config.locales)!r})"

    @property
    def config(self) -> LocalizerConfig:
        """Configuration of this run."""
        return self._config

    @property
    def dictionaries(self) -> DictionarySet:
        """Loaded dictionary set, in output order."""
        return self._dictionaries

    @property
    def locales(self) -> tuple[LocaleId, ...]:
        """Active locale ids, in output order."""
        return self._dictionaries.ids

    @property
    def load_errors(self) -> tuple[LocalizationError, ...]:
        """Errors of dictionary files skipped with ignore_errors."""
        return self._load_errors

    def get_load_summary(self) -> LoadSummary | None:
        """Per-file results of the dictionary load."""
        return self._dictionaries.summary

    def process(self, document: Document) -> tuple[Document, ...]:
        """Localize one document.

        Args:
            document: Input document with buffered content

        Returns:
            One document per active locale in locale order, followed by the
            input document when include_original is set. Empty in
            non-strict mode when the document fails.

        Raises:
            NullContentError: If the document has no content (strict mode)
            StreamingUnsupportedError: If content is a stream (strict mode)
            DocumentDecodeError: If content cannot be decoded (strict mode)
            DocumentEncodeError: If a translation cannot be encoded (strict mode)
        """
        config = self._config
        documents, errors = expand(
            document,
            self._dictionaries,
            config.delimiter,
            config.filename,
            encode_entities=config.encode_entities,
            on_missing=self._warn_missing if config.warn_missing else None,
            encoding=config.encoding,
        )
        if errors:
            error = errors[0]
            if config.strict:
                raise error
            logger.error("Skipping %s: %s", repr(document.path[:LOG_TRUNCATE]), error)
            return ()
        if config.include_original:
            return (*documents, document)
        return documents

    def process_all(self, documents: Iterable[Document]) -> Iterator[Document]:
        """Localize documents one at a time, yielding outputs in order."""
        for document in documents:
            yield from self.process(document)

    @staticmethod
    def _warn_missing(info: MissingTranslation) -> None:
        logger.warning("%s", info.to_diagnostic().format_error())


def _load_failure(errors: tuple[LocalizationError, ...]) -> LocalizationError:
    """Pick the error that stopped the load.

    DictionaryNotFoundError wins over parse errors: it means nothing usable
    was left, while parse errors were already logged one by one.
    """
    for error in errors:
        if isinstance(error, DictionaryNotFoundError):
            return error
    return errors[0]
