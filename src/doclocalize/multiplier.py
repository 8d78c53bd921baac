"""Document multiplication: one input document, one output per locale.

expand() substitutes tokens once per dictionary in set order and names each
output with the filename template. Failures are returned as values in the
``(documents, errors)`` convention; no output is produced for a failed
document.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from doclocalize.constants import DEFAULT_ENCODING, LOG_TRUNCATE
from doclocalize.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DocumentDecodeError,
    DocumentEncodeError,
    DocumentError,
    NullContentError,
    StreamingUnsupportedError,
)
from doclocalize.dictionary import DictionarySet, KeyPath, LocaleId
from doclocalize.document import Document
from doclocalize.enums import ContentKind
from doclocalize.templating import (
    DEFAULT_DELIMITER,
    DelimiterSpec,
    FilenameTemplate,
    encode_html_entities,
    substitute,
)

__all__ = ["DEFAULT_FILENAME_TEMPLATE", "MissingTranslation", "expand"]

logger = logging.getLogger(__name__)

DEFAULT_FILENAME_TEMPLATE = FilenameTemplate()


@dataclass(frozen=True, slots=True)
class MissingTranslation:
    """A token that did not resolve in one locale.

    Provided to the on_missing callback of expand().

    Attributes:
        locale: Locale id of the dictionary searched
        path: Dotted key path of the token
        document_path: Path of the input document

    Example:
        >>> def log_missing(info: MissingTranslation) -> None:
        ...     print(f"{info.document_path}: no {info.locale} text for {info.path}")
        >>> documents, errors = expand(doc, dictionaries, on_missing=log_missing)
    """

    locale: LocaleId
    path: KeyPath
    document_path: str

    def to_diagnostic(self) -> Diagnostic:
        """Describe the unresolved token as a warning diagnostic."""
        return Diagnostic(
            code=DiagnosticCode.TRANSLATION_MISSING,
            message=f"Missing translation for {self.path[:LOG_TRUNCATE]!r} in locale {self.locale}",
            hint=f"Add {self.path[:LOG_TRUNCATE]!r} to the {self.locale} dictionary",
            source_path=self.document_path,
            severity="warning",
        )


def _document_error(
    error_type: type[DocumentError], code: DiagnosticCode, message: str, document: Document
) -> DocumentError:
    diagnostic = Diagnostic(code=code, message=message, source_path=document.path)
    return error_type(diagnostic, document_path=document.path)


def _missing_reporter(
    on_missing: Callable[[MissingTranslation], None], locale: LocaleId, document_path: str
) -> Callable[[KeyPath], None]:
    def report(path: KeyPath) -> None:
        on_missing(MissingTranslation(locale, path, document_path))

    return report


def expand(
    document: Document,
    dictionaries: DictionarySet,
    delimiter: DelimiterSpec = DEFAULT_DELIMITER,
    template: FilenameTemplate | str = DEFAULT_FILENAME_TEMPLATE,
    *,
    encode_entities: bool = False,
    on_missing: Callable[[MissingTranslation], None] | None = None,
    encoding: str = DEFAULT_ENCODING,
) -> tuple[tuple[Document, ...], tuple[DocumentError, ...]]:
    """Produce one localized document per dictionary.

    Args:
        document: Input document; content must be buffered bytes
        dictionaries: Active locale dictionaries, in output order
        delimiter: Token delimiter configuration
        template: Output filename template
        encode_entities: HTML-encode substituted translations
        on_missing: Called for every token left unresolved
        encoding: Text encoding of document content

    Returns:
        Tuple of (documents, errors). On success, one document per
        dictionary in set order and no errors. On failure, no documents
        and a single error (NullContentError, StreamingUnsupportedError,
        DocumentDecodeError or DocumentEncodeError).

    Example:
        >>> dictionaries = DictionarySet.from_mapping({"de_DE": {"token1": "Inhalt1"}})
        >>> doc = Document.from_text("test/helloworld.html", "<h1>R.token1</h1>")
        >>> documents, errors = expand(doc, dictionaries)
        >>> documents[0].path, documents[0].content
        ('test/helloworld-de_DE.html', b'<h1>Inhalt1</h1>')
    """
    match document.content_kind:
        case ContentKind.NULL:
            error = _document_error(
                NullContentError,
                DiagnosticCode.DOCUMENT_NULL_CONTENT,
                f"Document '{document.path}' has no content",
                document,
            )
            return (), (error,)
        case ContentKind.STREAM:
            error = _document_error(
                StreamingUnsupportedError,
                DiagnosticCode.DOCUMENT_STREAMING_UNSUPPORTED,
                "Streaming not supported",
                document,
            )
            return (), (error,)

    try:
        text = document.text(encoding)
    except UnicodeDecodeError as e:
        error = _document_error(
            DocumentDecodeError,
            DiagnosticCode.DOCUMENT_DECODE_FAILED,
            f"Document '{document.path}' is not valid {encoding}: {e.reason}",
            document,
        )
        return (), (error,)

    if isinstance(template, str):
        template = FilenameTemplate(template)
    escape = encode_html_entities if encode_entities else None

    outputs: list[Document] = []
    for dictionary in dictionaries:
        report = (
            _missing_reporter(on_missing, dictionary.id, document.path)
            if on_missing is not None
            else None
        )
        content = substitute(text, dictionary, delimiter, on_missing=report, escape=escape)
        try:
            encoded = content.encode(encoding)
        except UnicodeEncodeError as e:
            error = _document_error(
                DocumentEncodeError,
                DiagnosticCode.DOCUMENT_ENCODE_FAILED,
                f"Localized copy of '{document.path}' for {dictionary.id} "
                f"is not representable in {encoding}: {e.reason}",
                document,
            )
            return (), (error,)
        outputs.append(document.derive(template.render(document.path, dictionary.id), encoded))

    logger.debug(
        "Expanded %s into %d document(s): %s",
        repr(document.path[:LOG_TRUNCATE]),
        len(outputs),
        ", ".join(dictionaries.ids),
    )
    return tuple(outputs), ()
