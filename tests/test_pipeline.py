"""Tests for the Localizer pipeline.

End-to-end behavior of loading the fixture locales and multiplying the
helloworld document, plus configuration handling, include_original,
non-strict mode and missing-translation warnings.

Python 3.13+.
"""

from __future__ import annotations

import io
import logging
import re
from collections.abc import Callable
from typing import TypeAlias
from pathlib import Path

import pytest

from doclocalize import (
    DelimiterSpec,
    DictionaryNotFoundError,
    Document,
    FilenameTemplate,
    Localizer,
    LocalizerConfig,
    NullContentError,
    StreamingUnsupportedError,
)
from doclocalize.diagnostics import (
    DictionaryParseError,
    DocumentDecodeError,
    DocumentEncodeError,
)

MakeDocument: TypeAlias = Callable[..., Document]


def _contents(documents: tuple[Document, ...]) -> list[str]:
    return [d.content.decode("utf-8") for d in documents]  # type: ignore[union-attr]


def _paths(documents: tuple[Document, ...]) -> list[str]:
    return [d.path for d in documents]


class TestLocalizeDocument:
    """Test multiplying the helloworld document."""

    def test_default_configuration(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """Default delimiter replaces R.token1 in every locale."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir))

        documents = localizer.process(make_document())

        delimiter = localizer.config.delimiter
        assert len(delimiter.prefix) > 0
        assert isinstance(delimiter.stop_condition, re.Pattern)
        assert len(documents) == 4
        assert _contents(documents)[0] == "<html><body><h1>Inhalt1</h1></body></html>"
        assert documents[0].path == "test/helloworld-de_DE.html"

    def test_custom_suffix_delimiters(
        self, locales_dir: Path, make_document: MakeDocument
    ) -> None:
        """${token1} resolves with a prefix/suffix delimiter."""
        localizer = Localizer.from_options(
            {"locales": locales_dir, "delimiter": {"prefix": "${", "suffix": "}"}}
        )

        documents = localizer.process(make_document("<html><body><h1>${token1}</h1></body></html>"))

        assert _contents(documents)[0] == "<html><body><h1>Inhalt1</h1></body></html>"

    def test_whitelist(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """Only whitelisted locales are produced."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir, whitelist="en_US"))

        documents = localizer.process(make_document())

        assert len(documents) == 1
        assert _contents(documents) == ["<html><body><h1>content1</h1></body></html>"]
        assert documents[0].path == "test/helloworld-en_US.html"

    def test_blacklist(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """Blacklisted locales are not produced."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir, blacklist="en_US"))

        documents = localizer.process(make_document())

        assert len(documents) == 3
        assert _contents(documents)[0] == "<html><body><h1>Inhalt1</h1></body></html>"
        assert documents[0].path == "test/helloworld-de_DE.html"
        assert _contents(documents)[2] == "<html><body><h1>conteúdo1</h1></body></html>"
        assert documents[2].path == "test/helloworld-pt-BR.html"

    def test_content_without_tokens(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """Documents without tokens are copied once per locale."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir))

        documents = localizer.process(make_document("<html><body>Not replaced</body></html>"))

        assert len(documents) == 4
        assert _contents(documents)[0] == "<html><body>Not replaced</body></html>"
        assert documents[0].path == "test/helloworld-de_DE.html"

    def test_empty_content(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """Empty content still produces one empty document per locale."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir))

        documents = localizer.process(make_document(""))

        assert len(documents) == 4
        assert _contents(documents)[0] == ""
        assert documents[0].path == "test/helloworld-de_DE.html"

    def test_nested_keys(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """Dotted paths resolve through sections."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir))

        documents = localizer.process(
            make_document("<html><body><h1>R.section1.token2</h1></body></html>")
        )

        assert len(documents) == 4
        assert _contents(documents)[:2] == [
            "<html><body><h1>Inhalt2</h1></body></html>",
            "<html><body><h1>content2</h1></body></html>",
        ]
        assert _paths(documents)[:2] == [
            "test/helloworld-de_DE.html",
            "test/helloworld-en_US.html",
        ]

    def test_csv_dictionary(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """CSV dictionaries translate like section/key=value ones."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir, whitelist="fr_FR"))

        documents = localizer.process(make_document())

        assert len(documents) == 1
        assert _contents(documents) == ["<html><body><h1>contenu1</h1></body></html>"]
        assert documents[0].path == "test/helloworld-fr_FR.html"

    def test_custom_filename_format(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """Filename template controls output paths."""
        localizer = Localizer(
            LocalizerConfig(locales=locales_dir, filename="${path}/${lang}/${name}.${ext}")
        )

        documents = localizer.process(make_document())

        assert _paths(documents) == [
            "test/de_DE/helloworld.html",
            "test/en_US/helloworld.html",
            "test/fr_FR/helloworld.html",
            "test/pt-BR/helloworld.html",
        ]

    def test_unknown_token_left_in_place(
        self, locales_dir: Path, make_document: MakeDocument
    ) -> None:
        """Text that merely looks like a word is untouched."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir, whitelist="en_US"))

        documents = localizer.process(make_document("<html><body><h1>notatoken</h1></body></html>"))

        assert len(documents) == 1
        assert _contents(documents) == ["<html><body><h1>notatoken</h1></body></html>"]
        assert documents[0].path == "test/helloworld-en_US.html"

    def test_multiple_replacements(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """Several tokens in a larger document are all replaced."""
        content = """
<html>
<body>
  <h1>R.section1.token2</h1>
  <img src="img/mascot.png" alt="Our funny mascot" />
  <div class="welcome">R.token1</div>
  <hr />
  <p>R.section1.subsection2.token3</p>
</body>
</html>
"""
        localizer = Localizer(LocalizerConfig(locales=locales_dir, whitelist=["en_US", "pt-BR"]))

        documents = localizer.process(make_document(content))

        assert len(documents) == 2
        assert _paths(documents) == ["test/helloworld-en_US.html", "test/helloworld-pt-BR.html"]
        assert _contents(documents) == [
            content.replace("R.section1.token2", "content2")
            .replace("R.token1", "content1")
            .replace("R.section1.subsection2.token3", "content3"),
            content.replace("R.section1.token2", "conteúdo2")
            .replace("R.token1", "conteúdo1")
            .replace("R.section1.subsection2.token3", "conteúdo3"),
        ]

    def test_outputs_keep_cwd_and_base(
        self, locales_dir: Path, make_document: MakeDocument
    ) -> None:
        """Derived documents inherit the input's cwd and base."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir, whitelist="de_DE"))

        (document,) = localizer.process(make_document())

        assert document.cwd == "test/"
        assert document.base == "test/"
        assert document.relative_path == "helloworld-de_DE.html"


class TestDocumentErrors:
    """Test rejection of documents that cannot be expanded."""

    def test_null_content(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """A document without content is an error."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir))

        with pytest.raises(NullContentError):
            localizer.process(make_document(None))

    def test_streamed_content(self, locales_dir: Path) -> None:
        """A stream is rejected with a fixed message."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir))
        document = Document(
            "test/helloworld.html", io.BytesIO(b"token1 = Inhalt1"), cwd="test/", base="test/"
        )

        with pytest.raises(StreamingUnsupportedError, match=r"^Streaming not supported$"):
            localizer.process(document)

    def test_undecodable_content(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """Content that is not valid text is rejected."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir))

        with pytest.raises(DocumentDecodeError) as exc_info:
            localizer.process(make_document(b"<h1>\xff</h1>"))

        assert exc_info.value.document_path == "test/helloworld.html"

    def test_unencodable_translation(self, tmp_path: Path) -> None:
        """A translation the output encoding cannot hold is a document error."""
        (tmp_path / "ja_JP.json").write_text('{"t": "\\u65e5\\u672c"}', encoding="ascii")
        localizer = Localizer(LocalizerConfig(locales=tmp_path, encoding="latin-1"))

        with pytest.raises(DocumentEncodeError, match="latin-1"):
            localizer.process(Document("a.txt", b"R.t"))

    def test_unencodable_translation_non_strict(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Non-strict mode skips a document it cannot encode."""
        (tmp_path / "ja_JP.json").write_text('{"t": "\\u65e5\\u672c"}', encoding="ascii")
        localizer = Localizer(LocalizerConfig(locales=tmp_path, encoding="latin-1", strict=False))

        with caplog.at_level(logging.ERROR, logger="doclocalize.pipeline"):
            documents = localizer.process(Document("a.txt", b"R.t"))

        assert documents == ()
        assert "not representable" in caplog.text

    def test_non_strict_logs_and_skips(
        self,
        locales_dir: Path,
        make_document: MakeDocument,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Non-strict mode logs the error and emits nothing for the document."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir, strict=False))

        with caplog.at_level(logging.ERROR, logger="doclocalize.pipeline"):
            documents = localizer.process(make_document(None))

        assert documents == ()
        assert "has no content" in caplog.text

    def test_non_strict_continues_with_next_document(
        self, locales_dir: Path, make_document: MakeDocument
    ) -> None:
        """A failed document does not stop process_all."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir, whitelist="de_DE", strict=False))

        documents = list(localizer.process_all([make_document(None), make_document()]))

        assert _paths(tuple(documents)) == ["test/helloworld-de_DE.html"]


class TestDictionaryErrors:
    """Test failures while loading dictionaries."""

    def test_missing_locales_directory(self, tmp_path: Path) -> None:
        """A missing directory fails construction."""
        with pytest.raises(DictionaryNotFoundError):
            Localizer(LocalizerConfig(locales=tmp_path / "notlocales"))

    def test_default_directory_missing(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Localizer() looks for ./locales."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(DictionaryNotFoundError):
            Localizer()

    def test_default_directory_found(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Localizer() loads ./locales when present."""
        (tmp_path / "locales").mkdir()
        (tmp_path / "locales" / "de_DE.ini").write_text("token1 = Inhalt1\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert Localizer().locales == ("de_DE",)

    def test_malformed_dictionary(self, tmp_path: Path) -> None:
        """A malformed dictionary fails construction by default."""
        (tmp_path / "de_DE.csv").write_text("token1\n", encoding="utf-8")

        with pytest.raises(DictionaryParseError):
            Localizer(LocalizerConfig(locales=tmp_path))

    def test_malformed_dictionary_ignored(self, tmp_path: Path) -> None:
        """ignore_errors keeps the loadable dictionaries."""
        (tmp_path / "de_DE.csv").write_text("token1\n", encoding="utf-8")
        (tmp_path / "en_US.csv").write_text("token1,content1\n", encoding="utf-8")

        localizer = Localizer(LocalizerConfig(locales=tmp_path, ignore_errors=True))

        assert localizer.locales == ("en_US",)
        assert len(localizer.load_errors) == 1
        summary = localizer.get_load_summary()
        assert summary is not None
        assert summary.errors == 1


class TestLocalizerOptions:
    """Test output options."""

    def test_include_original(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """The unmodified input follows the localized copies."""
        localizer = Localizer(
            LocalizerConfig(locales=locales_dir, whitelist="de_DE", include_original=True)
        )
        original = make_document()

        documents = localizer.process(original)

        assert _paths(documents) == ["test/helloworld-de_DE.html", "test/helloworld.html"]
        assert documents[-1] is original

    def test_warn_missing(
        self,
        locales_dir: Path,
        make_document: MakeDocument,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Unresolved tokens are logged per locale."""
        localizer = Localizer(
            LocalizerConfig(locales=locales_dir, whitelist=["de_DE", "en_US"], warn_missing=True)
        )

        with caplog.at_level(logging.WARNING, logger="doclocalize.pipeline"):
            documents = localizer.process(make_document("<p>R.token1 R.nothing.here</p>"))

        assert _contents(documents) == [
            "<p>Inhalt1 R.nothing.here</p>",
            "<p>content1 R.nothing.here</p>",
        ]
        missing = [r for r in caplog.records if "Missing translation" in r.getMessage()]
        assert len(missing) == 2
        assert "de_DE" in missing[0].getMessage()
        assert "en_US" in missing[1].getMessage()
        assert all(r.getMessage().startswith("warning[TRANSLATION_MISSING]") for r in missing)
        assert "--> test/helloworld.html" in missing[0].getMessage()

    def test_no_warnings_by_default(
        self,
        locales_dir: Path,
        make_document: MakeDocument,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Missing translations are silent unless warn_missing is set."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir))

        with caplog.at_level(logging.WARNING, logger="doclocalize.pipeline"):
            localizer.process(make_document("<p>R.nothing</p>"))

        assert "Missing translation" not in caplog.text

    def test_encode_entities(self, locales_dir: Path, make_document: MakeDocument) -> None:
        """Translations are HTML-encoded when requested."""
        localizer = Localizer(
            LocalizerConfig(locales=locales_dir, whitelist="pt-BR", encode_entities=True)
        )

        (document,) = localizer.process(make_document())

        assert document.content == b"<html><body><h1>conte&#250;do1</h1></body></html>"

    def test_repr(self, locales_dir: Path) -> None:
        """Repr lists active locales."""
        localizer = Localizer(LocalizerConfig(locales=locales_dir, whitelist="de_DE"))

        assert "('de_DE',)" in repr(localizer)


class TestLocalizerConfig:
    """Test configuration construction."""

    def test_defaults(self) -> None:
        """Defaults match the documented plugin behavior."""
        config = LocalizerConfig()

        assert str(config.locales) == "./locales"
        assert config.delimiter == DelimiterSpec()
        assert config.filename == FilenameTemplate()
        assert config.strict

    def test_filters_normalized(self) -> None:
        """Single ids and lists become frozensets."""
        config = LocalizerConfig(whitelist="en_US", blacklist=["de_DE", "fr_FR"])

        assert config.whitelist == frozenset({"en_US"})
        assert config.blacklist == frozenset({"de_DE", "fr_FR"})

    def test_from_options_aliases(self) -> None:
        """Plugin-style names map onto fields."""
        config = LocalizerConfig.from_options(
            {
                "locales": "test/locales",
                "includeOriginal": True,
                "warn": True,
                "encodeEntities": True,
                "ignoreErrors": True,
                "validateLocales": True,
                "delimiter": {"prefix": "{{", "suffix": "}}"},
                "filename": "${path}/${lang}/${name}.${ext}",
            }
        )

        assert config.include_original
        assert config.warn_missing
        assert config.encode_entities
        assert config.ignore_errors
        assert config.validate_locales
        assert config.delimiter == DelimiterSpec(prefix="{{", suffix="}}")
        assert config.filename.template == "${path}/${lang}/${name}.${ext}"

    def test_from_options_field_names(self) -> None:
        """Snake_case field names are accepted too."""
        config = LocalizerConfig.from_options({"warn_missing": True, "strict": False})

        assert config.warn_missing
        assert not config.strict

    def test_from_options_empty(self) -> None:
        """No options gives the default configuration."""
        assert LocalizerConfig.from_options(None) == LocalizerConfig()

    def test_unknown_option(self) -> None:
        """Unknown option names are rejected."""
        with pytest.raises(ValueError, match="Unknown option"):
            LocalizerConfig.from_options({"locale": "test/locales"})

    def test_unknown_delimiter_option(self) -> None:
        """Unknown delimiter keys are rejected."""
        with pytest.raises(ValueError, match="Unknown delimiter option"):
            LocalizerConfig(delimiter={"start": "${"})  # type: ignore[arg-type]

    def test_stop_condition_option(self) -> None:
        """A stopCondition string is compiled."""
        config = LocalizerConfig.from_options({"delimiter": {"prefix": "L:", "stopCondition": r"\s"}})

        assert config.delimiter.stop_condition.pattern == r"\s"

    def test_invalid_delimiter_type(self) -> None:
        """Delimiters must be a DelimiterSpec or mapping."""
        with pytest.raises(TypeError, match="delimiter must be"):
            LocalizerConfig(delimiter="R.")  # type: ignore[arg-type]

    def test_filename_without_lang(self) -> None:
        """Templates without ${lang} are rejected."""
        with pytest.raises(ValueError, match=r"\$\{lang\}"):
            LocalizerConfig(filename="${path}/${name}.${ext}")
