#!/usr/bin/env python3
"""Command-line entry point.

Reads documents from disk, writes one localized copy per locale.

Usage:
    doclocalize --locales locales src/index.html
    doclocalize --locales locales --whitelist en_US --whitelist pt-BR src/*.html
    doclocalize --locales locales --base src --out dist src/index.html
    doclocalize --locales locales --prefix '${' --suffix '}' page.html
    doclocalize --locales locales --list-locales

Exit Codes:
    0   All documents localized
    1   Localization error (dictionaries missing or malformed, bad document)
    2   File read/write error

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from doclocalize.constants import DEFAULT_FILENAME_TEMPLATE, DEFAULT_LOCALES_DIR, DEFAULT_PREFIX
from doclocalize.diagnostics import LocalizationError
from doclocalize.document import Document
from doclocalize.locale_utils import locale_display_name
from doclocalize.pipeline import Localizer, LocalizerConfig
from doclocalize.templating import DelimiterSpec

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="doclocalize",
        description="Create one localized copy of each document per locale dictionary.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write test/helloworld-<locale>.html next to the source:
  doclocalize --locales test/locales test/helloworld.html

  # Mirror src/ into dist/<locale>/:
  doclocalize --locales locales --base src --out dist \\
      --filename '${path}/${lang}/${name}.${ext}' src/index.html
""",
    )
    parser.add_argument("files", nargs="*", type=Path, help="Documents to localize")
    parser.add_argument(
        "--locales",
        default=DEFAULT_LOCALES_DIR,
        help=f"Directory of dictionary files (default: {DEFAULT_LOCALES_DIR})",
    )
    filters = parser.add_mutually_exclusive_group()
    filters.add_argument(
        "--whitelist", action="append", metavar="LOCALE", help="Only process this locale"
    )
    filters.add_argument(
        "--blacklist", action="append", metavar="LOCALE", help="Skip this locale"
    )
    parser.add_argument(
        "--prefix", default=DEFAULT_PREFIX, help=f"Token prefix (default: {DEFAULT_PREFIX})"
    )
    parser.add_argument("--suffix", default=None, help="Token suffix (default: none)")
    parser.add_argument(
        "--filename",
        default=DEFAULT_FILENAME_TEMPLATE,
        help="Output path template using ${path}, ${name}, ${ext}, ${lang}",
    )
    parser.add_argument(
        "--base", type=Path, default=None, help="Base directory of the documents"
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output root; paths relative to --base are recreated below it",
    )
    parser.add_argument(
        "--include-original", action="store_true", help="Also copy the unmodified document"
    )
    parser.add_argument("--warn", action="store_true", help="Warn about missing translations")
    parser.add_argument(
        "--encode-entities", action="store_true", help="HTML-encode inserted translations"
    )
    parser.add_argument(
        "--ignore-errors", action="store_true", help="Skip malformed dictionary files"
    )
    parser.add_argument(
        "--validate-locales",
        action="store_true",
        help="Reject dictionary files not named after a known locale",
    )
    parser.add_argument(
        "--list-locales", action="store_true", help="List active locales and exit"
    )
    parser.add_argument("--verbose", "-v", action="count", default=0, help="More logging")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _config_from_args(args: argparse.Namespace) -> LocalizerConfig:
    return LocalizerConfig(
        locales=args.locales,
        whitelist=args.whitelist,
        blacklist=args.blacklist,
        delimiter=DelimiterSpec(prefix=args.prefix, suffix=args.suffix),
        filename=args.filename,
        include_original=args.include_original,
        warn_missing=args.warn,
        encode_entities=args.encode_entities,
        ignore_errors=args.ignore_errors,
        validate_locales=args.validate_locales,
    )


def _report(error: LocalizationError) -> None:
    if error.diagnostic is not None:
        print(error.diagnostic.format_error(), file=sys.stderr)
    else:
        print(f"[ERROR] {error}", file=sys.stderr)


def _target_path(output: Document, out_dir: Path | None) -> Path:
    if out_dir is None:
        return Path(output.path)
    return out_dir / output.relative_path


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        localizer = Localizer(_config_from_args(args))
    except ValueError as e:
        parser.error(str(e))
    except LocalizationError as e:
        _report(e)
        return 1

    if args.list_locales:
        for locale in localizer.locales:
            print(f"{locale}\t{locale_display_name(locale)}")
        return 0

    if not args.files:
        parser.error("no documents given")

    cwd = os.getcwd()
    written = 0
    for file_path in args.files:
        try:
            content = file_path.read_bytes()
        except OSError as e:
            print(f"[ERROR] Cannot read file: {e}", file=sys.stderr)
            return 2

        base = args.base if args.base is not None else file_path.parent
        document = Document(str(file_path), content, cwd=cwd, base=str(base))
        try:
            outputs = localizer.process(document)
        except LocalizationError as e:
            _report(e)
            return 1

        for output in outputs:
            target = _target_path(output, args.out)
            if output is document and target.resolve() == file_path.resolve():
                continue
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(output.content)  # type: ignore[arg-type]
            except OSError as e:
                print(f"[ERROR] Cannot write file: {e}", file=sys.stderr)
                return 2
            logger.info("%s => %s", file_path, target)
            written += 1

    logger.info("Wrote %d file(s) for %d locale(s)", written, len(localizer.locales))
    return 0


if __name__ == "__main__":
    sys.exit(main())
