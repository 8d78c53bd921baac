"""Token templating: delimiters, scanning/substitution and output filenames.

Python 3.13+.
"""

from doclocalize.templating.delimiter import DEFAULT_DELIMITER, DelimiterSpec
from doclocalize.templating.filename import FilenameTemplate, render_path, split_document_path
from doclocalize.templating.scanner import Token, encode_html_entities, scan_tokens, substitute

__all__ = [
    "DEFAULT_DELIMITER",
    "DelimiterSpec",
    "FilenameTemplate",
    "Token",
    "encode_html_entities",
    "render_path",
    "scan_tokens",
    "split_document_path",
    "substitute",
]
