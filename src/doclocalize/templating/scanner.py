"""Token scanning and substitution.

Finds delimiter-bounded tokens in document text and replaces each one whose
dotted path resolves to a translation. Unresolved tokens stay in the output
verbatim, delimiters included.

Python 3.13+.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from doclocalize.constants import PATH_SEPARATOR
from doclocalize.templating.delimiter import DEFAULT_DELIMITER, DelimiterSpec

if TYPE_CHECKING:
    from doclocalize.dictionary import KeyPath, LocaleDictionary

__all__ = [
    "Token",
    "encode_html_entities",
    "scan_tokens",
    "substitute",
]


@dataclass(frozen=True, slots=True)
class Token:
    """A token found in document text.

    Attributes:
        path: Dotted key path named by the token
        start: Offset of the first prefix character
        end: Offset just past the token (exclusive), including any suffix
    """

    path: KeyPath
    start: int
    end: int


def scan_tokens(content: str, delimiter: DelimiterSpec = DEFAULT_DELIMITER) -> Iterator[Token]:
    """Yield tokens in one left-to-right pass.

    Matches never overlap: scanning resumes just past each token.

    A prefix directly followed by a stop character (or by the suffix) has
    no path and is not a token. In suffix mode, a prefix without a later
    suffix is not a token, and when another prefix appears before the
    suffix the scan restarts at that inner prefix. Without a suffix,
    trailing dots are treated as punctuation ("... R.token1." ends a
    sentence) and stay outside the token.

    Args:
        content: Document text
        delimiter: Token delimiter configuration

    Yields:
        Tokens in order of appearance
    """
    prefix = delimiter.prefix
    suffix = delimiter.suffix
    pos = 0
    while (start := content.find(prefix, pos)) != -1:
        body_start = start + len(prefix)
        if suffix is not None:
            body_end = content.find(suffix, body_start)
            if body_end == -1:
                return
            if content.find(prefix, body_start, body_end) != -1:
                pos = body_start
                continue
            path = content[body_start:body_end].strip()
            end = body_end + len(suffix)
        else:
            match = delimiter.stop_condition.search(content, body_start)
            body_end = match.start() if match else len(content)
            path = content[body_start:body_end].rstrip(PATH_SEPARATOR)
            end = body_start + len(path)
        if not path:
            pos = body_start
            continue
        yield Token(path, start, end)
        pos = end


def encode_html_entities(value: str) -> str:
    """Escape markup characters and encode non-ASCII as character references.

    Example:
        >>> encode_html_entities('conteúdo <1> & "2"')
        'conte&#250;do &lt;1&gt; &amp; &quot;2&quot;'
    """
    return html.escape(value, quote=True).encode("ascii", "xmlcharrefreplace").decode("ascii")


def substitute(
    content: str,
    dictionary: LocaleDictionary,
    delimiter: DelimiterSpec = DEFAULT_DELIMITER,
    *,
    on_missing: Callable[[KeyPath], None] | None = None,
    escape: Callable[[str], str] | None = None,
) -> str:
    """Replace every resolvable token with its translation.

    Text outside tokens is copied unchanged. Content without the prefix is
    returned as is.

    Args:
        content: Document text
        dictionary: Translations to resolve token paths against
        delimiter: Token delimiter configuration
        on_missing: Called with the path of each token left unresolved
        escape: Applied to each substituted translation

    Returns:
        Text with resolved tokens replaced

    Example:
        >>> de = LocaleDictionary("de_DE", {"token1": "Inhalt1"})
        >>> substitute("<h1>R.token1</h1> R.token9", de)
        '<h1>Inhalt1</h1> R.token9'
    """
    if delimiter.prefix not in content:
        return content

    parts: list[str] = []
    pos = 0
    for token in scan_tokens(content, delimiter):
        parts.append(content[pos : token.start])
        value = dictionary.lookup(token.path)
        if value is None:
            parts.append(content[token.start : token.end])
            if on_missing is not None:
                on_missing(token.path)
        else:
            parts.append(escape(value) if escape is not None else value)
        pos = token.end
    parts.append(content[pos:])
    return "".join(parts)
