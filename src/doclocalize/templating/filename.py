"""Output filename templates.

Expands ``${path}``, ``${name}``, ``${ext}`` and ``${lang}`` in a template
into the output path of one localized document.

Python 3.13+.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from doclocalize.constants import DEFAULT_FILENAME_TEMPLATE, FILENAME_PLACEHOLDERS

__all__ = [
    "DEFAULT_FILENAME_TEMPLATE",
    "FilenameTemplate",
    "render_path",
    "split_document_path",
]

_PLACEHOLDER = re.compile(r"\$\{(\w+)\}")


def split_document_path(original_path: str) -> tuple[str, str, str]:
    """Split a path into directory, base name and extension.

    Example:
        >>> split_document_path("test/helloworld.html")
        ('test', 'helloworld', 'html')
        >>> split_document_path("index.min.js")
        ('.', 'index.min', 'js')
    """
    directory, filename = os.path.split(original_path)
    name, ext = os.path.splitext(filename)
    return directory or ".", name, ext.removeprefix(".")


@dataclass(frozen=True, slots=True)
class FilenameTemplate:
    """Template for localized output paths.

    Attributes:
        template: Pattern with ${path}, ${name}, ${ext} and ${lang}
            placeholders. Defaults to "${path}/${name}-${lang}.${ext}".

    Example:
        >>> FilenameTemplate().render("test/helloworld.html", "de_DE")
        'test/helloworld-de_DE.html'
        >>> FilenameTemplate("${path}/${lang}/${name}.${ext}").render("test/helloworld.html", "de_DE")
        'test/de_DE/helloworld.html'
    """

    template: str = DEFAULT_FILENAME_TEMPLATE

    def __post_init__(self) -> None:
        """Validate the template at construction.

        Raises:
            ValueError: If template lacks the ${lang} placeholder
        """
        # Without ${lang} every locale would be written to the same path
        if "${lang}" not in self.template:
            msg = f"Filename template must contain '${{lang}}', got: '{self.template}'"
            raise ValueError(msg)

    def __str__(self) -> str:
        return self.template

    def render(self, original_path: str, lang: str) -> str:
        """Expand the template for one document and locale.

        Substitution is a single pass: replacement values are never
        expanded again, and unknown ${...} sequences are kept as is.

        Args:
            original_path: Path of the input document
            lang: Locale id

        Returns:
            Output path
        """
        path, name, ext = split_document_path(original_path)
        values = {"path": path, "name": name, "ext": ext, "lang": lang}

        def expand(match: re.Match[str]) -> str:
            key = match.group(1)
            return values[key] if key in FILENAME_PLACEHOLDERS else match.group(0)

        return _PLACEHOLDER.sub(expand, self.template)


def render_path(template: FilenameTemplate | str, original_path: str, lang: str) -> str:
    """Expand a filename template for one document and locale.

    Args:
        template: FilenameTemplate or template string
        original_path: Path of the input document
        lang: Locale id

    Returns:
        Output path
    """
    if isinstance(template, str):
        template = FilenameTemplate(template)
    return template.render(original_path, lang)
