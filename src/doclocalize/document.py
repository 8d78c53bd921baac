"""Documents flowing through the localization pipeline.

A document is a path plus content. Content is either a byte buffer, None
(no content at all) or a stream that has not been read yet. Only buffered
documents can be expanded.

Python 3.13+.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import IO, TypeAlias

from doclocalize.constants import DEFAULT_ENCODING
from doclocalize.enums import ContentKind

__all__ = ["Document", "DocumentContent"]

DocumentContent: TypeAlias = bytes | IO[bytes] | None
"""Byte buffer, unread stream, or None for a document without content."""


@dataclass(frozen=True, slots=True)
class Document:
    """A file handed to the pipeline by its host.

    Attributes:
        path: Document path (e.g., 'test/helloworld.html')
        content: Bytes, an unread stream, or None
        cwd: Working directory the host resolved path against
        base: Base directory of the source tree (used for relative paths)

    Example:
        >>> doc = Document.from_text("test/helloworld.html", "<h1>R.token1</h1>", base="test")
        >>> doc.content_kind
        <ContentKind.BUFFER: 'buffer'>
        >>> doc.relative_path
        'helloworld.html'
    """

    path: str
    content: DocumentContent
    cwd: str = "."
    base: str | None = None

    def __post_init__(self) -> None:
        """Snapshot mutable byte buffers and reject non-binary content.

        Raises:
            TypeError: If content is not bytes, None or a readable stream
                (text must be encoded first, see from_text)
        """
        match self.content:
            case None | bytes():
                pass
            case bytearray() | memoryview():
                object.__setattr__(self, "content", bytes(self.content))
            case str():
                msg = f"Document '{self.path}' content must be bytes, not str; use Document.from_text"
                raise TypeError(msg)
            case _ if not callable(getattr(self.content, "read", None)):
                msg = (
                    f"Document '{self.path}' content must be bytes, None or a readable "
                    f"stream, got {type(self.content).__name__}"
                )
                raise TypeError(msg)

    @classmethod
    def from_text(
        cls,
        path: str,
        text: str,
        *,
        cwd: str = ".",
        base: str | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> Document:
        """Create a buffered document from text."""
        return cls(path, text.encode(encoding), cwd=cwd, base=base)

    @property
    def content_kind(self) -> ContentKind:
        """Whether content is buffered, missing or streamed."""
        match self.content:
            case None:
                return ContentKind.NULL
            case bytes():
                return ContentKind.BUFFER
            case _:
                return ContentKind.STREAM

    @property
    def is_buffer(self) -> bool:
        """Check if content is fully buffered bytes."""
        return self.content_kind == ContentKind.BUFFER

    @property
    def is_null(self) -> bool:
        """Check if the document has no content."""
        return self.content_kind == ContentKind.NULL

    @property
    def is_stream(self) -> bool:
        """Check if content is an unread stream."""
        return self.content_kind == ContentKind.STREAM

    @property
    def relative_path(self) -> str:
        """Path relative to base (the path itself when base is unset)."""
        if self.base is None:
            return self.path
        return os.path.relpath(self.path, self.base)

    def text(self, encoding: str = DEFAULT_ENCODING) -> str:
        """Decode buffered content.

        Raises:
            TypeError: If content is not buffered
            UnicodeDecodeError: If content is not valid in encoding
        """
        if not isinstance(self.content, bytes):
            msg = f"Document '{self.path}' has no buffered content ({self.content_kind})"
            raise TypeError(msg)
        return self.content.decode(encoding)

    def derive(self, path: str, content: bytes) -> Document:
        """Return a new document with the same cwd and base."""
        return replace(self, path=path, content=content)
