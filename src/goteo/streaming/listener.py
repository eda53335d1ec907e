"""Adapter from streamed text prefixes to parsed documents.

The streaming engine delivers raw text. A display layer wants node trees.
DocumentStream sits between them as the engine's ``on_partial`` callback.
It re-parses each prefix with parse_incremental and forwards the Document.

Usage:
    stream = DocumentStream(lambda doc, done: bubble.update(render(doc)))
    engine.start(reply_text, message_id, stream)

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

from goteo.incremental import parse_incremental
from goteo.nodes import Document
from goteo.parser import parse

DocumentCallback: TypeAlias = Callable[[Document, bool], object]


class DocumentStream:
    """``on_partial`` callback that parses each delivered prefix.

    Args:
        on_document: Called as ``on_document(document, is_done)`` for every
            delivered prefix
        source_file: Optional source name recorded in locations

    """

    __slots__ = ("_on_document", "_source_file", "_text", "_document")

    def __init__(self, on_document: DocumentCallback, *, source_file: str | None = None) -> None:
        self._on_document = on_document
        self._source_file = source_file
        self._text = ""
        self._document: Document | None = None

    @property
    def text(self) -> str:
        """The most recently delivered prefix."""
        return self._text

    @property
    def document(self) -> Document | None:
        """Document for the most recent prefix, or None before the first one."""
        return self._document

    def __call__(self, text: str, is_done: bool) -> None:
        if self._document is None:
            document = parse(text, source_file=self._source_file)
        else:
            document = parse_incremental(
                text, self._document, self._text, source_file=self._source_file
            )
        self._text = text
        self._document = document
        self._on_document(document, is_done)
