"""
Bridge from parser events to an ``xml.sax`` content handler.

The emitter owns no state beyond the handler and the indent flag.  It
namespace-qualifies every element (``csv:`` prefix), converts ordered
``(name, value)`` attribute lists into ``AttributesNSImpl`` and forwards the
call immediately; nothing is buffered or validated here.

Handler failures:
  - A ``GenerationError`` raised by the handler propagates unchanged.
  - Any other exception is wrapped in ``SinkError`` (chained) so the
    generator can tell sink failures from source failures.
"""

from __future__ import annotations

from typing import Iterable
from xml.sax.handler import ContentHandler
from xml.sax.xmlreader import AttributesNSImpl, Locator

from csvsax.configs.config import NAMESPACE_PREFIX, NAMESPACE_URI
from csvsax.configs.exceptions import GenerationError, SinkError

# Element local names.
DOCUMENT = "document"
HEADER = "header"
COLUMN = "column"
RECORD = "record"
FIELD = "field"
COMMENT = "comment"

# Indent levels for the document, row and field nesting depths.
DOCUMENT_LEVEL = 0
ROW_LEVEL = 4
FIELD_LEVEL = 8

Attributes = Iterable[tuple[str, str]]


class EventEmitter:
    """
    Forward generator events to ``handler``.

    Args:
        handler: Any ``xml.sax.handler.ContentHandler``.
        indent:  Emit ``"\\n" + spaces`` text before structural elements.
    """

    def __init__(self, handler: ContentHandler, indent: bool = True) -> None:
        self.handler = handler
        self.indent_enabled = indent

    def start_document(self, locator: Locator | None = None) -> None:
        if locator is not None:
            self._deliver("setDocumentLocator", locator)
        self._deliver("startDocument")
        self._deliver("startPrefixMapping", NAMESPACE_PREFIX, NAMESPACE_URI)

    def end_document(self) -> None:
        self._deliver("endPrefixMapping", NAMESPACE_PREFIX)
        self._deliver("endDocument")

    def start_element(self, name: str, attributes: Attributes = ()) -> None:
        values = {}
        qnames = {}
        for key, value in attributes:
            values[(None, key)] = value
            qnames[(None, key)] = key
        self._deliver(
            "startElementNS",
            (NAMESPACE_URI, name),
            f"{NAMESPACE_PREFIX}:{name}",
            AttributesNSImpl(values, qnames),
        )

    def end_element(self, name: str) -> None:
        self._deliver("endElementNS", (NAMESPACE_URI, name), f"{NAMESPACE_PREFIX}:{name}")

    def characters(self, text: str) -> None:
        self._deliver("characters", text)

    def text_element(self, name: str, text: str, attributes: Attributes = ()) -> None:
        """Emit ``<name attributes>text</name>``."""
        self.start_element(name, attributes)
        self.characters(text)
        self.end_element(name)

    def indent(self, level: int) -> None:
        if self.indent_enabled:
            self.characters("\n" + " " * level)

    def _deliver(self, event: str, *args) -> None:
        try:
            getattr(self.handler, event)(*args)
        except GenerationError:
            raise
        except Exception as e:
            raise SinkError(f"Content handler rejected event: {e}", event=event) from e
