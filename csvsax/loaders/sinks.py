"""
Ready-made content handlers for generator output.

``RecordingSink``  keeps every event as a plain tuple, handy for tests,
                   idempotence checks and callers that want rows in memory.
``xml_writer``     serialises the events as an XML document.

Recorded event shapes::

    ("start_document",)
    ("start_prefix", prefix, uri)
    ("start", local_name, ((attr, value), ...))
    ("text", characters)
    ("end", local_name)
    ("end_prefix", prefix)
    ("end_document",)
"""

from __future__ import annotations

from typing import IO
from xml.sax.handler import ContentHandler
from xml.sax.saxutils import XMLGenerator

from csvsax.loaders.emitter import COLUMN, COMMENT, FIELD, HEADER, RECORD


class RecordingSink(ContentHandler):
    def __init__(self) -> None:
        super().__init__()
        self.events: list[tuple] = []
        self.locator = None

    # ── ContentHandler interface ─────────────────────────────────────────

    def setDocumentLocator(self, locator) -> None:
        self.locator = locator

    def startDocument(self) -> None:
        self.events.append(("start_document",))

    def endDocument(self) -> None:
        self.events.append(("end_document",))

    def startPrefixMapping(self, prefix, uri) -> None:
        self.events.append(("start_prefix", prefix, uri))

    def endPrefixMapping(self, prefix) -> None:
        self.events.append(("end_prefix", prefix))

    def startElementNS(self, name, qname, attrs) -> None:
        attributes = tuple((key[1], value) for key, value in attrs.items())
        self.events.append(("start", name[1], attributes))

    def endElementNS(self, name, qname) -> None:
        self.events.append(("end", name[1]))

    def startElement(self, name, attrs) -> None:
        self.events.append(("start", name, tuple(attrs.items())))

    def endElement(self, name) -> None:
        self.events.append(("end", name))

    def characters(self, content) -> None:
        self.events.append(("text", content))

    # ── queries ──────────────────────────────────────────────────────────

    def elements(self, name: str) -> list[dict[str, str]]:
        """Attributes of every ``name`` element, in document order."""
        return [dict(e[2]) for e in self.events if e[0] == "start" and e[1] == name]

    def texts(self, name: str) -> list[str]:
        """Text content of every ``name`` element, in document order."""
        found: list[str] = []
        current: list[str] | None = None
        for event in self.events:
            if event[0] == "start" and event[1] == name:
                current = []
            elif event[0] == "text" and current is not None:
                current.append(event[1])
            elif event[0] == "end" and event[1] == name and current is not None:
                found.append("".join(current))
                current = None
        return found

    def as_rows(self) -> list[list[str]]:
        """
        Field texts grouped per ``header``/``record`` element.

        Comments are skipped; the header row (if any) comes first.
        """
        rows: list[list[str]] = []
        row: list[str] | None = None
        cell: list[str] | None = None
        for event in self.events:
            kind = event[0]
            if kind == "start" and event[1] in (HEADER, RECORD):
                row = []
            elif kind == "start" and event[1] in (COLUMN, FIELD):
                cell = []
            elif kind == "text" and cell is not None:
                cell.append(event[1])
            elif kind == "end" and event[1] in (COLUMN, FIELD) and row is not None:
                row.append("".join(cell or []))
                cell = None
            elif kind == "end" and event[1] in (HEADER, RECORD) and row is not None:
                rows.append(row)
                row = None
        return rows

    def comments(self) -> list[str]:
        return self.texts(COMMENT)


def xml_writer(out: IO, encoding: str = "utf-8") -> XMLGenerator:
    """
    Return a content handler that writes XML to ``out``.

    ``out`` may be a text or binary stream; for binary streams the bytes
    are encoded with ``encoding``, which is also written in the XML
    declaration.  Empty elements are written in their short form.
    """
    return XMLGenerator(out, encoding=encoding, short_empty_elements=True)
