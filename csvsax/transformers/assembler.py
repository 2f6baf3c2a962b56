"""
Field and record assembly: the element-boundary half of the CSV parser.

The lexer decides *where* a field or record ends; the assembler decides
*what* that produces:

  - ``close_field``   : emit the buffered text as ``column`` (header row) or
                        ``field`` (data row), or skip it if it is empty and
                        empty fields are disabled.  The field counter always
                        advances.
  - ``close_record``  : pad to the header width (empty-fields mode only) and
                        close the row element, if one was opened.
  - ``advance_record`` : move to the next record number; leaving the header
                        row freezes the column registry.

Row elements are opened lazily by the first emitted field, so a row whose
fields are all suppressed produces no element at all (it still consumes a
record number).
"""

from __future__ import annotations

from enum import Enum

from csvsax.configs.config import GeneratorConfig
from csvsax.loaders.emitter import (
    COLUMN,
    COMMENT,
    FIELD,
    FIELD_LEVEL,
    ROW_LEVEL,
    EventEmitter,
)
from csvsax.transformers.registry import ColumnNameRegistry


class RowKind(str, Enum):
    """Kind of the row being assembled; the value is its element name."""

    HEADER = "header"
    DATA = "record"


class RecordAssembler:
    """
    Owns the field buffer, the field/record counters and the column registry.

    Args:
        emitter:  Where assembled elements are sent.
        config:   Supplies ``process_headers``, ``empty_fields`` and
                  ``field_names``.
        registry: Column registry to fill from the header row.  A fresh one
                  is created when omitted.

    Attributes:
        row_kind:         ``HEADER`` until the header row is finished, then ``DATA``.
        record_number:    0 for the header row, 1-based for data rows.
        field_number:     1-based position of the next field in the current row.
        container_open:   True while a ``header``/``record`` element is open.
        records_emitted:  Number of ``record`` elements closed so far.
        fields_emitted:   Number of ``field`` elements emitted so far.
        comments_emitted: Number of ``comment`` elements emitted so far.
    """

    def __init__(
        self,
        emitter: EventEmitter,
        config: GeneratorConfig,
        registry: ColumnNameRegistry | None = None,
    ) -> None:
        self.emitter = emitter
        self.process_headers = config.process_headers
        self.empty_fields = config.empty_fields
        self.field_names = config.field_names
        self.registry = registry if registry is not None else ColumnNameRegistry()
        # Reused for every field; cleared, never reallocated.
        self._arena: list[str] = []
        self.reset()

    def reset(self) -> None:
        """Return to the state before the first character of a document."""
        self._arena.clear()
        self.registry.clear()
        self.row_kind = RowKind.HEADER if self.process_headers else RowKind.DATA
        self.record_number = 0 if self.process_headers else 1
        self.field_number = 1
        self.container_open = False
        self.records_emitted = 0
        self.fields_emitted = 0
        self.comments_emitted = 0

    # ── buffer ───────────────────────────────────────────────────────────

    def append(self, char: str) -> None:
        self._arena.append(char)

    @property
    def has_text(self) -> bool:
        return bool(self._arena)

    # ── boundaries ───────────────────────────────────────────────────────

    def close_field(self) -> None:
        """Finish the current field and advance the field counter."""
        if not self._arena and not self.empty_fields:
            self.field_number += 1
            return

        if not self.container_open:
            self._open_container()

        text = "".join(self._arena)
        attributes = [("number", str(self.field_number))]
        if self.row_kind is RowKind.HEADER:
            self.registry.bind(self.field_number, text)
            element = COLUMN
        else:
            element = FIELD
            name = self.registry.get(self.field_number)
            if name is not None and self.field_names:
                attributes.append(("column", name))
            self.fields_emitted += 1

        self.emitter.indent(FIELD_LEVEL)
        self.emitter.text_element(element, text, attributes)
        self._arena.clear()
        self.field_number += 1

    def close_record(self) -> None:
        """Close the open row element (if any) and reset the field counter."""
        if self.container_open:
            if self.row_kind is RowKind.DATA and self.empty_fields and len(self.registry):
                while self.field_number <= len(self.registry):
                    self.close_field()
            self.emitter.indent(ROW_LEVEL)
            self.emitter.end_element(self.row_kind.value)
            self.container_open = False
            if self.row_kind is RowKind.DATA:
                self.records_emitted += 1
        self.field_number = 1

    def advance_record(self) -> None:
        self.record_number += 1
        if self.row_kind is RowKind.HEADER:
            self.row_kind = RowKind.DATA
            self.registry.freeze()

    def flush(self) -> None:
        """Emit trailing unterminated text and close whatever row is still open."""
        if self._arena:
            self.close_field()
        if self.container_open:
            self.close_record()

    def comment(self, text: str) -> None:
        """Emit a stand-alone ``comment`` element; counters are untouched."""
        self.emitter.indent(ROW_LEVEL)
        self.emitter.text_element(COMMENT, text)
        self.comments_emitted += 1

    def _open_container(self) -> None:
        self.emitter.indent(ROW_LEVEL)
        if self.row_kind is RowKind.HEADER:
            self.emitter.start_element(RowKind.HEADER.value)
        else:
            self.emitter.start_element(
                RowKind.DATA.value, [("number", str(self.record_number))]
            )
        self.container_open = True
