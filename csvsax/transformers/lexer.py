"""
Single-pass character automaton for delimited text.

Each character read from the ``PositionTrackingReader`` is classified, in
priority order, as:

  1. comment start  : ``#`` at offset 0 of a physical line (comments enabled)
  2. escape         : toggles QUOTED/UNQUOTED; ``""`` inside a quoted
                      section yields one literal ``"``
  3. separator      : ends the field (UNQUOTED only)
  4. line terminator: ends the field and the record (UNQUOTED only);
                      ``\\r\\n`` and runs of blank lines count once
  5. literal        : appended to the field buffer

Separators and terminators inside a QUOTED section are literals.  An escape
left open at end of input is not an error: the rest of the stream becomes
text of the last field.

The loop stops when the input is exhausted or, before reading the next
character, when the data record limit has been passed.  The run only counts
as truncated if some character other than a line terminator remains.
"""

from __future__ import annotations

import logging
from enum import Enum

from csvsax.configs.config import COMMENT_MARKER, GeneratorConfig
from csvsax.discovery.reader import PositionTrackingReader
from csvsax.transformers.assembler import RecordAssembler
from csvsax.utils.validation import LINE_TERMINATORS

logger = logging.getLogger(__name__)


class QuoteState(Enum):
    UNQUOTED = "unquoted"
    QUOTED = "quoted"

    def toggled(self) -> "QuoteState":
        if self is QuoteState.UNQUOTED:
            return QuoteState.QUOTED
        return QuoteState.UNQUOTED


class DelimitedStreamLexer:
    """
    Drive a ``RecordAssembler`` from the characters of a reader.

    Args:
        reader:    Open reader positioned at the first character.
        assembler: Receives buffer and boundary calls.
        config:    Supplies separator, escape, comments and max_records.

    Attributes:
        state:       Current ``QuoteState``.
        previous:    Last character processed by the main loop (comment
                     lines do not update it).
        line_offset: 0-based offset of the next character in its physical line.
        truncated:   True if ``max_records`` stopped the loop with input left over.
    """

    def __init__(
        self,
        reader: PositionTrackingReader,
        assembler: RecordAssembler,
        config: GeneratorConfig,
    ) -> None:
        self.reader = reader
        self.assembler = assembler
        self.separator = config.separator
        self.escape = config.escape
        self.comments = config.comments_enabled
        self.max_records = config.max_records
        self.unlimited = config.unlimited
        self.state = QuoteState.UNQUOTED
        self.previous: str | None = None
        self.line_offset = 0
        self.truncated = False
        self._pending: str | None = None

    def run(self) -> None:
        """Consume the reader until exhaustion or the record limit, then flush."""
        while True:
            if self._limit_reached():
                self.truncated = self._input_remains()
                if self.truncated:
                    logger.debug(
                        "Record limit %d reached at line %d",
                        self.max_records,
                        self.reader.line,
                    )
                break
            char = self._next_char()
            if char is None:
                break
            self._consume(char)

        self.assembler.flush()

    def _consume(self, char: str) -> None:
        if self.comments and self.line_offset == 0 and char == COMMENT_MARKER:
            self._consume_comment()
            return

        assembler = self.assembler
        if char == self.escape:
            if self.state is QuoteState.UNQUOTED and self.previous == self.escape:
                assembler.append(self.escape)
            self.state = self.state.toggled()
        elif self.state is QuoteState.UNQUOTED and char == self.separator:
            assembler.close_field()
        elif self.state is QuoteState.UNQUOTED and char in LINE_TERMINATORS:
            if self.previous not in LINE_TERMINATORS:
                assembler.close_field()
                assembler.close_record()
                assembler.advance_record()
            # Incremented to 0 below.
            self.line_offset = -1
        else:
            assembler.append(char)

        self.previous = char
        self.line_offset += 1

    def _consume_comment(self) -> None:
        text: list[str] = []
        char = self.reader.read_char()
        while char is not None and char not in LINE_TERMINATORS:
            text.append(char)
            char = self.reader.read_char()
        while char is not None and char in LINE_TERMINATORS:
            char = self.reader.read_char()
        # First character of the next line, handled by the main loop.
        self._pending = char
        self.assembler.comment("".join(text))

    def _next_char(self) -> str | None:
        if self._pending is not None:
            char, self._pending = self._pending, None
            return char
        return self.reader.read_char()

    def _limit_reached(self) -> bool:
        return not self.unlimited and self.max_records < self.assembler.record_number

    def _input_remains(self) -> bool:
        char = self._next_char()
        while char is not None and char in LINE_TERMINATORS:
            char = self._next_char()
        return char is not None
