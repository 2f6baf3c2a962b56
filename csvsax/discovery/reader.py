"""
Character reader with line/column tracking.

Handles:
- Decoding of the raw byte stream with any codec known to ``codecs``
  (``utf-8-sig`` strips a BOM).  Decoding is incremental, one
  ``buffer_size`` block of bytes at a time.
- No newline translation: ``\\r``, ``\\n`` and ``\\r\\n`` reach the lexer
  exactly as they appear in the input.
- SAX ``Locator`` support so content handlers can report positions.

Position rules: ``line`` and ``column`` both start at 1.  A ``\\r``, or a
``\\n`` not preceded by ``\\r``, starts a new line (column back to 1).  The
``\\n`` of a ``\\r\\n`` pair leaves the position unchanged.  Every other
character advances the column.  Position is diagnostic only.
"""

from __future__ import annotations

import codecs
from typing import BinaryIO
from xml.sax.xmlreader import Locator

from csvsax.configs.config import DEFAULT_BUFFER_SIZE
from csvsax.configs.exceptions import DecodingError, SourceError
from csvsax.discovery.base import AbstractSource


class PositionTrackingReader(Locator):
    """
    Decode a source into characters, one at a time or in blocks.

    Args:
        source:      The byte source to read.
        encoding:    Codec name used to decode the bytes.
        buffer_size: Number of bytes requested from the stream per block.

    Usage:
        with PositionTrackingReader(source, "utf-8") as reader:
            while (char := reader.read_char()) is not None:
                ...
    """

    def __init__(
        self,
        source: AbstractSource,
        encoding: str,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self.source = source
        self.encoding = encoding
        self.buffer_size = buffer_size
        self.line = 1
        self.column = 1
        self._stream: BinaryIO | None = None
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
        self._chunk = ""
        self._pos = 0
        self._last: str | None = None
        self._eof = False

    # ── lifecycle ────────────────────────────────────────────────────────

    def open(self) -> None:
        """
        Open the underlying byte stream.

        Raises:
            SourceError: If the source cannot be opened.
        """
        self._stream = self.source.open_stream()

    def close(self) -> None:
        """Close the underlying stream.  Safe to call more than once."""
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    @property
    def closed(self) -> bool:
        return self._stream is None

    def __enter__(self) -> "PositionTrackingReader":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
        return None

    # ── reading ──────────────────────────────────────────────────────────

    def read_char(self) -> str | None:
        """
        Return the next character, or ``None`` once the input is exhausted.

        Raises:
            SourceError:   On an I/O failure of the underlying stream.
            DecodingError: If the bytes are invalid for ``encoding``.
        """
        if self._pos >= len(self._chunk) and not self._fill():
            return None
        char = self._chunk[self._pos]
        self._pos += 1
        self._advance(char)
        return char

    def readinto(self, buffer: list) -> int:
        """
        Fill ``buffer`` with up to ``len(buffer)`` characters.

        Returns:
            The number of characters stored; ``0`` at end of input.
        """
        count = 0
        while count < len(buffer):
            char = self.read_char()
            if char is None:
                break
            buffer[count] = char
            count += 1
        return count

    def _fill(self) -> bool:
        """Decode the next non-empty block into ``_chunk``.  False at end of input."""
        if self._stream is None:
            raise SourceError(
                "Reader is not open.",
                source_uri=self.source.uri,
                line=self.line,
                column=self.column,
            )
        while not self._eof:
            try:
                data = self._stream.read(self.buffer_size)
            except OSError as e:
                raise SourceError(
                    f"Read failed: {e}",
                    source_uri=self.source.uri,
                    line=self.line,
                    column=self.column,
                ) from e
            self._eof = not data
            try:
                text = self._decoder.decode(data, final=self._eof)
            except UnicodeDecodeError as e:
                raise DecodingError(
                    f"Invalid byte sequence: {e.reason}",
                    source_uri=self.source.uri,
                    line=self.line,
                    column=self.column,
                    encoding=self.encoding,
                ) from e
            if text:
                self._chunk = text
                self._pos = 0
                return True
        return False

    def _advance(self, char: str) -> None:
        if char == "\r" or (char == "\n" and self._last != "\r"):
            self.line += 1
            self.column = 1
        elif char != "\n":
            self.column += 1
        self._last = char

    # ── xml.sax Locator ──────────────────────────────────────────────────

    def getColumnNumber(self) -> int:
        return self.column

    def getLineNumber(self) -> int:
        return self.line

    def getPublicId(self) -> None:
        return None

    def getSystemId(self) -> str:
        return self.source.uri
