"""
Custom exceptions for the CSV → SAX event generator.

Hierarchy:
    GenerationError
    ├── ConfigError       An option value cannot be used; nothing was read.
    ├── SourceError       The source could not be opened or read; parse aborted.
    │   └── DecodingError Bytes are invalid for the configured encoding; parse aborted.
    ├── SinkError         The downstream content handler rejected an event.
    └── RegistryError     Illegal mutation of the header column registry.

Malformed quoting is never an error: an escape left open simply runs to the
end of input.  Truncation via ``max_records`` is not an error either.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for all generator errors."""


class ConfigError(GenerationError):
    """
    Raised when a configuration value is invalid.

    Args:
        message: Human-readable description of the failure.
        option:  Parameter name (e.g. ``"separator"``) that was rejected.
    """

    def __init__(self, message: str, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option

    def __str__(self) -> str:
        base = super().__str__()
        if self.option:
            return f"{base} | option={self.option}"
        return base


class SourceError(GenerationError):
    """
    Raised when the input source is unavailable or an I/O read fails.

    Args:
        message:    Human-readable description of the failure.
        source_uri: URI of the source being read.
        line:       1-based line of the reader when the failure occurred.
        column:     1-based column of the reader when the failure occurred.
    """

    def __init__(
        self,
        message: str,
        source_uri: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.source_uri = source_uri
        self.line = line
        self.column = column

    def __str__(self) -> str:
        base = super().__str__()
        parts = []
        if self.source_uri:
            parts.append(f"source={self.source_uri}")
        if self.line is not None:
            parts.append(f"line={self.line}")
        if self.column is not None:
            parts.append(f"column={self.column}")
        if parts:
            return f"{base} | {' '.join(parts)}"
        return base


class DecodingError(SourceError):
    """
    Raised when the byte stream is not valid in the configured encoding.

    Args:
        message:    Human-readable description.
        source_uri: URI of the source being read.
        line:       Reader line at the failure.
        column:     Reader column at the failure.
        encoding:   The encoding that rejected the bytes.
    """

    def __init__(
        self,
        message: str,
        source_uri: str | None = None,
        line: int | None = None,
        column: int | None = None,
        encoding: str | None = None,
    ) -> None:
        super().__init__(message, source_uri, line, column)
        self.encoding = encoding

    def __str__(self) -> str:
        base = super().__str__()
        if not self.encoding:
            return base
        separator = " " if " | " in base else " | "
        return f"{base}{separator}encoding={self.encoding}"


class SinkError(GenerationError):
    """
    Raised when the content handler fails while receiving an event.

    Args:
        message: Human-readable description.
        event:   Name of the event being delivered (e.g. ``"startElementNS"``).
    """

    def __init__(self, message: str, event: str | None = None) -> None:
        super().__init__(message)
        self.event = event

    def __str__(self) -> str:
        base = super().__str__()
        if self.event:
            return f"{base} | event={self.event}"
        return base


class RegistryError(GenerationError):
    """Raised when the column registry is written after the header row."""
