"""
Abstract base class for all byte sources the generator can read.

Every concrete source (local file, in-memory bytes, already-open stream)
must implement this interface.  The generator and the reader work
exclusively against ``AbstractSource`` so parsing is source-agnostic.

Usage:
    source = FileSource("data/contacts.csv")
    stream = source.open_stream()
    try:
        consume(stream)
    finally:
        stream.close()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO


class AbstractSource(ABC):
    """
    Interface for all generator input sources.

    Subclasses must implement ``uri`` and ``open_stream``.  The caller owns
    the returned stream and is responsible for closing it.
    """

    @property
    @abstractmethod
    def uri(self) -> str:
        """
        Identity of the source.

        Used as the SAX system id and as the first component of the cache key,
        so two sources with the same content location must return the same URI.
        """

    @abstractmethod
    def open_stream(self) -> BinaryIO:
        """
        Open a fresh binary stream positioned at the first byte.

        Raises:
            SourceError: If the source cannot be opened.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.uri!r})"
