"""
Concrete ``AbstractSource`` implementations and a small resolver.

Handles:
- Local files addressed by path or by ``file:`` URI.
- In-memory ``bytes`` (tests, embedding).
- Already-open binary streams (e.g. ``sys.stdin.buffer``).

Anything else (``http:``, ``ftp:``, ...) belongs to an external resolver and
is rejected with ``SourceError``.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO
from urllib.parse import urlparse
from urllib.request import url2pathname

from csvsax.configs.exceptions import SourceError
from csvsax.discovery.base import AbstractSource


class FileSource(AbstractSource):
    """
    A CSV file on the local filesystem.

    Args:
        path: Path to the file.  It does not have to exist until
              ``open_stream()`` is called.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @property
    def uri(self) -> str:
        return self.path.resolve().as_uri()

    def open_stream(self) -> BinaryIO:
        try:
            return open(self.path, "rb")
        except OSError as e:
            raise SourceError(
                f"Cannot open {self.path}: {e}",
                source_uri=str(self.path),
            ) from e


class BytesSource(AbstractSource):
    """
    In-memory bytes.

    Args:
        data: The raw (still encoded) content.
        uri:  Identity reported to the sink and the cache key.
    """

    def __init__(self, data: bytes, uri: str = "bytes:") -> None:
        self.data = data
        self._uri = uri

    @property
    def uri(self) -> str:
        return self._uri

    def open_stream(self) -> BinaryIO:
        return io.BytesIO(self.data)


class StreamSource(AbstractSource):
    """
    An already-open binary stream.  It can only be read once.

    Args:
        stream: Binary file object.
        uri:    Identity reported to the sink and the cache key.
    """

    def __init__(self, stream: BinaryIO, uri: str = "stream:") -> None:
        self._stream = stream
        self._uri = uri
        self._consumed = False

    @property
    def uri(self) -> str:
        return self._uri

    def open_stream(self) -> BinaryIO:
        if self._consumed:
            raise SourceError("Stream source has already been read.", source_uri=self._uri)
        self._consumed = True
        return self._stream


def resolve_source(location: AbstractSource | Path | str) -> AbstractSource:
    """
    Turn a path, ``file:`` URI or existing source into an ``AbstractSource``.

    Args:
        location: An ``AbstractSource`` (returned unchanged), a ``Path``, a
                  plain path string, or a ``file:`` URI.

    Returns:
        The resolved source.  Existence is not checked here.

    Raises:
        SourceError: If ``location`` uses a scheme other than ``file``.
    """
    if isinstance(location, AbstractSource):
        return location
    if isinstance(location, Path):
        return FileSource(location)

    parsed = urlparse(location)
    # Single-letter schemes are Windows drive letters, not URIs.
    if not parsed.scheme or len(parsed.scheme) == 1:
        return FileSource(location)
    if parsed.scheme == "file":
        return FileSource(url2pathname(parsed.path))
    raise SourceError(
        f"Unsupported source scheme {parsed.scheme!r}.",
        source_uri=location,
    )
