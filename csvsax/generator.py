"""
Generator orchestrator: CSV source → SAX events.

Wires the reader, lexer, assembler and emitter for one source and one
content handler.  This is the single callable the CLI invokes.

Lifecycle:
  1. ``setup(source, config)``  : resolve the source, allocate buffer,
                                  counters and column registry.
  2. ``generate(handler)``      : open the reader, emit the document, close
                                  the reader on every exit path.
  3. ``recycle()``              : drop all per-source state so the instance
                                  can be set up again (pooling contract).

Failure policy:
  - ``SourceError`` / ``DecodingError`` from the reader and ``SinkError``
    from the handler abort the document immediately; the reader is still
    closed and the error propagates to the caller.
  - Reaching ``max_records`` is not a failure; ``GenerationResult.truncated``
    records it.
  - Nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from xml.sax.handler import ContentHandler

from csvsax.configs.config import GeneratorConfig
from csvsax.configs.exceptions import GenerationError
from csvsax.discovery.base import AbstractSource
from csvsax.discovery.reader import PositionTrackingReader
from csvsax.discovery.sources import resolve_source
from csvsax.loaders.emitter import DOCUMENT, DOCUMENT_LEVEL, EventEmitter
from csvsax.transformers.assembler import RecordAssembler
from csvsax.transformers.lexer import DelimitedStreamLexer
from csvsax.transformers.registry import ColumnNameRegistry

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result object
# ---------------------------------------------------------------------------

@dataclass
class GenerationResult:
    """
    Summary of a single ``generate()`` call.

    Attributes:
        source_uri: URI of the source that was parsed.
        records:    Number of ``record`` elements emitted.
        fields:     Number of ``field`` elements emitted (header columns excluded).
        comments:   Number of ``comment`` elements emitted.
        columns:    Header column names in order (empty without headers).
        truncated:  True if reading stopped because ``max_records`` was reached.
    """
    source_uri: str
    records: int = 0
    fields: int = 0
    comments: int = 0
    columns: list[str] = field(default_factory=list)
    truncated: bool = False

    def summary(self) -> str:
        text = (
            f"{self.source_uri}: {self.records} record(s), {self.fields} field(s), "
            f"{self.comments} comment(s)"
        )
        if self.columns:
            text += f", columns={', '.join(self.columns)}"
        if self.truncated:
            text += " [truncated]"
        return text


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class CSVGenerator:
    """
    Reusable CSV → SAX generator.

    Usage::

        gen = CSVGenerator()
        gen.setup("data/contacts.csv", GeneratorConfig(process_headers=True))
        result = gen.generate(handler)
        gen.recycle()
    """

    def __init__(self) -> None:
        self.source: AbstractSource | None = None
        self.config: GeneratorConfig | None = None
        self.registry = ColumnNameRegistry()
        self.reader: PositionTrackingReader | None = None

    def setup(
        self,
        source: AbstractSource | Path | str,
        config: GeneratorConfig | None = None,
    ) -> None:
        """
        Bind this generator to ``source`` and ``config``.

        Raises:
            SourceError: If ``source`` uses an unsupported URI scheme.
        """
        self.source = resolve_source(source)
        self.config = config if config is not None else GeneratorConfig()
        self.registry.clear()
        self.reader = None

    def recycle(self) -> None:
        """Forget the source, config, registry and reader."""
        self.source = None
        self.config = None
        self.registry.clear()
        self.reader = None

    def cache_key(self) -> str:
        """
        Key under which an external cache may store this generator's output.

        Built from the source URI, the header flag, separator, max_records
        and escape, the options that change the generated events for a
        given source.

        Raises:
            GenerationError: If ``setup()`` has not been called.
        """
        source, config = self._require_setup()
        key = source.uri
        if config.process_headers:
            key += "headers"
        return f"{key}{config.separator}{config.max_records}{config.escape}"

    def generate(self, handler: ContentHandler) -> GenerationResult:
        """
        Parse the source and send the events to ``handler``.

        Returns:
            ``GenerationResult`` with element counts.

        Raises:
            SourceError:   The source could not be opened or read.
            DecodingError: The bytes are invalid for ``config.encoding``.
            SinkError:     ``handler`` raised while receiving an event.
        """
        source, config = self._require_setup()
        logger.debug("Generating from %s", source.uri)

        emitter = EventEmitter(handler, indent=config.indent)
        assembler = RecordAssembler(emitter, config, self.registry)
        reader = PositionTrackingReader(source, config.encoding, config.buffer_size)
        self.reader = reader

        try:
            reader.open()
            emitter.start_document(reader)
            emitter.indent(DOCUMENT_LEVEL)
            emitter.start_element(DOCUMENT)

            lexer = DelimitedStreamLexer(reader, assembler, config)
            lexer.run()

            emitter.indent(DOCUMENT_LEVEL)
            emitter.end_element(DOCUMENT)
            emitter.end_document()
        except GenerationError as e:
            logger.error("Generation failed for %s: %s", source.uri, e)
            raise
        finally:
            reader.close()

        result = GenerationResult(
            source_uri=source.uri,
            records=assembler.records_emitted,
            fields=assembler.fields_emitted,
            comments=assembler.comments_emitted,
            columns=self.registry.names(),
            truncated=lexer.truncated,
        )
        if result.truncated:
            logger.info("Stopped %s after max_records=%d", source.uri, config.max_records)
        logger.info("Generated %s", result.summary())
        return result

    def _require_setup(self) -> tuple[AbstractSource, GeneratorConfig]:
        if self.source is None or self.config is None:
            raise GenerationError("CSVGenerator.setup() must be called first.")
        return self.source, self.config


# ---------------------------------------------------------------------------
# Convenience entry point
# ---------------------------------------------------------------------------

def generate(
    source: AbstractSource | Path | str,
    handler: ContentHandler,
    config: GeneratorConfig | None = None,
) -> GenerationResult:
    """Set up a fresh ``CSVGenerator`` and run it once."""
    generator = CSVGenerator()
    generator.setup(source, config)
    return generator.generate(handler)
