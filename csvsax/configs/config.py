"""
Generator configuration.

All tuneable options live here. Import from this module everywhere;
never hardcode separators, buffer sizes, or the output namespace inline.

Usage:
    from csvsax.configs.config import GeneratorConfig
    cfg = GeneratorConfig()                              # defaults
    cfg = GeneratorConfig(process_headers=True, separator=";")
    cfg = GeneratorConfig.from_parameters({"process-headers": "true"})

Environment overrides (optional) are read when the object is constructed;
this module does not load .env itself (the CLI does).
"""

from __future__ import annotations

import locale
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping

from csvsax.utils.validation import (
    parse_bool,
    parse_int,
    validate_encoding,
    validate_positive,
    validate_single_char,
)
from csvsax.configs.exceptions import ConfigError

logger = logging.getLogger(__name__)


NAMESPACE_URI: str = "http://apache.org/cocoon/csv/1.0"
"""Namespace URI of every generated element."""

NAMESPACE_PREFIX: str = "csv"
"""Prefix bound to ``NAMESPACE_URI`` around the generated document."""

DEFAULT_SEPARATOR: str = ","
DEFAULT_ESCAPE: str = '"'
DEFAULT_BUFFER_SIZE: int = 4096
UNLIMITED_RECORDS: int = -1

COMMENT_MARKER: str = "#"
"""The only ``comments`` value that enables comment lines."""


def _default_encoding() -> str:
    return os.environ.get("CSV_ENCODING") or locale.getpreferredencoding(False)


@dataclass(slots=True)
class GeneratorConfig:
    """
    Runtime configuration for one generation.

    Attributes:
        process_headers: Treat the first row as the header naming the columns.
        max_records:     Stop after this many data records; negative = unlimited.
                         The header row never counts against the limit.
        encoding:        Text encoding of the input bytes.  Defaults to
                         ``CSV_ENCODING`` or the platform preferred encoding.
        separator:       Single field-delimiter character.
        escape:          Single quoting character; doubled inside a quoted
                         section it stands for itself.
        buffer_size:     Size in bytes of the read buffer under the decoder.
        empty_fields:    Emit fields with no text.  With headers enabled every
                         record is also padded to the header's column count.
        field_names:     Add the header-derived ``column`` attribute to fields.
        comments:        ``"#"`` turns lines starting with ``#`` into comment
                         elements; any other value leaves them as data.
        indent:          Emit whitespace text events that indent the output.
    """

    process_headers: bool = False
    max_records: int = UNLIMITED_RECORDS
    encoding: str = field(default_factory=_default_encoding)
    separator: str = DEFAULT_SEPARATOR
    escape: str = DEFAULT_ESCAPE
    buffer_size: int = field(
        default_factory=lambda: parse_int(
            os.environ.get("CSV_BUFFER_SIZE", str(DEFAULT_BUFFER_SIZE)), "buffer-size"
        )
    )
    empty_fields: bool = False
    field_names: bool = True
    comments: str | None = None
    indent: bool = True

    def __post_init__(self) -> None:
        validate_single_char(self.separator, "separator")
        validate_single_char(self.escape, "escape")
        if self.separator == self.escape:
            raise ConfigError(
                f"'separator' and 'escape' must differ, both are {self.separator!r}.",
                option="escape",
            )
        validate_encoding(self.encoding)
        validate_positive(self.buffer_size, "buffer-size")
        self.max_records = parse_int(self.max_records, "max-records")

    @property
    def unlimited(self) -> bool:
        """True when ``max_records`` does not cap the number of records."""
        return self.max_records < 0

    @property
    def comments_enabled(self) -> bool:
        return self.comments == COMMENT_MARKER

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, Any]) -> "GeneratorConfig":
        """
        Build a config from hyphenated parameter names with string values.

        Recognised names: ``process-headers``, ``max-records``, ``encoding``,
        ``separator``, ``escape``, ``buffer-size``, ``empty-fields``,
        ``field-names``, ``comments``, ``indent``.  Absent names keep their
        defaults; unknown names are ignored.

        Raises:
            ConfigError: If a value cannot be interpreted for its option.
        """
        kwargs: dict[str, Any] = {}
        for name, raw in parameters.items():
            if name not in _PARAMETERS:
                logger.debug("Ignoring unknown parameter %r", name)
                continue
            attr, convert = _PARAMETERS[name]
            kwargs[attr] = convert(raw, name) if convert else raw
        return cls(**kwargs)


_PARAMETERS: dict[str, tuple[str, Any]] = {
    "process-headers": ("process_headers", parse_bool),
    "max-records":     ("max_records",     parse_int),
    "encoding":        ("encoding",        None),
    "separator":       ("separator",       None),
    "escape":          ("escape",          None),
    "buffer-size":     ("buffer_size",     parse_int),
    "empty-fields":    ("empty_fields",    parse_bool),
    "field-names":     ("field_names",     parse_bool),
    "comments":        ("comments",        None),
    "indent":          ("indent",          parse_bool),
}
