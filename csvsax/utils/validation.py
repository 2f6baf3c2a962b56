"""
Validation helpers for generator options.

These functions are called from ``GeneratorConfig.__post_init__`` so that a
bad option is rejected before any source is opened.

All functions raise ``ConfigError`` on failure rather than returning a
boolean; callers are expected to let exceptions propagate to the CLI or to
whoever built the configuration.
"""

from __future__ import annotations

import codecs

from csvsax.configs.exceptions import ConfigError

LINE_TERMINATORS = ("\r", "\n")

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


def validate_single_char(value: str, option: str) -> str:
    """
    Assert that ``value`` is exactly one character and not a line terminator.

    Args:
        value:  The configured character.
        option: Parameter name used in the error message.

    Returns:
        ``value`` unchanged.

    Raises:
        ConfigError: If ``value`` is empty, longer than one character, or a
                     line terminator.
    """
    if not isinstance(value, str) or len(value) != 1:
        raise ConfigError(
            f"'{option}' must be a single character, got {value!r}.",
            option=option,
        )
    if value in LINE_TERMINATORS:
        raise ConfigError(
            f"'{option}' cannot be a line terminator.",
            option=option,
        )
    return value


def validate_encoding(name: str) -> str:
    """
    Assert that ``name`` is a text encoding known to ``codecs``.

    Bytes-to-bytes codecs (``hex``, ``base64``, ``zlib``) and str-to-str
    codecs (``rot13``) are rejected as well.

    Raises:
        ConfigError: If the codec lookup fails or the codec does not decode
                     bytes to text.
    """
    try:
        codecs.lookup(name)
    except (LookupError, TypeError) as e:
        raise ConfigError(f"Unknown encoding {name!r}.", option="encoding") from e
    try:
        b"".decode(name)
    except LookupError as e:
        raise ConfigError(f"{name!r} is not a text encoding.", option="encoding") from e
    return name


def validate_positive(value: int, option: str) -> int:
    """Assert that ``value`` is an ``int`` greater than zero."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(
            f"'{option}' must be a positive integer, got {value!r}.",
            option=option,
        )
    return value


def parse_bool(raw: str | bool, option: str) -> bool:
    """
    Interpret a parameter string as a boolean.

    Accepts ``true/false``, ``yes/no``, ``on/off`` and ``1/0`` in any case.
    ``bool`` values pass through.

    Raises:
        ConfigError: If the string is not a recognised boolean spelling.
    """
    if isinstance(raw, bool):
        return raw
    lowered = str(raw).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"'{option}' must be a boolean, got {raw!r}.", option=option)


def parse_int(raw: str | int, option: str) -> int:
    """
    Interpret a parameter string as a decimal integer.

    Raises:
        ConfigError: If the string is not an integer.
    """
    if isinstance(raw, bool):
        raise ConfigError(f"'{option}' must be an integer, got {raw!r}.", option=option)
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError as e:
        raise ConfigError(
            f"'{option}' must be an integer, got {raw!r}.", option=option
        ) from e
