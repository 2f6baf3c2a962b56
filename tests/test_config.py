"""
Configuration & errors: test_config.py

GeneratorConfig:
  - defaults (headers off, unlimited, ',' and '"', 4096-byte buffer)
  - CSV_ENCODING / CSV_BUFFER_SIZE environment defaults
  - single-character separator / escape, not line terminators, not equal
  - unknown encoding, non-positive buffer size → ConfigError naming the option
  - from_parameters: hyphenated names, string values, unknown names ignored
  - comments_enabled only for '#'; unlimited for negative max_records

Exceptions:
  - hierarchy under GenerationError
  - __str__ carries the structured context
"""

from __future__ import annotations

import locale

import pytest

from csvsax.configs.config import DEFAULT_BUFFER_SIZE, GeneratorConfig
from csvsax.configs.exceptions import (
    ConfigError,
    DecodingError,
    GenerationError,
    RegistryError,
    SinkError,
    SourceError,
)
from csvsax.utils.validation import parse_bool, parse_int


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv("CSV_ENCODING", raising=False)
    monkeypatch.delenv("CSV_BUFFER_SIZE", raising=False)


# ============================================================================
# Defaults & environment
# ============================================================================

class TestDefaults:
    def test_defaults(self, clean_env):
        cfg = GeneratorConfig()
        assert cfg.process_headers is False
        assert cfg.max_records == -1
        assert cfg.unlimited
        assert cfg.separator == ","
        assert cfg.escape == '"'
        assert cfg.buffer_size == DEFAULT_BUFFER_SIZE
        assert cfg.empty_fields is False
        assert cfg.field_names is True
        assert cfg.comments is None
        assert cfg.indent is True

    def test_platform_encoding(self, clean_env):
        assert GeneratorConfig().encoding == locale.getpreferredencoding(False)

    def test_env_encoding(self, monkeypatch):
        monkeypatch.setenv("CSV_ENCODING", "latin-1")
        assert GeneratorConfig().encoding == "latin-1"

    def test_env_buffer_size(self, monkeypatch):
        monkeypatch.setenv("CSV_BUFFER_SIZE", "128")
        assert GeneratorConfig().buffer_size == 128

    def test_bad_env_buffer_size(self, monkeypatch):
        monkeypatch.setenv("CSV_BUFFER_SIZE", "lots")
        with pytest.raises(ConfigError):
            GeneratorConfig()

    def test_explicit_beats_env(self, monkeypatch):
        monkeypatch.setenv("CSV_ENCODING", "latin-1")
        assert GeneratorConfig(encoding="utf-8").encoding == "utf-8"


# ============================================================================
# Validation
# ============================================================================

class TestValidation:
    @pytest.mark.parametrize("value", ["", ";;", "\n", "\r"])
    def test_bad_separator(self, value):
        with pytest.raises(ConfigError) as exc:
            GeneratorConfig(separator=value, encoding="utf-8")
        assert exc.value.option == "separator"

    def test_bad_escape(self):
        with pytest.raises(ConfigError) as exc:
            GeneratorConfig(escape="''", encoding="utf-8")
        assert exc.value.option == "escape"

    def test_separator_equals_escape(self):
        with pytest.raises(ConfigError) as exc:
            GeneratorConfig(separator="|", escape="|", encoding="utf-8")
        assert exc.value.option == "escape"

    def test_unknown_encoding(self):
        with pytest.raises(ConfigError) as exc:
            GeneratorConfig(encoding="no-such-codec")
        assert exc.value.option == "encoding"

    @pytest.mark.parametrize("name", ["hex", "base64", "zlib", "rot13"])
    def test_non_text_encoding(self, name):
        with pytest.raises(ConfigError) as exc:
            GeneratorConfig(encoding=name)
        assert exc.value.option == "encoding"

    def test_bom_encoding_accepted(self):
        assert GeneratorConfig(encoding="utf-8-sig").encoding == "utf-8-sig"

    @pytest.mark.parametrize("size", [0, -5])
    def test_non_positive_buffer(self, size):
        with pytest.raises(ConfigError) as exc:
            GeneratorConfig(buffer_size=size, encoding="utf-8")
        assert exc.value.option == "buffer-size"

    def test_tab_separator(self):
        assert GeneratorConfig(separator="\t", encoding="utf-8").separator == "\t"

    def test_zero_max_records_is_limited(self):
        cfg = GeneratorConfig(max_records=0, encoding="utf-8")
        assert not cfg.unlimited


class TestParsers:
    @pytest.mark.parametrize("raw", ["true", "YES", "on", "1", True])
    def test_true(self, raw):
        assert parse_bool(raw, "x") is True

    @pytest.mark.parametrize("raw", ["false", "No", "OFF", "0", False])
    def test_false(self, raw):
        assert parse_bool(raw, "x") is False

    def test_bad_bool(self):
        with pytest.raises(ConfigError):
            parse_bool("maybe", "empty-fields")

    def test_int(self):
        assert parse_int(" 42 ", "max-records") == 42
        assert parse_int(-1, "max-records") == -1

    def test_bad_int(self):
        with pytest.raises(ConfigError) as exc:
            parse_int("ten", "max-records")
        assert exc.value.option == "max-records"


# ============================================================================
# from_parameters
# ============================================================================

class TestFromParameters:
    def test_all_names(self):
        cfg = GeneratorConfig.from_parameters({
            "process-headers": "yes",
            "max-records": "10",
            "encoding": "latin-1",
            "separator": ";",
            "escape": "'",
            "buffer-size": "64",
            "empty-fields": "1",
            "field-names": "off",
            "comments": "#",
            "indent": "false",
        })
        assert cfg.process_headers is True
        assert cfg.max_records == 10
        assert cfg.encoding == "latin-1"
        assert cfg.separator == ";"
        assert cfg.escape == "'"
        assert cfg.buffer_size == 64
        assert cfg.empty_fields is True
        assert cfg.field_names is False
        assert cfg.comments_enabled
        assert cfg.indent is False

    def test_unknown_names_ignored(self, clean_env):
        cfg = GeneratorConfig.from_parameters({"src": "x.csv", "color": "blue"})
        assert cfg == GeneratorConfig()

    def test_bad_value(self):
        with pytest.raises(ConfigError) as exc:
            GeneratorConfig.from_parameters({"max-records": "many", "encoding": "utf-8"})
        assert exc.value.option == "max-records"

    @pytest.mark.parametrize("marker", [None, "", "//", ";", "true"])
    def test_comments_only_for_hash(self, marker):
        cfg = GeneratorConfig.from_parameters({"comments": marker, "encoding": "utf-8"})
        assert not cfg.comments_enabled


# ============================================================================
# Exceptions
# ============================================================================

class TestExceptions:
    @pytest.mark.parametrize(
        "cls", [ConfigError, SourceError, DecodingError, SinkError, RegistryError]
    )
    def test_hierarchy(self, cls):
        assert issubclass(cls, GenerationError)

    def test_config_error_str(self):
        assert str(ConfigError("bad", option="separator")) == "bad | option=separator"
        assert str(ConfigError("bad")) == "bad"

    def test_source_error_str(self):
        err = SourceError("read failed", source_uri="file:///a.csv", line=3, column=7)
        assert str(err) == "read failed | source=file:///a.csv line=3 column=7"

    def test_decoding_error_str(self):
        err = DecodingError("bad bytes", source_uri="mem:x", line=1, column=2, encoding="utf-8")
        assert str(err) == "bad bytes | source=mem:x line=1 column=2 encoding=utf-8"
        assert str(DecodingError("bad bytes", encoding="ascii")) == "bad bytes | encoding=ascii"

    def test_sink_error_str(self):
        assert str(SinkError("rejected", event="characters")) == "rejected | event=characters"
