"""
csvsax: CSV to XML event generator CLI

Environment variables read (optionally from a .env file in the working
directory):
    CSV_ENCODING     Default input encoding (else the platform default)
    CSV_BUFFER_SIZE  Default read buffer size in bytes (else 4096)

Commands:
    convert   Parse the CSV and write the XML document.
    inspect   Parse the CSV and print a summary; no XML is written.
    key       Print the cache key for the source and options.

Usage examples:
    csvsax convert --source data/contacts.csv --process-headers --output contacts.xml
    csvsax convert --source - --separator tab < report.tsv
    csvsax inspect --source data/contacts.csv --comments '#' --max-records 10
    csvsax key     --source file:///srv/data/contacts.csv --process-headers

Exit codes:
    0  Success
    1  Generation failed (source unreadable, bad encoding, output failure)
    2  Configuration / argument error
"""

from __future__ import annotations

import argparse
import logging
import sys
from xml.sax.handler import ContentHandler

from dotenv import find_dotenv, load_dotenv

from csvsax.configs.config import GeneratorConfig
from csvsax.configs.exceptions import ConfigError, GenerationError
from csvsax.discovery.sources import StreamSource
from csvsax.generator import CSVGenerator, GenerationResult
from csvsax.loaders.sinks import xml_writer

logger = logging.getLogger(__name__)

_SEPARATOR_ALIASES = {"\\t": "\t", "tab": "\t"}


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        level=level,
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Config: CLI overrides on top of env vars / defaults
# ---------------------------------------------------------------------------

def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """
    Priority order for each setting:
      1. CLI flag (--encoding, --buffer-size, etc.)
      2. Environment variable (CSV_ENCODING, CSV_BUFFER_SIZE)
      3. GeneratorConfig default
    """
    kwargs: dict = {
        "process_headers": args.process_headers,
        "empty_fields": args.empty_fields,
        "field_names": not args.no_field_names,
        "indent": not args.no_indent,
    }
    if args.max_records is not None:
        kwargs["max_records"] = args.max_records
    if args.encoding:
        kwargs["encoding"] = args.encoding
    if args.separator is not None:
        kwargs["separator"] = _SEPARATOR_ALIASES.get(args.separator, args.separator)
    if args.escape is not None:
        kwargs["escape"] = args.escape
    if args.buffer_size is not None:
        kwargs["buffer_size"] = args.buffer_size
    if args.comments is not None:
        kwargs["comments"] = args.comments

    return GeneratorConfig(**kwargs)


def _build_generator(args: argparse.Namespace) -> CSVGenerator:
    config = _build_config(args)
    source = args.source
    if source == "-":
        source = StreamSource(sys.stdin.buffer, uri="stdin:")
    generator = CSVGenerator()
    generator.setup(source, config)
    return generator


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------

def _cmd_convert(args: argparse.Namespace) -> int:
    generator = _build_generator(args)
    if args.output:
        with open(args.output, "wb") as out:
            result = generator.generate(xml_writer(out, args.output_encoding))
    else:
        out = sys.stdout.buffer
        result = generator.generate(xml_writer(out, args.output_encoding))
        out.write(b"\n")
        out.flush()
    logger.info("Wrote %s", result.summary())
    return 0


def _cmd_inspect(args: argparse.Namespace) -> int:
    generator = _build_generator(args)
    result: GenerationResult = generator.generate(ContentHandler())
    print(f"Source   : {result.source_uri}")
    print(f"Records  : {result.records}")
    print(f"Fields   : {result.fields}")
    print(f"Comments : {result.comments}")
    if result.columns:
        print(f"Columns  : {', '.join(result.columns)}")
    if result.truncated:
        print("Stopped at --max-records")
    return 0


def _cmd_key(args: argparse.Namespace) -> int:
    generator = _build_generator(args)
    print(generator.cache_key())
    return 0


# ---------------------------------------------------------------------------
# Argument parser (importable for tests)
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csvsax",
        description="Convert CSV into csv:document XML / SAX events",
        epilog="Defaults for --encoding and --buffer-size may come from CSV_ENCODING / CSV_BUFFER_SIZE.",
    )
    parser.add_argument("--verbose", "-v", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)

    def _source_args(p):
        p.add_argument("--source", required=True, help="Path, file: URI, or - for stdin")

    def _config_args(p):
        p.add_argument("--process-headers", action="store_true", dest="process_headers")
        p.add_argument("--max-records",  type=int, default=None, dest="max_records")
        p.add_argument("--encoding",     default=None)
        p.add_argument("--separator",    default=None)
        p.add_argument("--escape",       default=None)
        p.add_argument("--buffer-size",  type=int, default=None, dest="buffer_size")
        p.add_argument("--empty-fields", action="store_true", dest="empty_fields")
        p.add_argument("--no-field-names", action="store_true", dest="no_field_names")
        p.add_argument("--comments",     default=None)
        p.add_argument("--no-indent",    action="store_true", dest="no_indent")

    p_convert = sub.add_parser("convert", help="Write the XML document")
    _source_args(p_convert); _config_args(p_convert)
    p_convert.add_argument("--output", "-o", default=None)
    p_convert.add_argument("--output-encoding", default="utf-8", dest="output_encoding")

    p_inspect = sub.add_parser("inspect", help="Print a summary of the CSV")
    _source_args(p_inspect); _config_args(p_inspect)

    p_key = sub.add_parser("key", help="Print the cache key")
    _source_args(p_key); _config_args(p_key)

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    handlers = {"convert": _cmd_convert, "inspect": _cmd_inspect, "key": _cmd_key}
    try:
        return handlers[args.command](args)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except GenerationError as e:
        print(f"FAILED: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
