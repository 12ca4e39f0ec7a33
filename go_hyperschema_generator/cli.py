#!/usr/bin/env python3
"""Command-line interface for the Go Hyper-Schema Generator."""

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path

from go_hyperschema_generator.errors import GoFormatError
from go_hyperschema_generator.generator.template_engine import GoCodeGenerator
from go_hyperschema_generator.parser.schema import load_schema
from go_hyperschema_generator.utils.file_utils import read_schema_source, write_output

logger = logging.getLogger(__name__)

# Exit codes for better error reporting
EXIT_SUCCESS = 0
EXIT_FILE_NOT_FOUND = 1
EXIT_INVALID_JSON = 2
EXIT_GENERATION_ERROR = 3
EXIT_FORMAT_ERROR = 4


def parse_command_line_args(args: list[str] | None = None) -> argparse.Namespace:
    """Create and configure the command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate Go client from JSON Hyper-Schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s schema.json
  %(prog)s schema.json --output ./heroku/heroku.go
  cat schema.json | %(prog)s - --package-name heroku --no-format
        """,
    )
    parser.add_argument(
        "schema_file",
        help="Path to the Hyper-Schema document, or - to read standard input",
        metavar="SCHEMA",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="File to write the generated client to (default: standard output)",
        dest="output",
    )
    parser.add_argument(
        "--package-name",
        "-p",
        help="Name of the generated Go package (default: first word of the schema title)",
        dest="package_name",
    )
    parser.add_argument(
        "--template-dir",
        "-t",
        type=Path,
        help="Custom template directory (optional)",
        dest="template_dir",
    )
    parser.add_argument(
        "--no-format",
        action="store_false",
        help="Do not run the generated source through gofmt",
        dest="format_source",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(args)


def configure_logging(*, verbose: bool) -> None:
    """Send log records to standard error."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def generate_go_client_from_schema(
    *,
    schema_file: str,
    package_name: str | None = None,
    template_dir: Path | None = None,
    format_source: bool = True,
) -> str:
    """Generate Go client source from a Hyper-Schema document."""
    schema = load_schema(read_schema_source(schema_file))
    generator = GoCodeGenerator(
        template_dir=template_dir,
        package_name=package_name,
        format_source=format_source,
    )
    return generator.generate(schema)


def main(args: list[str] | None = None) -> int:
    """Generate Go client from JSON Hyper-Schema."""
    parsed_args = parse_command_line_args(args)
    configure_logging(verbose=parsed_args.verbose)

    try:
        source = generate_go_client_from_schema(
            schema_file=parsed_args.schema_file,
            package_name=parsed_args.package_name,
            template_dir=parsed_args.template_dir,
            format_source=parsed_args.format_source,
        )
        write_output(source, parsed_args.output)
        if parsed_args.output is not None:
            logger.debug("Go client written to %s", parsed_args.output)
        return EXIT_SUCCESS

    except FileNotFoundError:
        print(f"Error: Schema file not found: {parsed_args.schema_file}", file=sys.stderr)
        return EXIT_FILE_NOT_FOUND
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in schema file: {e}", file=sys.stderr)
        return EXIT_INVALID_JSON
    except GoFormatError as e:
        print(e.source, file=sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FORMAT_ERROR
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            traceback.print_exc()
        return EXIT_GENERATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
