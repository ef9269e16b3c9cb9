"""Main CLI entry point for the xml-xpaths command-line tool.

Reads an XML file, generates a ``(text, path)`` row for every value leaf and
writes the rows as text lines or CSV.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from xml_leaf_xpaths import __version__
from xml_leaf_xpaths.api import (
    generate_from_file,
    load_options,
    render_lines,
    write_csv,
    write_text,
)
from xml_leaf_xpaths.shared import ConfigError, XPathConfig, get_logger
from xml_leaf_xpaths.tree import XmlParseError

STDOUT_TARGET = "-"

USAGE_EXAMPLES = """examples:
  xml-xpaths input.xml output.txt
  xml-xpaths input.xml output.csv config.json
  xml-xpaths input.xml output.txt --options '{ "namespace": "d" }'
  xml-xpaths input.xml - --start-at-tag item --debug
"""


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-xpaths",
        description="Generate an XPath locator for every text-bearing leaf of an XML file",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=__version__)

    parser.add_argument("input", type=Path, help="XML file to read")
    parser.add_argument(
        "output",
        help=f"Output file, or '{STDOUT_TARGET}' to print 'text : path' lines"
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Options as a JSON literal or a path to a JSON file"
    )
    parser.add_argument(
        "--options",
        help="Options as a JSON literal or a path to a JSON file"
    )
    parser.add_argument(
        "--format", "-f",
        choices=["auto", "text", "csv"],
        default="auto",
        help="Output format (default: auto, csv for .csv outputs)"
    )
    parser.add_argument(
        "--no-type-column",
        action="store_true",
        help="Write only the text and path columns in CSV output"
    )
    parser.add_argument(
        "--start-at-tag",
        help="Re-root paths at the first element with this name"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Trace the traversal (does not change the output)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def build_config(args: argparse.Namespace) -> XPathConfig:
    """Merge the options argument and command-line overrides into a config."""
    raw: Dict[str, Any] = load_options(args.options or args.config)
    if args.start_at_tag:
        raw["startAtTag"] = args.start_at_tag
    if args.debug:
        raw["debug"] = True
    return XPathConfig.from_dict(raw)


def resolve_format(output: str, format_type: str) -> str:
    """Pick the output format, inferring it from the extension for ``auto``."""
    if format_type != "auto":
        return format_type
    return "csv" if output.lower().endswith(".csv") else "text"


def configure_logging(args: argparse.Namespace) -> None:
    """Set up logging verbosity from the global flags."""
    if args.debug or args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)
    else:
        logging.basicConfig(level=logging.WARNING)


def run(args: argparse.Namespace) -> int:
    """Generate rows for one input file and write them out."""
    logger = get_logger(__name__, None, "cli")

    if not args.input.is_file():
        print(f"Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        result = generate_from_file(args.input, config)
    except XmlParseError as e:
        print(str(e), file=sys.stderr)
        return 1

    if not args.quiet:
        for diagnostic in result.diagnostics:
            print(f"{diagnostic.severity.name.title()}: {diagnostic.message}", file=sys.stderr)

    if args.output == STDOUT_TARGET:
        if result.rows:
            print(render_lines(result.rows))
        return 0

    output_format = resolve_format(args.output, args.format)
    try:
        if output_format == "csv":
            written = write_csv(result.rows, args.output, include_type=not args.no_type_column)
        else:
            written = write_text(result.rows, args.output)
    except OSError as e:
        logger.error("Failed to write output", extra={"output": args.output})
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Wrote {result.row_count} rows to {written}", file=sys.stderr)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.config and args.options:
        parser.error("pass options either positionally or with --options, not both")

    configure_logging(args)

    try:
        return run(args)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
