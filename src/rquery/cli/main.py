"""Main CLI entry point for the rquery command-line tool.

Loads one XML file, runs a selector against it and prints the matches.

Exit codes:
    0: at least one element matched
    1: the selector matched nothing
    2: the file, its XML or the selector could not be processed
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rquery import __version__
from rquery.api import Document
from rquery.shared import DocumentConfig, NoMatchError, RQueryError
from rquery.tree import Element

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="rquery",
        description="Query an XML document with CSS-style selectors.",
    )
    parser.add_argument("path", type=Path, help="XML file to load")
    parser.add_argument("selector", help='Selector, e.g. \'item > title\' or \'[type="simple"]\'')
    parser.add_argument(
        "--first", action="store_true", help="Only output the first match"
    )
    parser.add_argument(
        "--attr", metavar="NAME", help="Output this attribute instead of the text"
    )
    parser.add_argument(
        "--full-text",
        action="store_true",
        help="Output the text of matches including all descendants",
    )
    parser.add_argument(
        "--format", choices=["text", "json"], default="text", help="Output format"
    )
    parser.add_argument(
        "--stats", action="store_true", help="Print build metrics to stderr"
    )
    parser.add_argument(
        "--config", type=Path, metavar="FILE", help="JSON document configuration"
    )
    parser.add_argument("--chunk-size", type=int, help="Bytes read per parser step")
    parser.add_argument(
        "--huge-tree", action="store_true", help="Lift tokenizer depth and size limits"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Errors only")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(args: argparse.Namespace) -> DocumentConfig:
    """Build the document configuration from a config file and flags."""
    if args.config:
        config = DocumentConfig.from_json(args.config.read_text(encoding="utf-8"))
    else:
        config = DocumentConfig()

    overrides: Dict[str, Any] = {}
    if args.chunk_size is not None:
        overrides["chunk_size"] = args.chunk_size
    if args.huge_tree:
        overrides["huge_tree"] = True

    return config.override(**overrides) if overrides else config


def element_value(element: Element, args: argparse.Namespace) -> Optional[str]:
    """The value printed for one match, or None to skip it."""
    if args.attr:
        return element.attr(args.attr)
    text = element.full_text if args.full_text else element.text
    return text.strip()


def format_matches(matches: List[Element], args: argparse.Namespace) -> str:
    """Render matches in the requested output format."""
    if args.format == "json":
        records = []
        for element in matches:
            record: Dict[str, Any] = {
                "tag": element.tag_name,
                "attributes": dict(element.attributes),
                "value": element_value(element, args),
            }
            records.append(record)
        return json.dumps(records, indent=2, ensure_ascii=False)

    lines = []
    for element in matches:
        value = element_value(element, args)
        if value is not None:
            lines.append(value)
    return "\n".join(lines)


def run_query(args: argparse.Namespace) -> int:
    """Load the document, run the selector and print the result."""
    config = load_config(args)
    document = Document.from_file(args.path, config)

    if args.stats:
        print(json.dumps(document.metrics.to_dict(), indent=2), file=sys.stderr)

    if args.first:
        matches = [document.select(args.selector)]
    else:
        matches = list(document.select_all(args.selector))

    if not matches:
        return EXIT_NO_MATCH

    output = format_matches(matches, args)
    if output:
        print(output)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        return run_query(args)
    except NoMatchError:
        return EXIT_NO_MATCH
    except (RQueryError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
