"""Command line interface: match one line of stdin against a pattern.

Usage:
    echo <input_text> | regrep -E <pattern>

Exit status is 0 when the line matches, 1 when it does not, and 2 when the
pattern cannot be compiled.
"""

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional, TextIO

from regrep.config import Config
from regrep.exceptions import ParseError
from regrep.matcher.matcher import match_nodes
from regrep.parser.ast import format_nodes
from regrep.parser.parser import compile_pattern

logger = logging.getLogger(__name__)

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="regrep",
        usage="%(prog)s -E PATTERN [options]",
        description="Match a line of standard input against a regular expression",
    )
    parser.add_argument(
        "--no-highlight",
        action="store_true",
        help="Print the matching line without escape sequences",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the compiled pattern tree to stderr",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging of the matcher",
    )
    return parser


def read_line(stream: TextIO, config: Config) -> str:
    """Read one line from ``stream``, dropping its terminator if configured."""
    line = stream.readline()
    if config.strip_newline:
        line = line.rstrip("\r\n")
    return line


def main(argv: Optional[List[str]] = None, config: Optional[Config] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    config = config or Config.from_env()

    if not argv or argv[0] != "-E":
        print("Expected first argument to be '-E'", file=sys.stderr)
        return EXIT_NO_MATCH

    if len(argv) < 2:
        print("Missing pattern after '-E'", file=sys.stderr)
        return EXIT_ERROR
    # Taken positionally so that patterns may start with "-".
    pattern = argv[1]
    args = build_parser().parse_args(argv[2:])
    if args.no_highlight:
        config = dataclasses.replace(config, highlight=False)
    if args.verbose:
        config = dataclasses.replace(config, log_level="DEBUG")
    logging.basicConfig(level=config.log_level, format="%(name)s: %(message)s")

    try:
        compiled = compile_pattern(pattern)
    except ParseError as e:
        print(f"Error parsing pattern: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.dump:
        print(format_nodes(compiled.nodes), file=sys.stderr)

    line = read_line(sys.stdin, config)
    span = match_nodes(line, compiled.nodes)
    if span is None:
        logger.info("No match for %r", compiled.source)
        return EXIT_NO_MATCH

    print(config.render(line, span.start, span.end))
    return EXIT_MATCH


if __name__ == "__main__":
    sys.exit(main())
