"""
regrep - A minimal backtracking regular expression engine.

Patterns are compiled into a flat sequence of pattern nodes and searched
against a single line of text with a leftmost, greedy matcher.

Example usage:
    >>> from regrep import match_pattern
    >>> match_pattern("abc123xyz", r"\\d+")
    Span(start=3, end=6)

Compile once to inspect the node tree:
    >>> from regrep import compile_pattern
    >>> compile_pattern(r"(cat|dog)s?").group_count
    1
"""

from regrep.config import Config
from regrep.exceptions import (
    InternalMatchError,
    ParseError,
    RegrepError,
    UnsupportedEscapeError,
)
from regrep.matcher.captures import CaptureTable
from regrep.matcher.matcher import Span, match_nodes, match_pattern
from regrep.parser.ast import Modifier, PatternNode
from regrep.parser.parser import CompiledPattern, compile, compile_pattern

__version__ = "0.1.0"

__all__ = [
    # Main API
    "match_pattern",
    "match_nodes",
    "compile",
    "compile_pattern",
    "CompiledPattern",
    "Span",
    "CaptureTable",
    "PatternNode",
    "Modifier",
    # Configuration
    "Config",
    # Exceptions
    "RegrepError",
    "ParseError",
    "UnsupportedEscapeError",
    "InternalMatchError",
    # Version
    "__version__",
]
