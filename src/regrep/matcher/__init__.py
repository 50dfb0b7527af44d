"""Matcher module: backtracking search over compiled patterns."""

from regrep.matcher.captures import CaptureTable
from regrep.matcher.matcher import (
    Span,
    find_match_start,
    match_all_subpatterns,
    match_nodes,
    match_pattern,
    match_subpattern,
    match_subpattern_kind,
)

__all__ = [
    "CaptureTable",
    "Span",
    "find_match_start",
    "match_all_subpatterns",
    "match_nodes",
    "match_pattern",
    "match_subpattern",
    "match_subpattern_kind",
]
