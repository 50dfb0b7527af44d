"""Backtracking matcher over compiled pattern nodes.

The search is leftmost and greedy. A node that fails to match may roll back
the node immediately before it when that node was ``*``, ``+`` or a group,
but only to a length that node could have matched itself; deeper
backtracking is not attempted.
"""

import logging
from typing import List, NamedTuple, Optional, Tuple

from regrep.exceptions import InternalMatchError
from regrep.matcher.captures import CaptureTable
from regrep.parser.ast import (
    AlphaNumeric,
    AlternateGroups,
    Alternatives,
    Any,
    BackRef,
    Digit,
    InputEnd,
    InputStart,
    Kind,
    Literal,
    Modifier,
    NotAlternatives,
    PatternNode,
)
from regrep.parser.parser import compile_pattern

logger = logging.getLogger(__name__)


class Span(NamedTuple):
    """Matched region of the input, as code point offsets."""

    start: int
    end: int


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_word(char: str) -> bool:
    return char.isalnum() or char == "_"


def literal_nodes(text: str) -> List[PatternNode]:
    """Build a node sequence matching ``text`` verbatim."""
    return [PatternNode(Literal(char)) for char in text]


def match_subpattern_kind(
    remaining: str, kind: Kind, captures: CaptureTable
) -> Optional[int]:
    """Match a single unquantified node kind at the start of ``remaining``.

    Returns:
        Number of characters consumed, or None if the kind does not match.
    """
    if isinstance(kind, InputStart):
        raise InternalMatchError("InputStart must be stripped before matching")

    if isinstance(kind, InputEnd):
        return 0 if not remaining else None

    if isinstance(kind, Any):
        return 1 if remaining else None

    if isinstance(kind, Literal):
        return 1 if remaining.startswith(kind.char) else None

    if isinstance(kind, Digit):
        return 1 if remaining and _is_digit(remaining[0]) else None

    if isinstance(kind, AlphaNumeric):
        return 1 if remaining and _is_word(remaining[0]) else None

    if isinstance(kind, Alternatives):
        for item in kind.items:
            offset = match_subpattern(remaining, item, captures)
            if offset is not None:
                return offset
        return None

    if isinstance(kind, NotAlternatives):
        if not remaining:
            return None
        for item in kind.items:
            if match_subpattern(remaining, item, captures) is not None:
                return None
        return 1

    if isinstance(kind, AlternateGroups):
        for alternative in kind.alternatives:
            offset = match_all_subpatterns(remaining, alternative, captures)
            if offset is not None:
                if captures.record(kind.group_id, remaining[:offset]):
                    logger.debug(
                        "Captured group %d: %r", kind.group_id, remaining[:offset]
                    )
                return offset
        return None

    if isinstance(kind, BackRef):
        captured = captures.get(kind.group_id)
        if captured is None:
            logger.debug("Backreference \\%d has no capture", kind.index)
            return None
        span = match_nodes(remaining, literal_nodes(captured), True, captures)
        if span is not None and span.start == 0:
            return span.end
        return None

    raise InternalMatchError(f"Unknown pattern kind: {kind!r}")


def match_subpattern(
    remaining: str, node: PatternNode, captures: CaptureTable
) -> Optional[int]:
    """Match one node, applying its quantifier, at the start of ``remaining``.

    Returns:
        Number of characters consumed, or None if the node does not match.
    """
    if node.is_greedy:
        still_remaining = remaining
        while still_remaining:
            offset = match_subpattern_kind(still_remaining, node.kind, captures)
            # Zero-width repetitions would never make progress.
            if not offset:
                break
            still_remaining = still_remaining[offset:]

        consumed = len(remaining) - len(still_remaining)
        if node.modifier is Modifier.ONE_OR_MORE and consumed == 0:
            return None
        return consumed

    if node.modifier is Modifier.ZERO_OR_ONE:
        offset = match_subpattern_kind(remaining, node.kind, captures)
        return offset if offset is not None else 0

    return match_subpattern_kind(remaining, node.kind, captures)


def find_match_start(
    text: str, node: PatternNode, captures: CaptureTable
) -> Optional[Tuple[int, int]]:
    """Find the first offset in ``text`` where ``node`` matches.

    Offsets are probed from 0 up to and including ``len(text)``.

    Returns:
        Tuple of (start offset, characters consumed), or None.
    """
    for n in range(len(text) + 1):
        offset = match_subpattern(text[n:], node, captures)
        if offset is not None:
            logger.debug("Found first match at %d offset %d", n, offset)
            return n, offset
    return None


def match_all_subpatterns(
    text: str, nodes: List[PatternNode], captures: CaptureTable
) -> Optional[int]:
    """Match a node sequence anchored at the start of ``text``.

    No start search and no backtracking; used for group alternatives.

    Returns:
        Total number of characters consumed, or None.
    """
    remaining = text
    for node in nodes:
        offset = match_subpattern(remaining, node, captures)
        if offset is None:
            return None
        remaining = remaining[offset:]
    return len(text) - len(remaining)


def _backtrack_offsets(
    node: PatternNode, text: str, consumed: int, captures: CaptureTable
) -> List[int]:
    """Other lengths ``node`` could have matched at the start of ``text``.

    A ``*`` or ``+`` node may give back part of what it consumed, keeping at
    least one repetition for ``+``. A group may instead end where one of its
    other alternatives ends. Lengths are returned shortest first.
    """
    if node.is_greedy:
        low = 1 if node.modifier is Modifier.ONE_OR_MORE else 0
        return list(range(low, consumed))

    if not isinstance(node.kind, AlternateGroups):
        return []
    lengths = set()
    for alternative in node.kind.alternatives:
        length = match_all_subpatterns(text, alternative, captures)
        if length is not None:
            lengths.add(length)
    if node.modifier is Modifier.ZERO_OR_ONE:
        lengths.add(0)
    lengths.discard(consumed)
    return sorted(lengths)


def _match_from(
    input_line: str,
    nodes: List[PatternNode],
    match_start: int,
    first: Optional[Tuple[PatternNode, int]],
    captures: CaptureTable,
) -> Optional[Span]:
    """Match ``nodes`` starting at ``match_start``.

    ``first`` is the node already matched there by the start search, with
    the number of characters it consumed.
    """
    remaining = input_line[match_start:]
    previous = None
    previous_remaining = remaining
    previous_offset = 0
    if first is not None:
        previous, previous_offset = first
        remaining = remaining[previous_offset:]

    for node in nodes:
        logger.debug("Matching %r against %r", node, remaining)
        offset = match_subpattern(remaining, node, captures)
        if offset is None:
            if previous is None:
                return None
            logger.debug("Backtracking over %r", previous)
            for length in _backtrack_offsets(
                previous, previous_remaining, previous_offset, captures
            ):
                offset = match_subpattern(previous_remaining[length:], node, captures)
                if offset is not None:
                    remaining = previous_remaining[length:]
                    break
            else:
                return None

        previous = node
        previous_remaining = remaining
        previous_offset = offset
        remaining = remaining[offset:]

    return Span(match_start, len(input_line) - len(remaining))


def match_nodes(
    input_line: str,
    nodes: List[PatternNode],
    force_from_start: bool = False,
    captures: Optional[CaptureTable] = None,
) -> Optional[Span]:
    """Search ``input_line`` for a compiled node sequence.

    Args:
        input_line: The text to search.
        nodes: Compiled pattern nodes.
        force_from_start: Only accept a match starting at offset 0.
        captures: Capture table to fill; a fresh one is used if omitted.

    Returns:
        The leftmost matching span, or None.
    """
    if captures is None:
        captures = CaptureTable()
    if not nodes:
        return Span(0, 0)

    if isinstance(nodes[0].kind, InputStart):
        return _match_from(input_line, nodes[1:], 0, None, captures)
    if force_from_start:
        return _match_from(input_line, nodes, 0, None, captures)

    first = nodes[0]
    search_from = 0
    while search_from <= len(input_line):
        found = find_match_start(input_line[search_from:], first, captures)
        if found is None:
            return None
        start, offset = found
        match_start = search_from + start

        span = _match_from(
            input_line, nodes[1:], match_start, (first, offset), captures
        )
        if span is not None:
            return span

        logger.debug("No match from offset %d, resuming search", match_start)
        captures.clear()
        search_from = match_start + 1
    return None


def match_pattern(
    input_line: str, pattern: str, force_from_start: bool = False
) -> Optional[Span]:
    """Compile ``pattern`` and search ``input_line`` with it.

    Args:
        input_line: The text to search.
        pattern: The regex pattern string.
        force_from_start: Only accept a match starting at offset 0.

    Returns:
        Span of the leftmost match, or None if there is no match.

    Raises:
        ParseError: If the pattern cannot be compiled.
    """
    compiled = compile_pattern(pattern)
    return match_nodes(input_line, compiled.nodes, force_from_start)
