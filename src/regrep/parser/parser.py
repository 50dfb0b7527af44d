"""Compiler from pattern strings to pattern node sequences."""

import itertools
import logging
import string
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from regrep.exceptions import ParseError, UnsupportedEscapeError
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
    count_groups,
    has_backreferences,
)

logger = logging.getLogger(__name__)

QUANTIFIERS = "?*+"


@dataclass
class CompiledPattern:
    """Result of compiling one pattern string.

    Attributes:
        source: The original pattern text.
        nodes: The top-level node sequence.
        group_count: Number of capturing groups, at any depth.
    """

    source: str
    nodes: List[PatternNode] = field(default_factory=list)
    group_count: int = 0


class Compiler:
    """Recursive-descent compiler over a pattern substring.

    Group and class bodies are compiled by child compilers that share the
    group id counter, so ids follow pre-order over the whole pattern.
    """

    def __init__(
        self,
        source: str,
        offset: int = 0,
        group_ids: Optional[Iterator[int]] = None,
    ) -> None:
        self.source = source
        self.offset = offset
        self.pos = 0
        self.nested = group_ids is not None
        self._group_ids = group_ids if group_ids is not None else itertools.count()

    def _next(self) -> Optional[str]:
        if self.pos < len(self.source):
            self.pos += 1
            return self.source[self.pos - 1]
        return None

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def _child(self, body: str, body_start: int) -> "Compiler":
        return Compiler(body, self.offset + body_start, self._group_ids)

    def compile(self) -> List[PatternNode]:
        """Compile the whole source into a node sequence."""
        nodes: List[PatternNode] = []
        while self.pos < len(self.source):
            start = self.pos
            char = self._next()
            if char in QUANTIFIERS:
                # Attached to the previous node when it was produced.
                continue
            kind = self._compile_token(char, start)
            nodes.append(PatternNode(kind, Modifier.from_char(self._peek())))
        return nodes

    def _compile_token(self, char: str, start: int) -> Kind:
        if char == ".":
            return Any()
        if char == "^":
            if self.nested or start > 0:
                raise ParseError(
                    "'^' is only supported at the start of the pattern",
                    self.offset + start,
                )
            return InputStart()
        if char == "$":
            return InputEnd()
        if char == "(":
            return self._compile_group(start)
        if char == "[":
            return self._compile_class(start)
        if char == "\\":
            return self._compile_escape(start)
        return Literal(char)

    def _compile_group(self, start: int) -> AlternateGroups:
        # Assigned before the bodies are compiled: ids are pre-order.
        group_id = next(self._group_ids)
        bodies: List[Tuple[str, int]] = []
        body_start = self.pos
        depth = 0
        closed = False
        while self.pos < len(self.source):
            char = self._next()
            if char == "[":
                self._skip_class_body()
            elif char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth < 0:
                    closed = True
                    break
            elif char == "|" and depth == 0:
                bodies.append((self.source[body_start : self.pos - 1], body_start))
                body_start = self.pos
        if not closed:
            raise ParseError("Missing closing parenthesis", self.offset + start)
        bodies.append((self.source[body_start : self.pos - 1], body_start))

        alternatives = [self._child(body, at).compile() for body, at in bodies]
        return AlternateGroups(group_id, alternatives)

    def _skip_class_body(self) -> None:
        # Same bounds as _compile_class; an unterminated class is reported
        # when the group body is compiled.
        if self._next() is None:
            return
        end = self.source.find("]", self.pos)
        if end >= 0:
            self.pos = end + 1

    def _compile_class(self, start: int) -> Kind:
        first = self._next()
        if first is None:
            raise ParseError("Unterminated character class", self.offset + start)

        negated = first == "^"
        body_start = self.pos if negated else self.pos - 1
        end = self.source.find("]", self.pos)
        if end < 0:
            raise ParseError("Unterminated character class", self.offset + start)
        self.pos = end + 1

        items = self._child(self.source[body_start:end], body_start).compile()
        if negated:
            return NotAlternatives(items)
        return Alternatives(items)

    def _compile_escape(self, start: int) -> Kind:
        char = self._next()
        if char is None:
            raise ParseError("Trailing backslash", self.offset + start)
        if char == "\\":
            return Literal("\\")
        if char == "d":
            return Digit()
        if char == "w":
            return AlphaNumeric()
        if char in string.digits:
            if char == "0":
                raise ParseError("Invalid group reference 0", self.offset + start)
            return BackRef(int(char))
        raise UnsupportedEscapeError(char, self.offset + start)


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile a pattern string.

    Args:
        pattern: The regex pattern string.

    Returns:
        CompiledPattern with the node sequence and group count.

    Raises:
        ParseError: If the pattern uses unsupported syntax or is unbalanced.
    """
    nodes = Compiler(pattern).compile()
    compiled = CompiledPattern(pattern, nodes, count_groups(nodes))
    logger.debug(
        "Compiled %r into %d nodes (%d groups, backreferences: %s)",
        pattern,
        len(nodes),
        compiled.group_count,
        has_backreferences(nodes),
    )
    return compiled


def compile(pattern: str) -> List[PatternNode]:
    """Compile a pattern string into its top-level node sequence."""
    return compile_pattern(pattern).nodes
