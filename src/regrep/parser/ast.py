"""Pattern node definitions for compiled regex patterns."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional


class Modifier(Enum):
    """Quantifier attached to a pattern node."""

    ZERO_OR_ONE = "?"
    ZERO_OR_MORE = "*"
    ONE_OR_MORE = "+"

    @classmethod
    def from_char(cls, char: Optional[str]) -> "Optional[Modifier]":
        """Return the modifier spelled by ``char``, or None."""
        for modifier in cls:
            if modifier.value == char:
                return modifier
        return None


class Kind(ABC):
    """Base class for all pattern node kinds."""

    @abstractmethod
    def children(self) -> "List[PatternNode]":
        """Return nested pattern nodes."""
        ...

    @abstractmethod
    def __repr__(self) -> str:
        ...


# ============================================================================
# Pattern node
# ============================================================================


@dataclass
class PatternNode:
    """One atomic matchable unit, optionally quantified.

    Attributes:
        kind: What the node matches.
        modifier: Optional quantifier; None means exactly once.
    """

    kind: Kind
    modifier: Optional[Modifier] = None

    @property
    def is_greedy(self) -> bool:
        """True for nodes that may consume an unbounded run of input."""
        return self.modifier in (Modifier.ZERO_OR_MORE, Modifier.ONE_OR_MORE)

    def walk(self) -> "Iterator[PatternNode]":
        """Yield this node and all descendants."""
        yield self
        for child in self.kind.children():
            yield from child.walk()

    def __repr__(self) -> str:
        if self.modifier is None:
            return repr(self.kind)
        return f"{self.kind!r}{self.modifier.value}"


# ============================================================================
# Single character kinds
# ============================================================================


@dataclass
class Literal(Kind):
    """Single character literal.

    Attributes:
        char: The character to match.
    """

    char: str

    def children(self) -> "List[PatternNode]":
        return []

    def __repr__(self) -> str:
        return f"Literal({self.char!r})"


@dataclass
class Digit(Kind):
    """\\d - ASCII decimal digit."""

    def children(self) -> "List[PatternNode]":
        return []

    def __repr__(self) -> str:
        return "Digit()"


@dataclass
class AlphaNumeric(Kind):
    """\\w - alphanumeric character or underscore."""

    def children(self) -> "List[PatternNode]":
        return []

    def __repr__(self) -> str:
        return "AlphaNumeric()"


@dataclass
class Any(Kind):
    """Dot (.) - matches any character."""

    def children(self) -> "List[PatternNode]":
        return []

    def __repr__(self) -> str:
        return "Any()"


# ============================================================================
# Anchors
# ============================================================================


@dataclass
class InputStart(Kind):
    """^ - start of input. Only honoured as the first node of a pattern."""

    def children(self) -> "List[PatternNode]":
        return []

    def __repr__(self) -> str:
        return "InputStart()"


@dataclass
class InputEnd(Kind):
    """$ - end of input."""

    def children(self) -> "List[PatternNode]":
        return []

    def __repr__(self) -> str:
        return "InputEnd()"


# ============================================================================
# Character classes
# ============================================================================


@dataclass
class Alternatives(Kind):
    """Character class [...].

    Attributes:
        items: Compiled class body; the class matches if any item does.
    """

    items: "List[PatternNode]"

    def children(self) -> "List[PatternNode]":
        return self.items

    def __repr__(self) -> str:
        return f"Alternatives({self.items!r})"


@dataclass
class NotAlternatives(Kind):
    """Negated character class [^...].

    Attributes:
        items: Compiled class body; the class matches if no item does.
    """

    items: "List[PatternNode]"

    def children(self) -> "List[PatternNode]":
        return self.items

    def __repr__(self) -> str:
        return f"NotAlternatives({self.items!r})"


# ============================================================================
# Groups and backreferences
# ============================================================================


@dataclass
class AlternateGroups(Kind):
    """Capturing alternation group (a|b|...).

    Attributes:
        group_id: Capture slot, 0-based in order of appearance.
        alternatives: One compiled node sequence per ``|`` branch.
    """

    group_id: int
    alternatives: "List[List[PatternNode]]"

    def children(self) -> "List[PatternNode]":
        return [node for alternative in self.alternatives for node in alternative]

    def __repr__(self) -> str:
        return f"AlternateGroups({self.group_id}, {self.alternatives!r})"


@dataclass
class BackRef(Kind):
    """Numeric backreference \\1, \\2, etc.

    Attributes:
        index: The group number as written (1-based).
    """

    index: int

    @property
    def group_id(self) -> int:
        """The 0-based capture slot this reference reads."""
        return self.index - 1

    def children(self) -> "List[PatternNode]":
        return []

    def __repr__(self) -> str:
        return f"BackRef({self.index})"


# ============================================================================
# Helper functions
# ============================================================================


def walk(nodes: "List[PatternNode]") -> "Iterator[PatternNode]":
    """Yield every node of a sequence and all of their descendants."""
    for node in nodes:
        yield from node.walk()


def has_backreferences(nodes: "List[PatternNode]") -> bool:
    """Check if a node sequence contains backreferences."""
    return any(isinstance(n.kind, BackRef) for n in walk(nodes))


def count_groups(nodes: "List[PatternNode]") -> int:
    """Count the number of capturing groups in a node sequence."""
    return sum(1 for n in walk(nodes) if isinstance(n.kind, AlternateGroups))


def format_nodes(nodes: "List[PatternNode]", indent: int = 0) -> str:
    """Render a node sequence as an indented tree, one node per line."""
    lines = []
    pad = "  " * indent
    for node in nodes:
        kind = node.kind
        suffix = node.modifier.value if node.modifier else ""
        if isinstance(kind, AlternateGroups):
            lines.append(f"{pad}AlternateGroups(group={kind.group_id}){suffix}")
            for i, alternative in enumerate(kind.alternatives):
                lines.append(f"{pad}  | alternative {i}")
                if alternative:
                    lines.append(format_nodes(alternative, indent + 2))
        elif isinstance(kind, (Alternatives, NotAlternatives)):
            lines.append(f"{pad}{kind.__class__.__name__}{suffix}")
            if kind.items:
                lines.append(format_nodes(kind.items, indent + 1))
        else:
            lines.append(f"{pad}{node!r}")
    return "\n".join(lines)
