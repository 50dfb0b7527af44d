"""Tests for compiling pattern strings into pattern node sequences."""

import logging
from typing import Optional

import pytest

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
    Literal,
    Modifier,
    NotAlternatives,
    PatternNode,
    count_groups,
    format_nodes,
    has_backreferences,
)
from regrep.parser.parser import compile, compile_pattern


def lit(char: str, modifier: Optional[Modifier] = None) -> PatternNode:
    return PatternNode(Literal(char), modifier)


# =============================================================================
# Single tokens
# =============================================================================


class TestTokens:
    """Each token compiles to exactly one node."""

    @pytest.mark.parametrize(
        "pattern,kind,name",
        [
            (".", Any(), "dot"),
            ("^", InputStart(), "start anchor"),
            ("$", InputEnd(), "end anchor"),
            (r"\d", Digit(), "digit escape"),
            (r"\w", AlphaNumeric(), "word escape"),
            (r"\\", Literal("\\"), "escaped backslash"),
            (r"\3", BackRef(3), "backreference"),
            ("a", Literal("a"), "literal"),
            (" ", Literal(" "), "space literal"),
            ("'", Literal("'"), "quote literal"),
            ("é", Literal("é"), "non-ascii literal"),
        ],
    )
    def test_single_token(self, pattern, kind, name):
        nodes = compile(pattern)
        assert nodes == [PatternNode(kind)], f"{pattern!r} ({name})"

    def test_literal_run(self):
        assert compile("abc") == [lit("a"), lit("b"), lit("c")]

    def test_empty_pattern(self):
        assert compile("") == []

    def test_anchored_pattern(self):
        assert compile("^ab$") == [
            PatternNode(InputStart()),
            lit("a"),
            lit("b"),
            PatternNode(InputEnd()),
        ]

    def test_backref_group_id_is_zero_based(self):
        (node,) = compile(r"\1")
        assert node.kind.index == 1
        assert node.kind.group_id == 0


# =============================================================================
# Quantifiers
# =============================================================================


class TestQuantifiers:
    """Quantifiers attach to the preceding node and are never emitted."""

    @pytest.mark.parametrize(
        "pattern,modifier",
        [
            ("a?", Modifier.ZERO_OR_ONE),
            ("a*", Modifier.ZERO_OR_MORE),
            ("a+", Modifier.ONE_OR_MORE),
        ],
    )
    def test_modifier_attached(self, pattern, modifier):
        assert compile(pattern) == [lit("a", modifier)]

    def test_mixed_modifiers(self):
        assert compile("a+b*c?d") == [
            lit("a", Modifier.ONE_OR_MORE),
            lit("b", Modifier.ZERO_OR_MORE),
            lit("c", Modifier.ZERO_OR_ONE),
            lit("d"),
        ]

    def test_leading_quantifier_is_skipped(self):
        assert compile("+a") == [lit("a")]

    def test_repeated_quantifier_keeps_first(self):
        assert compile("a*+b") == [lit("a", Modifier.ZERO_OR_MORE), lit("b")]

    def test_quantified_group(self):
        (node,) = compile("(ab)+")
        assert isinstance(node.kind, AlternateGroups)
        assert node.modifier is Modifier.ONE_OR_MORE
        assert node.is_greedy

    def test_quantified_class(self):
        (node,) = compile("[ab]?")
        assert isinstance(node.kind, Alternatives)
        assert node.modifier is Modifier.ZERO_OR_ONE
        assert not node.is_greedy


# =============================================================================
# Character classes
# =============================================================================


class TestCharacterClasses:
    def test_positive_class(self):
        assert compile("[abc]") == [
            PatternNode(Alternatives([lit("a"), lit("b"), lit("c")]))
        ]

    def test_negated_class(self):
        assert compile("[^xy]") == [PatternNode(NotAlternatives([lit("x"), lit("y")]))]

    def test_class_body_is_compiled(self):
        (node,) = compile(r"[\d_]")
        assert node.kind.items == [PatternNode(Digit()), lit("_")]

    def test_no_range_syntax(self):
        (node,) = compile("[a-c]")
        assert node.kind.items == [lit("a"), lit("-"), lit("c")]

    def test_closing_bracket_first_is_literal(self):
        (node,) = compile("[]a]")
        assert node.kind.items == [lit("]"), lit("a")]

    def test_quantifier_inside_class(self):
        (node,) = compile("[a+]")
        assert node.kind.items == [lit("a", Modifier.ONE_OR_MORE)]


# =============================================================================
# Groups
# =============================================================================


class TestGroups:
    def test_alternation(self):
        (node,) = compile("(cat|dog)")
        assert node.kind == AlternateGroups(
            0, [[lit("c"), lit("a"), lit("t")], [lit("d"), lit("o"), lit("g")]]
        )

    def test_empty_alternative(self):
        (node,) = compile("(a|)")
        assert node.kind.alternatives == [[lit("a")], []]

    def test_single_alternative(self):
        (node,) = compile("(ab)")
        assert node.kind.alternatives == [[lit("a"), lit("b")]]

    def test_group_ids_are_preorder(self):
        """Outer groups are numbered before the groups nested inside them."""
        outer, last = compile("((a|b)c|d)(e)")
        assert outer.kind.group_id == 0
        inner = outer.kind.alternatives[0][0]
        assert inner.kind.group_id == 1
        assert last.kind.group_id == 2

    def test_nested_pipe_does_not_split_outer(self):
        (node,) = compile("(x(a|b)|y)")
        assert len(node.kind.alternatives) == 2
        assert node.kind.alternatives[1] == [lit("y")]

    def test_group_ids_restart_per_compile(self):
        compile("(a)(b)")
        (node,) = compile("(c)")
        assert node.kind.group_id == 0

    def test_group_count(self):
        assert compile_pattern("((a|b)c|d)(e)").group_count == 3
        assert compile_pattern("abc").group_count == 0

    def test_group_inside_class_gets_an_id(self):
        nodes = compile("[(a)](b)")
        assert nodes[1].kind.group_id == 1

    def test_pipe_inside_class_does_not_split_group(self):
        (node,) = compile("(a|[|])")
        assert node.kind.alternatives == [
            [lit("a")],
            [PatternNode(Alternatives([lit("|")]))],
        ]

    def test_paren_inside_class_does_not_close_group(self):
        (node,) = compile("([)]|b)")
        assert node.kind.alternatives == [
            [PatternNode(Alternatives([lit(")")]))],
            [lit("b")],
        ]


# =============================================================================
# Compile errors
# =============================================================================


class TestCompileErrors:
    """Unsupported syntax fails at compile time with a position."""

    @pytest.mark.parametrize(
        "pattern,position,name",
        [
            (r"\x", 0, "unknown escape"),
            (r"ab\.", 2, "escaped dot"),
            (r"[a\q]", 2, "unknown escape inside class"),
            (r"(a|\s)", 3, "unknown escape inside group"),
        ],
    )
    def test_unsupported_escape(self, pattern, position, name):
        with pytest.raises(UnsupportedEscapeError) as excinfo:
            compile(pattern)
        assert excinfo.value.position == position, f"{pattern!r} ({name})"

    @pytest.mark.parametrize(
        "pattern,position,name",
        [
            ("ab\\", 2, "trailing backslash"),
            (r"\0", 0, "group zero"),
            ("[abc", 0, "unterminated class"),
            ("[", 0, "bare bracket"),
            ("x[^", 1, "unterminated negated class"),
            ("(abc", 0, "unclosed group"),
            ("a(b(c)", 1, "unclosed outer group"),
            ("a^", 1, "start anchor mid pattern"),
            ("(^a)", 1, "start anchor inside group"),
            ("[a^]", 2, "start anchor inside class"),
        ],
    )
    def test_parse_error(self, pattern, position, name):
        with pytest.raises(ParseError) as excinfo:
            compile(pattern)
        assert excinfo.value.position == position, f"{pattern!r} ({name})"

    def test_error_message_includes_position(self):
        with pytest.raises(UnsupportedEscapeError) as excinfo:
            compile(r"a\x")
        assert str(excinfo.value) == "Unsupported escape sequence '\\x' at position 1"
        assert excinfo.value.escape == "x"


# =============================================================================
# Helpers
# =============================================================================


class TestHelpers:
    def test_compile_is_deterministic(self):
        pattern = r"^(a|b\d)+[^x]\1$"
        assert compile(pattern) == compile(pattern)

    def test_has_backreferences(self):
        assert has_backreferences(compile(r"(a)\1"))
        assert has_backreferences(compile(r"(a|[\1])"))
        assert not has_backreferences(compile("(a)1"))

    def test_compile_logs_summary(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="regrep.parser.parser"):
            compile_pattern(r"(a)\1")
        assert "1 groups, backreferences: True" in caplog.text

    def test_count_groups_nested(self):
        assert count_groups(compile("(a(b(c)))")) == 3

    def test_format_nodes(self):
        dump = format_nodes(compile("(a|b)+[^c]d?"))
        assert dump.splitlines() == [
            "AlternateGroups(group=0)+",
            "  | alternative 0",
            "    Literal('a')",
            "  | alternative 1",
            "    Literal('b')",
            "NotAlternatives",
            "  Literal('c')",
            "Literal('d')?",
        ]
