"""Parser module: pattern strings to pattern node sequences."""

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
from regrep.parser.parser import CompiledPattern, Compiler, compile, compile_pattern

__all__ = [
    "AlphaNumeric",
    "AlternateGroups",
    "Alternatives",
    "Any",
    "BackRef",
    "Digit",
    "InputEnd",
    "InputStart",
    "Kind",
    "Literal",
    "Modifier",
    "NotAlternatives",
    "PatternNode",
    "CompiledPattern",
    "Compiler",
    "compile",
    "compile_pattern",
]
