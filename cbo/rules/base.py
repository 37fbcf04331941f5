"""Rule protocol, rule settings and the diagnostic model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Protocol

from cbo.indent import DEFAULT_INDENT_WIDTH
from cbo.source import Line, SourceFile

DEFAULT_MAX_LINE_LENGTH = 79
DEFAULT_OPERATORS = ("+", "-", "/", "|")


class RuleKind(Enum):
    """Closed set of style violations."""

    LINE_TOO_LONG = "line-too-long"
    TRAILING_WHITESPACE = "trailing-whitespace"
    MISSING_BLANK_BEFORE_CLOSING_BRACE = "missing-blank-before-closing-brace"
    MISSING_BLANK_AFTER_OPENING_BRACE = "missing-blank-after-opening-brace"
    MISSING_BLANK_AFTER_CLOSING_BRACE = "missing-blank-after-closing-brace"
    SPACE_AROUND_COMMA = "space-around-comma"
    SPACE_AROUND_SEMICOLON = "space-around-semicolon"
    SPACE_AROUND_OPERATOR = "space-around-operator"
    MULTIPLE_BLANK_LINES = "multiple-blank-lines"
    BRACE_AT_LINE_HEAD = "brace-at-line-head"
    BRACE_AT_LINE_TAIL = "brace-at-line-tail"
    CHAR_BEFORE_DOT = "char-before-dot"
    SPACE_BEFORE_OPENING_BRACE = "space-before-opening-brace"
    MISSING_BLANK_BEFORE_COMMENT = "missing-blank-before-comment"
    BAD_INDENT = "bad-indent"
    MULTIPLE_ARGS_PER_LINE = "multiple-args-per-line"
    UNALIGNED_ARGS = "unaligned-args"
    TAB_INDENT = "tab-indent"
    MISSING_BLANK_BEFORE_CASE = "missing-blank-before-case"
    MACRO_NAME_NOT_CAPITALIZED = "macro-name-not-capitalized"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES: Mapping[RuleKind, str] = MappingProxyType(
    {
        RuleKind.LINE_TOO_LONG: "Line too long",
        RuleKind.TRAILING_WHITESPACE: "Trailing whitespace",
        RuleKind.MISSING_BLANK_BEFORE_CLOSING_BRACE: "Missing blank line before closing brace",
        RuleKind.MISSING_BLANK_AFTER_OPENING_BRACE: "Missing blank line after opening brace",
        RuleKind.MISSING_BLANK_AFTER_CLOSING_BRACE: "Missing blank line after closing brace",
        RuleKind.SPACE_AROUND_COMMA: "Bad spacing around comma",
        RuleKind.SPACE_AROUND_SEMICOLON: "Space before semicolon",
        RuleKind.SPACE_AROUND_OPERATOR: "Missing space around operator",
        RuleKind.MULTIPLE_BLANK_LINES: "Multiple blank lines",
        RuleKind.BRACE_AT_LINE_HEAD: "Opening brace at head of line",
        RuleKind.BRACE_AT_LINE_TAIL: "Closing brace at tail of line",
        RuleKind.CHAR_BEFORE_DOT: "Unexpected character before dot",
        RuleKind.SPACE_BEFORE_OPENING_BRACE: "Missing space before opening brace",
        RuleKind.MISSING_BLANK_BEFORE_COMMENT: "Missing blank line before comment",
        RuleKind.BAD_INDENT: "Bad indentation",
        RuleKind.MULTIPLE_ARGS_PER_LINE: "Multiple arguments on one line",
        RuleKind.UNALIGNED_ARGS: "Unaligned arguments",
        RuleKind.TAB_INDENT: "Tab used for indentation",
        RuleKind.MISSING_BLANK_BEFORE_CASE: "Missing blank line before case",
        RuleKind.MACRO_NAME_NOT_CAPITALIZED: "Macro name not capitalized",
    }
)


@dataclass(frozen=True, slots=True)
class RuleSettings:
    """Tunables shared by the rules."""

    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    indent_width: int = DEFAULT_INDENT_WIDTH
    operators: tuple[str, ...] = DEFAULT_OPERATORS


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single style violation found on a line of a file."""

    source: SourceFile = field(repr=False, compare=False)
    line: Line
    kind: RuleKind
    related: Line | None = None

    @property
    def path(self) -> str:
        return self.source.path

    @property
    def line_number(self) -> int:
        return self.line.number

    @property
    def rule_id(self) -> str:
        return self.kind.value

    @property
    def message(self) -> str:
        return self.kind.message


class Rule(Protocol):
    """Protocol for line-based style rules."""

    kind: RuleKind
    rule_id: str

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        """Scan the whole file and return every violation found."""
