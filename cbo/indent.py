"""Expected indentation of every line, inferred in one forward pass.

The engine is a heuristic keyed on the last non-blank character of each line
plus a few sticky flags. It is not a grammar; its decisions are:

* a line whose head is ``}`` (outside directives) dedents before it is measured;
* ``{`` indents, unless it closes a parenthesis continuation, in which case the
  continuation's indent carries over to the block;
* ``(`` indents and opens a parenthesis continuation;
* ``=`` indents and opens a multi-line assignment;
* ``;`` closes an open assignment, closes a parenthesis continuation outside a
  ``for`` header, and closes a case block when the line is exactly ``break;``;
* ``:`` opens a case block and indents.

Empty lines, comments and preprocessor lines are measured but never change
the state.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cbo.source import Line

DEFAULT_INDENT_WIDTH = 2


@dataclass(slots=True)
class IndentState:
    """State carried from one line to the next."""

    indent: int = 0
    in_multiline_assignment: bool = False
    in_parenthesis: bool = False
    in_for_header: bool = False
    in_case_block: bool = False

    def indent_by(self, width: int) -> None:
        self.indent += width

    def dedent_by(self, width: int) -> None:
        self.indent = max(0, self.indent - width)


def compute_expected_indents(
    lines: Sequence[Line],
    preprocessor: Sequence[bool],
    indent_width: int = DEFAULT_INDENT_WIDTH,
) -> list[int]:
    """Return the expected head position of every line."""
    state = IndentState()
    return [
        advance(state, line, is_preprocessor, indent_width)
        for line, is_preprocessor in zip(lines, preprocessor, strict=True)
    ]


def advance(state: IndentState, line: Line, is_preprocessor: bool, indent_width: int) -> int:
    """Measure ``line`` against ``state``, update ``state`` and return the expected indent."""
    if line.starts_with("for ("):
        state.in_for_header = True
    if line.is_case_label:
        state.in_case_block = True

    if line.head_char == "}" and not is_preprocessor:
        state.dedent_by(indent_width)
    expected = state.indent

    if line.is_empty or line.is_comment or is_preprocessor:
        return expected

    last = line.last_char
    if last == "{":
        if state.in_parenthesis:
            state.in_parenthesis = False
        else:
            state.indent_by(indent_width)
        state.in_for_header = False
    elif last == "(":
        state.indent_by(indent_width)
        state.in_parenthesis = True
    elif last == "=":
        state.in_multiline_assignment = True
        state.indent_by(indent_width)
    elif last == ";":
        if state.in_multiline_assignment:
            state.in_multiline_assignment = False
            state.dedent_by(indent_width)
        if state.in_parenthesis and not state.in_for_header:
            state.in_parenthesis = False
            state.dedent_by(indent_width)
        if state.in_case_block and line.text.strip() == "break;":
            state.in_case_block = False
            state.dedent_by(indent_width)
    elif last == ":":
        state.in_case_block = True
        state.indent_by(indent_width)
    return expected
