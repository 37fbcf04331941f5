"""Tests for expected indentation inference."""

from __future__ import annotations

from cbo.indent import IndentState
from cbo.source import SourceFile


def test_braces_indent_and_dedent() -> None:
    assert _indents("int f(void) {\n  return 1;\n}\n") == [0, 2, 0]


def test_indent_width_is_configurable() -> None:
    assert _indents("int f(void) {\n    return 1;\n}\n", width=4) == [0, 4, 0]


def test_multi_line_call_closes_on_semicolon() -> None:
    text = "void f(void) {\n  g(\n    1,\n    2);\n  h();\n}\n"
    assert _indents(text) == [0, 2, 4, 4, 2, 0]


def test_multi_line_assignment_closes_on_semicolon() -> None:
    text = "int f(void) {\n  int total =\n    a + b;\n  return total;\n}\n"
    assert _indents(text) == [0, 2, 4, 2, 0]


def test_switch_case_blocks_close_on_break() -> None:
    text = "\n".join(
        [
            "switch (x) {",
            "  case 1:",
            "    y();",
            "    break;",
            "  default:",
            "    break;",
            "}",
        ]
    )
    assert _indents(text) == [0, 2, 4, 4, 2, 4, 0]


def test_declaration_parenthesis_carries_into_body() -> None:
    text = "int add(\n  int a,\n  int b) {\n  return a + b;\n}\n"
    assert _indents(text) == [0, 2, 2, 2, 0]


def test_for_header_semicolons_keep_parenthesis_open() -> None:
    text = "for (\n  i = 0;\n  i < n;\n  ++i) {\n  f(i);\n}\n"
    assert _indents(text) == [0, 2, 2, 2, 2, 0]


def test_comments_and_directives_do_not_change_state() -> None:
    text = "#define X(a) \\\n  (a)\n// comment {\nint x;\n"
    assert _indents(text) == [0, 0, 0, 0]


def test_break_outside_case_block_does_not_dedent() -> None:
    assert _indents("while (1) {\n  break;\n}\n") == [0, 2, 0]


def test_stacked_case_labels_each_indent() -> None:
    text = "switch (x) {\n  case 1:\n  case 2:\n    break;\n}\n"
    assert _indents(text) == [0, 2, 4, 6, 2]


def test_unbalanced_closing_braces_floor_at_zero() -> None:
    assert _indents("}\n}\nint x;\n") == [0, 0, 0]


def test_indents_are_deterministic() -> None:
    source = SourceFile.from_text("t.c", "int f(void) {\n  g(\n    1);\n}\n")
    first = [source.expected_indent(index) for index in range(len(source.lines))]
    again = SourceFile.from_text("t.c", "int f(void) {\n  g(\n    1);\n}\n")
    assert [again.expected_indent(index) for index in range(len(again.lines))] == first


def test_indent_state_dedent_never_goes_negative() -> None:
    state = IndentState(indent=2)
    state.dedent_by(4)
    assert state.indent == 0
    state.indent_by(2)
    assert state.indent == 2


def _indents(text: str, width: int = 2) -> list[int]:
    source = SourceFile.from_text("t.c", text)
    return [source.expected_indent(index, width) for index in range(len(source.lines))]
