"""Tests for source models and the file loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from cbo.rules.base import Diagnostic, RuleKind
from cbo.source import (
    FileType,
    Line,
    LoadError,
    SourceFile,
    detect_file_type,
    load_source_file,
    split_lines,
)


def test_detect_file_type_from_suffix() -> None:
    assert detect_file_type("src/list.h") is FileType.C_HEADER
    assert detect_file_type("src/list.c") is FileType.C_BODY
    assert detect_file_type("README.md") is FileType.UNKNOWN
    assert detect_file_type("Makefile") is FileType.UNKNOWN


def test_split_lines_strips_newlines_and_carriage_returns() -> None:
    assert split_lines("a\r\nb\n") == ["a", "b"]
    assert split_lines("a\n\n") == ["a", ""]
    assert split_lines("a") == ["a"]
    assert split_lines("") == []


def test_line_properties() -> None:
    line = Line(4, "    case 3:  ")
    assert line.number == 5
    assert line.head == 4
    assert line.head_char == "c"
    assert line.last_char == ":"
    assert line.is_case_label
    assert not line.is_empty
    assert not line.is_comment


def test_blank_line_is_not_empty() -> None:
    line = Line(0, "   ")
    assert not line.is_empty
    assert line.head_char == ""
    assert line.last_char == ""


def test_comment_body_lines() -> None:
    assert Line(0, " * text").is_comment_body
    assert Line(0, " */").is_comment_body
    assert Line(0, " *").is_comment_body
    assert not Line(0, " *ptr = 1;").is_comment_body


def test_load_source_file_reads_lines(tmp_path: Path) -> None:
    path = tmp_path / "main.c"
    path.write_text("int x;\r\n\nint y;\n", encoding="utf-8")

    source = load_source_file(path)

    assert source.path == str(path)
    assert [line.text for line in source.lines] == ["int x;", "", "int y;"]
    assert source.file_type is FileType.C_BODY
    assert source.passed


def test_load_rejects_lines_longer_than_buffer(tmp_path: Path) -> None:
    path = tmp_path / "long.c"
    path.write_text("int x;\n" + "y" * 20 + "\n", encoding="utf-8")

    with pytest.raises(LoadError, match="Line 2"):
        load_source_file(path, max_line_buffer=10)


def test_load_rejects_undecodable_files(tmp_path: Path) -> None:
    path = tmp_path / "binary.c"
    path.write_bytes(b"int x;\n\xff\xfe\n")

    with pytest.raises(LoadError, match="Cannot decode"):
        load_source_file(path)


def test_load_rejects_missing_files(tmp_path: Path) -> None:
    with pytest.raises(LoadError, match="Cannot read"):
        load_source_file(tmp_path / "missing.c")


def test_load_keeps_lone_carriage_returns_inside_lines(tmp_path: Path) -> None:
    path = tmp_path / "mixed.c"
    path.write_bytes(b"int a;\rint b;\r\nint c;\n")

    source = load_source_file(path)

    assert [line.text for line in source.lines] == ["int a;\rint b;", "int c;"]


def test_add_diagnostic_keeps_line_order() -> None:
    source = SourceFile.from_text("t.c", "a\nb\nc\n")
    third, first = source.lines[2], source.lines[0]
    source.add_diagnostic(Diagnostic(source=source, line=third, kind=RuleKind.TAB_INDENT))
    source.add_diagnostic(Diagnostic(source=source, line=first, kind=RuleKind.LINE_TOO_LONG))
    source.add_diagnostic(
        Diagnostic(source=source, line=first, kind=RuleKind.TRAILING_WHITESPACE)
    )

    assert [(item.line_number, item.kind) for item in source.diagnostics] == [
        (1, RuleKind.LINE_TOO_LONG),
        (1, RuleKind.TRAILING_WHITESPACE),
        (3, RuleKind.TAB_INDENT),
    ]
    assert not source.passed

    source.clear_diagnostics()
    assert source.passed
