"""Tests for output rendering."""

from __future__ import annotations

import pytest

from cbo import __version__
from cbo.checker import RunReport, check_source
from cbo.output import (
    EchoSink,
    NullSink,
    build_json_payload,
    render_banner,
    render_diagnostic,
    render_rule_list,
    render_summary,
    report_file,
)
from cbo.rules import RuleInfo
from cbo.source import SourceFile


def test_render_diagnostic_single_line() -> None:
    source = _checked("bad.c", "int x ;\n")
    assert render_diagnostic(source.diagnostics[0]) == "bad.c:1 Space before semicolon.\nint x ;"


def test_render_diagnostic_includes_related_line() -> None:
    source = _checked("brace.c", "void f(void) {\n\n  x();\n}\n")
    rendered = render_diagnostic(source.diagnostics[0])
    assert rendered == "\n".join(
        ["brace.c:4 Missing blank line before closing brace.", "  x();", "}"]
    )


def test_colored_output_keeps_the_text() -> None:
    source = _checked("bad.c", "int x ;\n")
    rendered = render_diagnostic(source.diagnostics[0], color=True)
    assert "\x1b[" in rendered
    assert "bad.c:1 Space before semicolon." in rendered


def test_report_file_writes_banner_then_diagnostics(capsys: pytest.CaptureFixture[str]) -> None:
    source = _checked("bad.c", "int x ;\n")
    report_file(source, EchoSink())
    assert capsys.readouterr().out == (
        "=== Check file [bad.c] ===\nbad.c:1 Space before semicolon.\nint x ;\n"
    )


def test_null_sink_discards(capsys: pytest.CaptureFixture[str]) -> None:
    report_file(_checked("bad.c", "int x ;\n"), NullSink())
    assert capsys.readouterr().out == ""


def test_render_banner() -> None:
    assert render_banner("src/a.c") == "=== Check file [src/a.c] ==="


def test_summary_success() -> None:
    report = RunReport()
    report.record(_checked("a.c", "int x;\n"))
    report.record(_checked("b.h", "int y;\n"))
    assert render_summary(report) == "All 2 files were checked successfully. Nice job guy !"


def test_summary_failure() -> None:
    report = RunReport()
    report.record(_checked("a.c", "int x ;\nint y ;\n"))
    report.record(_checked("b.c", "int z;\n"))
    assert render_summary(report) == "2 error(s) in 1 out of 2 file(s). Don't give up !"


def test_summary_empty_run() -> None:
    assert render_summary(RunReport()) == ""


def test_json_payload_shape() -> None:
    report = RunReport()
    report.record(_checked("a.c", "int x ;\n"))
    report.record_failure("gone.c", "Cannot read gone.c")

    payload = build_json_payload(report)

    assert payload["files"] == [
        {
            "path": "a.c",
            "file_type": "body",
            "passed": False,
            "diagnostics": [
                {
                    "line": 1,
                    "rule_id": "space-around-semicolon",
                    "message": "Space before semicolon",
                    "text": "int x ;",
                }
            ],
        }
    ]
    assert payload["load_failures"] == [{"path": "gone.c", "reason": "Cannot read gone.c"}]
    assert payload["summary"] == {
        "files": 2,
        "errors": 2,
        "files_with_errors": 2,
        "success": False,
    }
    assert payload["meta"]["version"] == __version__
    assert payload["meta"]["generated_at"].endswith("Z")


def test_render_rule_list_marks_status() -> None:
    rules = [
        RuleInfo("line-too-long", "LineTooLongRule", "Too long.", "layout"),
        RuleInfo("tab-indent", "TabIndentRule", "Tabs.", "layout"),
    ]
    rendered = render_rule_list(rules, {"line-too-long"})
    assert "- line-too-long [enabled] (layout) - Too long." in rendered
    assert "- tab-indent [disabled] (layout) - Tabs." in rendered


def _checked(path: str, text: str) -> SourceFile:
    source = SourceFile.from_text(path, text)
    check_source(source)
    return source
