"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any, Protocol

import click

from cbo import __version__
from cbo.checker import RunReport
from cbo.rules import RuleInfo
from cbo.rules.base import Diagnostic
from cbo.source import SourceFile


class OutputSink(Protocol):
    """Destination for rendered text."""

    def write(self, text: str) -> None:
        """Write one block of text followed by a newline."""


class EchoSink:
    """Writes to stdout (or stderr) through click."""

    def __init__(self, *, err: bool = False, color: bool | None = None) -> None:
        self.err = err
        self.color = color

    def write(self, text: str) -> None:
        click.echo(text, err=self.err, color=self.color)


class NullSink:
    """Discards everything, used when only a file list or JSON is wanted."""

    def write(self, text: str) -> None:
        _ = text


def render_banner(path: str, *, color: bool = False) -> str:
    banner = f"=== Check file [{path}] ==="
    return click.style(banner, bold=True) if color else banner


def render_diagnostic(diagnostic: Diagnostic, *, color: bool = False) -> str:
    """``<path>:<line> <Message>.`` then the previous line for two-line rules, then the line."""
    header = f"{diagnostic.path}:{diagnostic.line_number} {diagnostic.message}."
    lines = [click.style(header, fg="red") if color else header]
    if diagnostic.related is not None:
        lines.append(diagnostic.related.text)
    lines.append(diagnostic.line.text)
    return "\n".join(lines)


def render_file(source: SourceFile, *, color: bool = False) -> str:
    return "\n".join(render_diagnostic(item, color=color) for item in source.diagnostics)


def report_file(source: SourceFile, sink: OutputSink, *, color: bool = False) -> None:
    """Write the banner and every diagnostic of a checked file to ``sink``."""
    sink.write(render_banner(source.path, color=color))
    for diagnostic in source.diagnostics:
        sink.write(render_diagnostic(diagnostic, color=color))


def render_summary(report: RunReport, *, color: bool = False) -> str:
    if report.success:
        if report.nb_files == 0:
            return ""
        message = f"All {report.nb_files} files were checked successfully. Nice job guy !"
        return click.style(message, fg="green", bold=True) if color else message

    message = (
        f"{report.nb_errors} error(s) in {report.nb_files_with_error} out of "
        f"{report.nb_files} file(s). Don't give up !"
    )
    return click.style(message, fg="red", bold=True) if color else message


def render_rule_list(rules: list[RuleInfo], active_ids: set[str]) -> str:
    lines = ["Available rules:"]
    for item in rules:
        status = "enabled" if item.rule_id in active_ids else "disabled"
        lines.append(f"- {item.rule_id} [{status}] ({item.category}) - {item.description}")
    return "\n".join(lines)


def render_json(report: RunReport) -> str:
    """Render stable JSON output for CI and automation."""
    return json.dumps(build_json_payload(report), sort_keys=True)


def build_json_payload(report: RunReport) -> dict[str, Any]:
    return {
        "files": [_serialize_file(source) for source in report.files],
        "load_failures": [
            {"path": failure.path, "reason": failure.reason} for failure in report.load_failures
        ],
        "summary": {
            "files": report.nb_files,
            "errors": report.nb_errors,
            "files_with_errors": report.nb_files_with_error,
            "success": report.success,
        },
        "meta": {
            "generated_at": datetime.now(tz=UTC)
            .replace(microsecond=0)
            .isoformat()
            .replace("+00:00", "Z"),
            "version": __version__,
        },
    }


def _serialize_file(source: SourceFile) -> dict[str, Any]:
    return {
        "path": source.path,
        "file_type": source.file_type.value,
        "passed": source.passed,
        "diagnostics": [_serialize_diagnostic(item) for item in source.diagnostics],
    }


def _serialize_diagnostic(diagnostic: Diagnostic) -> dict[str, Any]:
    return {
        "line": diagnostic.line_number,
        "rule_id": diagnostic.rule_id,
        "message": diagnostic.message,
        "text": diagnostic.line.text,
    }
