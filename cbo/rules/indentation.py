"""Indentation rule driven by the expected indents of the file."""

from __future__ import annotations

from cbo.rules.arguments import argument_span, is_function_header
from cbo.rules.base import Diagnostic, RuleKind, RuleSettings
from cbo.source import SourceFile


class BadIndentRule:
    """Compares each line's head position with its expected indent.

    Comments align with the line that follows them. Argument lines of a
    multi-line function declaration are left to the alignment rule.
    """

    kind = RuleKind.BAD_INDENT
    rule_id = kind.value

    def __init__(self, settings: RuleSettings | None = None) -> None:
        self.indent_width = (settings or RuleSettings()).indent_width

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        lines = source.lines
        index = 0
        while index < len(lines):
            line = lines[index]
            if not line.is_empty and not source.is_preprocessor(index):
                if line.head != self._wanted_head(source, index):
                    findings.append(Diagnostic(source=source, line=line, kind=self.kind))
            if is_function_header(source, index):
                index += len(argument_span(source, index)) + 1
            else:
                index += 1
        return findings

    def _wanted_head(self, source: SourceFile, index: int) -> int:
        lines = source.lines
        if lines[index].is_comment and index + 1 < len(lines):
            following = lines[index + 1]
            if not following.is_empty:
                return following.head
        return source.expected_indent(index, self.indent_width)
