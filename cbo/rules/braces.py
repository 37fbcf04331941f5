"""Brace placement rules."""

from __future__ import annotations

from cbo.rules.base import Diagnostic, RuleKind
from cbo.scanner import code_end, last_index_outside_strings, match_backward, match_forward
from cbo.source import SourceFile


class BraceAtLineHeadRule:
    """An opening brace left unclosed on its line belongs at the end of the previous line."""

    kind = RuleKind.BRACE_AT_LINE_HEAD
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        for line in source.lines:
            head = line.head
            if line.head_char == "{" and match_forward(line.text, head) == head:
                findings.append(Diagnostic(source=source, line=line, kind=self.kind))
        return findings


class BraceAtLineTailRule:
    """A closing brace left unopened on its line belongs on a line of its own."""

    kind = RuleKind.BRACE_AT_LINE_TAIL
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        for line in source.lines:
            if line.is_comment or line.is_comment_body:
                continue
            code = line.text[: code_end(line.text)]
            index = last_index_outside_strings(code, "}")
            if index == len(code) or index == line.head:
                continue
            if match_backward(code, index) == index:
                findings.append(Diagnostic(source=source, line=line, kind=self.kind))
        return findings
