"""Rules about the physical shape of lines."""

from __future__ import annotations

from cbo.rules.base import Diagnostic, RuleKind, RuleSettings
from cbo.scanner import is_blank
from cbo.source import SourceFile


class LineTooLongRule:
    """Flags lines longer than the configured maximum length."""

    kind = RuleKind.LINE_TOO_LONG
    rule_id = kind.value

    def __init__(self, settings: RuleSettings | None = None) -> None:
        self.max_line_length = (settings or RuleSettings()).max_line_length

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        return [
            Diagnostic(source=source, line=line, kind=self.kind)
            for line in source.lines
            if line.length > self.max_line_length
        ]


class TrailingWhitespaceRule:
    """Flags lines ending with a space or a tab."""

    kind = RuleKind.TRAILING_WHITESPACE
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        return [
            Diagnostic(source=source, line=line, kind=self.kind)
            for line in source.lines
            if line.text and is_blank(line.text[-1])
        ]


class TabIndentRule:
    """Flags tabs in the indentation of a line."""

    kind = RuleKind.TAB_INDENT
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        return [
            Diagnostic(source=source, line=line, kind=self.kind)
            for line in source.lines
            if "\t" in line.text[: line.head]
        ]


class MultipleBlankLinesRule:
    """Flags an empty line directly following another empty line."""

    kind = RuleKind.MULTIPLE_BLANK_LINES
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        lines = source.lines
        return [
            Diagnostic(source=source, line=line, kind=self.kind)
            for line in lines[1:]
            if line.is_empty and lines[line.index - 1].is_empty
        ]
