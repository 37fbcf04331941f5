"""Rules requiring blank lines around braces, comments and case labels."""

from __future__ import annotations

from cbo.rules.base import Diagnostic, RuleKind
from cbo.source import Line, SourceFile


def _continues(line: Line) -> bool:
    return line.text.endswith("\\")


class MissingBlankBeforeClosingBraceRule:
    """A closing brace must be separated from the previous statement by a blank line."""

    kind = RuleKind.MISSING_BLANK_BEFORE_CLOSING_BRACE
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        lines = source.lines
        for line in lines:
            if line.head_char != "}":
                continue
            # Comments between the statement and the brace do not count.
            previous = line.index - 1
            while previous >= 0 and lines[previous].is_comment:
                previous -= 1
            if previous < 0:
                continue
            candidate = lines[previous]
            if candidate.is_empty or _continues(candidate):
                continue
            findings.append(
                Diagnostic(source=source, line=line, kind=self.kind, related=candidate)
            )
        return findings


class _AfterBraceRule:
    brace = ""
    kind: RuleKind

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        lines = source.lines
        for line in lines[1:]:
            previous = lines[line.index - 1]
            if previous.is_comment or previous.last_char != self.brace:
                continue
            if not line.is_empty:
                findings.append(
                    Diagnostic(source=source, line=line, kind=self.kind, related=previous)
                )
        return findings


class MissingBlankAfterOpeningBraceRule(_AfterBraceRule):
    """A line ending with an opening brace must be followed by a blank line."""

    brace = "{"
    kind = RuleKind.MISSING_BLANK_AFTER_OPENING_BRACE
    rule_id = kind.value


class MissingBlankAfterClosingBraceRule(_AfterBraceRule):
    """A line ending with a closing brace must be followed by a blank line."""

    brace = "}"
    kind = RuleKind.MISSING_BLANK_AFTER_CLOSING_BRACE
    rule_id = kind.value


class MissingBlankBeforeCommentRule:
    """A comment must not directly follow a line of code."""

    kind = RuleKind.MISSING_BLANK_BEFORE_COMMENT
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        lines = source.lines
        for line in lines[1:]:
            if not line.is_comment:
                continue
            previous = lines[line.index - 1]
            if previous.is_empty or previous.is_comment or _continues(previous):
                continue
            findings.append(Diagnostic(source=source, line=line, kind=self.kind, related=previous))
        return findings


class MissingBlankBeforeCaseRule:
    """A case or default label must follow a blank, comment, directive or another label."""

    kind = RuleKind.MISSING_BLANK_BEFORE_CASE
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        lines = source.lines
        for line in lines[1:]:
            if not line.is_case_label:
                continue
            previous = lines[line.index - 1]
            if (
                previous.is_empty
                or previous.is_comment
                or previous.is_case_label
                or source.is_preprocessor(previous.index)
            ):
                continue
            findings.append(Diagnostic(source=source, line=line, kind=self.kind, related=previous))
        return findings
