"""Spacing rules around punctuation and operators."""

from __future__ import annotations

import re
from collections.abc import Iterator

from cbo.rules.base import Diagnostic, RuleKind, RuleSettings
from cbo.scanner import code_end, is_blank, string_mask
from cbo.source import Line, SourceFile

_UNARY_PRECEDERS = set("=(,[{:?!&|<>+-*/%;^~")
_UNARY_KEYWORDS = ("return", "case", "sizeof")
_EXPONENT_RE = re.compile(r"(?<![\w.])\d+(?:\.\d*)?[eE]$")


def code_chars(line: Line) -> Iterator[tuple[int, str]]:
    """Yield ``(index, char)`` for code characters outside literals and comments.

    Comment lines and block-comment bodies yield nothing.
    """
    if line.is_comment or line.is_comment_body:
        return
    text = line.text
    mask = string_mask(text)
    for index in range(code_end(text)):
        if not mask[index]:
            yield index, text[index]


def _char_at(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


class SpaceAroundCommaRule:
    """A comma takes no space before it and a space after it."""

    kind = RuleKind.SPACE_AROUND_COMMA
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        for line in source.lines:
            text = line.text
            for index, char in code_chars(line):
                if char != ",":
                    continue
                after = _char_at(text, index + 1)
                if is_blank(_char_at(text, index - 1)) or (after and not is_blank(after)):
                    findings.append(Diagnostic(source=source, line=line, kind=self.kind))
        return findings


class SpaceAroundSemicolonRule:
    """A semicolon takes no space before it."""

    kind = RuleKind.SPACE_AROUND_SEMICOLON
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        for line in source.lines:
            for index, char in code_chars(line):
                if char == ";" and is_blank(_char_at(line.text, index - 1)):
                    findings.append(Diagnostic(source=source, line=line, kind=self.kind))
        return findings


class SpaceAroundOperatorRule:
    """Binary operators are surrounded by spaces."""

    kind = RuleKind.SPACE_AROUND_OPERATOR
    rule_id = kind.value

    def __init__(self, settings: RuleSettings | None = None) -> None:
        self.operators = frozenset((settings or RuleSettings()).operators)

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        for line in source.lines:
            if line.starts_with("#include"):
                continue
            code = line.text[: code_end(line.text)]
            for index, char in code_chars(line):
                if char in self.operators and _badly_spaced(code, index):
                    findings.append(Diagnostic(source=source, line=line, kind=self.kind))
        return findings


def _badly_spaced(code: str, index: int) -> bool:
    char = code[index]
    before = _char_at(code, index - 1)
    after = _char_at(code, index + 1)
    if before == char or after == char:
        return False
    if after == "=" or (char == "-" and after == ">"):
        return False
    if char in "+-" and (_is_unary(code, index) or _EXPONENT_RE.search(code[:index])):
        return False
    return not is_blank(before) or (after != "" and not is_blank(after))


def _is_unary(code: str, index: int) -> bool:
    prefix = code[:index].rstrip(" \t")
    if not prefix or prefix[-1] in _UNARY_PRECEDERS:
        return True
    for keyword in _UNARY_KEYWORDS:
        if not prefix.endswith(keyword):
            continue
        start = len(prefix) - len(keyword)
        if start == 0 or not (prefix[start - 1].isalnum() or prefix[start - 1] == "_"):
            return True
    return False


class CharBeforeDotRule:
    """A dot follows an identifier, a number, ``]`` or ``)``."""

    kind = RuleKind.CHAR_BEFORE_DOT
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        for line in source.lines:
            text = line.text
            head = line.head
            for index, char in code_chars(line):
                if char != "." or index == head:
                    continue
                before = _char_at(text, index - 1)
                if before == "." or _char_at(text, index + 1) == ".":
                    continue
                if before.isalnum() or before in ("]", ")"):
                    continue
                findings.append(Diagnostic(source=source, line=line, kind=self.kind))
        return findings


class SpaceBeforeOpeningBraceRule:
    """An opening brace is preceded by a space."""

    kind = RuleKind.SPACE_BEFORE_OPENING_BRACE
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        for line in source.lines:
            for index, char in code_chars(line):
                if char != "{" or index == 0:
                    continue
                if line.text[index - 1] not in (" ", "{"):
                    findings.append(Diagnostic(source=source, line=line, kind=self.kind))
        return findings
