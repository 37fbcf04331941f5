"""Argument list rules.

Multi-line function declarations put one argument per line and align the
argument names on a common column::

    bool Check(
              Item* const that,
      const char* const path) {
"""

from __future__ import annotations

from cbo.rules.base import Diagnostic, RuleKind
from cbo.scanner import BLANKS, classify, code_end, last_index_outside_strings, string_mask
from cbo.source import Line, SourceFile


def is_function_header(source: SourceFile, index: int) -> bool:
    """A top-level line opening an argument list it does not close."""
    line = source.lines[index]
    return (
        line.head == 0
        and line.last_char == "("
        and not line.is_comment
        and not source.is_preprocessor(index)
    )


def argument_span(source: SourceFile, index: int) -> list[tuple[Line, int]]:
    """Continuation lines of the argument list opened by the header at ``index``.

    Each line is paired with the end of its part inside the parenthesis: the
    index of the closing ``)`` on the last line, the line length elsewhere. An
    argument list never closed runs to the end of the file.
    """
    depth = _paren_balance(source.lines[index].text)
    span: list[tuple[Line, int]] = []
    if depth <= 0:
        return span

    for line in source.lines[index + 1 :]:
        end = len(line.text)
        for position, char, in_string in classify(line.text):
            if in_string:
                continue
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    end = position
                    break
        span.append((line, end))
        if depth == 0:
            break
    return span


def _paren_balance(text: str) -> int:
    balance = 0
    for _, char, in_string in classify(text):
        if in_string:
            continue
        if char == "(":
            balance += 1
        elif char == ")":
            balance -= 1
    return balance


class MultipleArgsPerLineRule:
    """One argument per line: flags commas that are not at the end of the line.

    Commas inside brackets, braces or the argument list of an all-capital macro
    are allowed.
    """

    kind = RuleKind.MULTIPLE_ARGS_PER_LINE
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        for line in source.lines:
            if line.is_comment or line.is_comment_body or source.is_preprocessor(line.index):
                continue
            for _ in _inner_commas(line.text):
                findings.append(Diagnostic(source=source, line=line, kind=self.kind))
        return findings


def _inner_commas(text: str) -> list[int]:
    end = code_end(text)
    tail = len(text[:end].rstrip(BLANKS)) - 1
    mask = string_mask(text)
    macro_groups: list[bool] = []
    brackets = 0
    braces = 0
    commas: list[int] = []
    for index in range(end):
        if mask[index]:
            continue
        char = text[index]
        if char == "(":
            macro_groups.append(_is_macro_call(text, index))
        elif char == ")":
            if macro_groups:
                macro_groups.pop()
        elif char == "[":
            brackets += 1
        elif char == "]":
            brackets = max(0, brackets - 1)
        elif char == "{":
            braces += 1
        elif char == "}":
            braces = max(0, braces - 1)
        elif char == ",":
            if brackets or braces or any(macro_groups) or index == tail:
                continue
            commas.append(index)
    return commas


def _is_macro_call(text: str, paren_index: int) -> bool:
    start = paren_index
    while start > 0 and (text[start - 1].isalnum() or text[start - 1] == "_"):
        start -= 1
    name = text[start:paren_index]
    return any(char.isupper() for char in name) and not any(char.islower() for char in name)


class UnalignedArgsRule:
    """Argument names of a multi-line declaration share the same column."""

    kind = RuleKind.UNALIGNED_ARGS
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        for index in range(len(source.lines)):
            if not is_function_header(source, index):
                continue
            column: int | None = None
            for line, end in argument_span(source, index):
                if line.is_empty or line.is_comment:
                    continue
                segment = line.text[:end].rstrip(BLANKS)
                position = last_index_outside_strings(segment, " ")
                if column is None:
                    column = position
                elif position != column:
                    findings.append(Diagnostic(source=source, line=line, kind=self.kind))
        return findings
