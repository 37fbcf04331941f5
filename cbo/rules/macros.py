"""Preprocessor naming rules."""

from __future__ import annotations

import re

from cbo.rules.base import Diagnostic, RuleKind
from cbo.source import SourceFile

_DEFINE = "#define"
_NAME_END_RE = re.compile(r"[ \t(]")


class MacroNameRule:
    """Macro names are written in capitals."""

    kind = RuleKind.MACRO_NAME_NOT_CAPITALIZED
    rule_id = kind.value

    def evaluate(self, source: SourceFile) -> list[Diagnostic]:
        findings: list[Diagnostic] = []
        for line in source.lines:
            if not line.starts_with(_DEFINE):
                continue
            rest = line.text[line.head + len(_DEFINE) :]
            if not rest or rest[0] not in " \t":
                continue
            name = _NAME_END_RE.split(rest.lstrip(" \t"), maxsplit=1)[0]
            if any(char.islower() for char in name):
                findings.append(Diagnostic(source=source, line=line, kind=self.kind))
        return findings
