"""Check orchestration and run-level aggregation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from cbo.rules import default_rules
from cbo.rules.base import Rule, RuleKind
from cbo.source import DEFAULT_MAX_LINE_BUFFER, LoadError, SourceFile, load_source_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadFailure:
    """A file that could not be loaded and was not checked."""

    path: str
    reason: str


@dataclass(slots=True)
class RunReport:
    """Results of checking several files, in the order they were supplied."""

    files: list[SourceFile] = field(default_factory=list)
    load_failures: list[LoadFailure] = field(default_factory=list)

    def record(self, source: SourceFile) -> None:
        self.files.append(source)

    def record_failure(self, path: str, reason: str) -> LoadFailure:
        failure = LoadFailure(path=path, reason=reason)
        self.load_failures.append(failure)
        return failure

    @property
    def nb_files(self) -> int:
        return len(self.files) + len(self.load_failures)

    @property
    def nb_errors(self) -> int:
        return sum(len(source.diagnostics) for source in self.files) + len(self.load_failures)

    @property
    def failed_paths(self) -> list[str]:
        return [source.path for source in self.files if not source.passed]

    @property
    def nb_files_with_error(self) -> int:
        return len(self.failed_paths) + len(self.load_failures)

    @property
    def success(self) -> bool:
        return self.nb_files_with_error == 0


def check_source(source: SourceFile, rules: Sequence[Rule] | None = None) -> bool:
    """Run the rules on one file and return whether it passed.

    Previous diagnostics are discarded first. The indentation rule only runs
    once every other rule passed.
    """
    active_rules = rules if rules is not None else default_rules()
    source.clear_diagnostics()
    if not source.is_checkable:
        logger.debug("Skipping %s: unknown file type", source.path)
        return True

    deferred = [rule for rule in active_rules if rule.kind is RuleKind.BAD_INDENT]
    for rule in active_rules:
        if rule.kind is not RuleKind.BAD_INDENT:
            _apply(source, rule)
    if source.passed:
        for rule in deferred:
            _apply(source, rule)
    return source.passed


def check_paths(
    paths: Iterable[Path | str],
    rules: Sequence[Rule] | None = None,
    *,
    max_line_buffer: int = DEFAULT_MAX_LINE_BUFFER,
    on_checked: Callable[[SourceFile], None] | None = None,
    on_load_failure: Callable[[LoadFailure], None] | None = None,
) -> RunReport:
    """Load and check files one at a time.

    ``on_checked`` and ``on_load_failure`` are called as each file is done, in
    the supplied order, so callers can report progressively.
    """
    active_rules = rules if rules is not None else default_rules()
    report = RunReport()
    for path in paths:
        try:
            source = load_source_file(path, max_line_buffer=max_line_buffer)
        except LoadError as exc:
            logger.debug("Load failure for %s: %s", path, exc)
            failure = report.record_failure(str(path), str(exc))
            if on_load_failure is not None:
                on_load_failure(failure)
            continue
        check_source(source, active_rules)
        report.record(source)
        if on_checked is not None:
            on_checked(source)
    return report


def _apply(source: SourceFile, rule: Rule) -> None:
    diagnostics = rule.evaluate(source)
    for diagnostic in diagnostics:
        source.add_diagnostic(diagnostic)
    if diagnostics:
        logger.debug("%s: %d x %s", source.path, len(diagnostics), rule.rule_id)
