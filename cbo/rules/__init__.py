"""Rules package."""

from collections.abc import Callable
from dataclasses import dataclass

from cbo.rules.arguments import MultipleArgsPerLineRule, UnalignedArgsRule
from cbo.rules.base import Diagnostic, Rule, RuleKind, RuleSettings
from cbo.rules.blank_lines import (
    MissingBlankAfterClosingBraceRule,
    MissingBlankAfterOpeningBraceRule,
    MissingBlankBeforeCaseRule,
    MissingBlankBeforeClosingBraceRule,
    MissingBlankBeforeCommentRule,
)
from cbo.rules.braces import BraceAtLineHeadRule, BraceAtLineTailRule
from cbo.rules.indentation import BadIndentRule
from cbo.rules.layout import (
    LineTooLongRule,
    MultipleBlankLinesRule,
    TabIndentRule,
    TrailingWhitespaceRule,
)
from cbo.rules.macros import MacroNameRule
from cbo.rules.spacing import (
    CharBeforeDotRule,
    SpaceAroundCommaRule,
    SpaceAroundOperatorRule,
    SpaceAroundSemicolonRule,
    SpaceBeforeOpeningBraceRule,
)

__all__ = [
    "Diagnostic",
    "Rule",
    "RuleInfo",
    "RuleKind",
    "RuleSettings",
    "build_rules",
    "default_rules",
    "list_rule_info",
]


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing and selection."""

    rule_id: str
    name: str
    description: str
    category: str


@dataclass(frozen=True, slots=True)
class _RuleSpec:
    rule_id: str
    factory: Callable[[RuleSettings], Rule]
    name: str
    description: str
    category: str


def default_rules() -> list[Rule]:
    """Return every rule with default settings, in check order."""
    return build_rules()


def build_rules(
    *,
    enabled_rule_ids: list[str] | None = None,
    disabled_rule_ids: list[str] | None = None,
    settings: RuleSettings | None = None,
) -> list[Rule]:
    """Build rule instances in check order, applying enable/disable filters.

    The order never depends on the order of the requested ids; the indentation
    rule always comes last.
    """
    effective_settings = settings or RuleSettings()
    specs = _ordered_rule_specs()
    registry = {spec.rule_id: spec for spec in specs}
    requested_ids = set(enabled_rule_ids or []) | set(disabled_rule_ids or [])

    unknown = [rule_id for rule_id in requested_ids if rule_id not in registry]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown rule ids: {joined}")

    enabled_set = set(enabled_rule_ids) if enabled_rule_ids is not None else set(registry)
    disabled_set = set(disabled_rule_ids or [])
    return [
        spec.factory(effective_settings)
        for spec in specs
        if spec.rule_id in enabled_set and spec.rule_id not in disabled_set
    ]


def list_rule_info() -> list[RuleInfo]:
    """Return metadata for all known rules, in check order."""
    return [
        RuleInfo(
            rule_id=spec.rule_id,
            name=spec.name,
            description=spec.description,
            category=spec.category,
        )
        for spec in _ordered_rule_specs()
    ]


def _ordered_rule_specs() -> list[_RuleSpec]:
    return [
        _spec(LineTooLongRule, category="layout", takes_settings=True),
        _spec(TrailingWhitespaceRule, category="layout"),
        _spec(TabIndentRule, category="layout"),
        _spec(MultipleBlankLinesRule, category="blank-lines"),
        _spec(MissingBlankBeforeClosingBraceRule, category="blank-lines"),
        _spec(MissingBlankAfterOpeningBraceRule, category="blank-lines"),
        _spec(MissingBlankAfterClosingBraceRule, category="blank-lines"),
        _spec(MissingBlankBeforeCommentRule, category="blank-lines"),
        _spec(MissingBlankBeforeCaseRule, category="blank-lines"),
        _spec(SpaceAroundCommaRule, category="spacing"),
        _spec(SpaceAroundSemicolonRule, category="spacing"),
        _spec(SpaceAroundOperatorRule, category="spacing", takes_settings=True),
        _spec(CharBeforeDotRule, category="spacing"),
        _spec(SpaceBeforeOpeningBraceRule, category="spacing"),
        _spec(BraceAtLineHeadRule, category="braces"),
        _spec(BraceAtLineTailRule, category="braces"),
        _spec(MultipleArgsPerLineRule, category="arguments"),
        _spec(UnalignedArgsRule, category="arguments"),
        _spec(MacroNameRule, category="preprocessor"),
        _spec(BadIndentRule, category="indentation", takes_settings=True),
    ]


def _spec(rule_cls: type, *, category: str, takes_settings: bool = False) -> _RuleSpec:
    if takes_settings:
        factory: Callable[[RuleSettings], Rule] = rule_cls
    else:
        factory = lambda _settings: rule_cls()  # noqa: E731
    return _RuleSpec(
        rule_id=rule_cls.kind.value,
        factory=factory,
        name=rule_cls.__name__,
        description=_summary(rule_cls.__doc__),
        category=category,
    )


def _summary(doc: str | None) -> str:
    lines = (doc or "").strip().splitlines()
    return lines[0] if lines else ""
