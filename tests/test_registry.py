"""Tests for the rule registry."""

from __future__ import annotations

import pytest

from cbo.rules import build_rules, default_rules, list_rule_info
from cbo.rules.base import RuleKind, RuleSettings
from cbo.rules.layout import LineTooLongRule


def test_every_rule_kind_is_registered_once() -> None:
    ids = [item.rule_id for item in list_rule_info()]
    assert sorted(ids) == sorted(kind.value for kind in RuleKind)
    assert len(ids) == len(set(ids))


def test_indentation_rule_runs_last() -> None:
    assert default_rules()[-1].kind is RuleKind.BAD_INDENT


def test_enable_keeps_check_order() -> None:
    rules = build_rules(enabled_rule_ids=["bad-indent", "line-too-long"])
    assert [rule.rule_id for rule in rules] == ["line-too-long", "bad-indent"]


def test_disable_removes_rules() -> None:
    rules = build_rules(disabled_rule_ids=["tab-indent", "bad-indent"])
    ids = {rule.rule_id for rule in rules}
    assert "tab-indent" not in ids
    assert "bad-indent" not in ids
    assert len(rules) == len(RuleKind) - 2


def test_unknown_rule_ids_raise() -> None:
    with pytest.raises(ValueError, match="Unknown rule ids: nope"):
        build_rules(enabled_rule_ids=["nope"])


def test_settings_reach_the_rules() -> None:
    rules = build_rules(
        enabled_rule_ids=["line-too-long"], settings=RuleSettings(max_line_length=120)
    )
    assert isinstance(rules[0], LineTooLongRule)
    assert rules[0].max_line_length == 120


def test_rule_info_has_descriptions() -> None:
    info = {item.rule_id: item for item in list_rule_info()}
    assert info["line-too-long"].category == "layout"
    assert info["line-too-long"].description == "Flags lines longer than the configured maximum length."
    assert all(item.description for item in info.values())
