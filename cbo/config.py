"""Configuration loading for cbo."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cbo.indent import DEFAULT_INDENT_WIDTH
from cbo.rules.base import DEFAULT_MAX_LINE_LENGTH, DEFAULT_OPERATORS, RuleSettings
from cbo.source import DEFAULT_MAX_LINE_BUFFER

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".cbo.toml", "cbo.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEY = "cbo"


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    list_files: bool = False
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    indent_width: int = DEFAULT_INDENT_WIDTH
    max_line_buffer: int = DEFAULT_MAX_LINE_BUFFER
    operators: list[str] = field(default_factory=lambda: list(DEFAULT_OPERATORS))
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    rule_enable: list[str] | None = None
    rule_disable: list[str] = field(default_factory=list)
    source: str | None = None

    def rule_settings(self) -> RuleSettings:
        return RuleSettings(
            max_line_length=self.max_line_length,
            indent_width=self.indent_width,
            operators=tuple(self.operators),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "list_files": self.list_files,
            "max_line_length": self.max_line_length,
            "indent_width": self.indent_width,
            "max_line_buffer": self.max_line_buffer,
            "operators": list(self.operators),
            "include": list(self.include),
            "exclude": list(self.exclude),
            "rules": {
                "enable": list(self.rule_enable) if self.rule_enable is not None else None,
                "disable": list(self.rule_disable),
            },
            "source": self.source,
        }


def load_app_config(root: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from an explicit path or from files in ``root``, with precedence."""
    root = root.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (root / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        return _from_mapping(_read_config_table(resolved), source=str(resolved))

    for filename in (*CONFIG_FILENAMES, PYPROJECT_FILENAME):
        candidate = root / filename
        if not candidate.exists():
            continue
        mapping = _read_config_table(candidate)
        # A pyproject without a [tool.cbo] table does not count as configuration.
        if mapping or filename != PYPROJECT_FILENAME:
            return _from_mapping(mapping, source=str(candidate))

    logger.debug("No configuration found in %s, using defaults", root)
    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            'format = "human"',
            "list_files = false",
            f"max_line_length = {DEFAULT_MAX_LINE_LENGTH}",
            f"indent_width = {DEFAULT_INDENT_WIDTH}",
            f"max_line_buffer = {DEFAULT_MAX_LINE_BUFFER}",
            'operators = ["+", "-", "/", "|"]',
            'include = ["src/**"]',
            "exclude = []",
            "",
            "[rules]",
            '# enable = ["line-too-long", "trailing-whitespace"]',
            "disable = []",
            "",
        ]
    )


def _read_config_table(path: Path) -> dict[str, Any]:
    """The whole file for a cbo config file, the ``[tool.cbo]`` table for pyproject."""
    try:
        loaded = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if path.name != PYPROJECT_FILENAME:
        return loaded
    tool = loaded.get("tool")
    section = tool.get(PYPROJECT_TOOL_KEY) if isinstance(tool, dict) else None
    return section if isinstance(section, dict) else {}


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")
    logger.debug("Using configuration from %s", source)
    return AppConfig(
        format=_as_choice(mapping.get("format", "human"), {"human", "json"}, "format"),
        list_files=_as_bool(mapping.get("list_files", False), "list_files"),
        max_line_length=_as_positive_int(
            mapping.get("max_line_length", DEFAULT_MAX_LINE_LENGTH), "max_line_length"
        ),
        indent_width=_as_positive_int(
            mapping.get("indent_width", DEFAULT_INDENT_WIDTH), "indent_width"
        ),
        max_line_buffer=_as_positive_int(
            mapping.get("max_line_buffer", DEFAULT_MAX_LINE_BUFFER), "max_line_buffer"
        ),
        operators=_as_operator_list(mapping.get("operators")),
        include=_as_str_list(mapping.get("include")),
        exclude=_as_str_list(mapping.get("exclude")),
        rule_enable=_as_str_list_or_none(rules_mapping.get("enable")),
        rule_disable=_as_str_list(rules_mapping.get("disable")),
        source=source,
    )


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("Expected a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError("Expected a list of strings")
        items.append(item)
    return items


def _as_str_list_or_none(value: Any) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value)


def _as_operator_list(value: Any) -> list[str]:
    if value is None:
        return list(DEFAULT_OPERATORS)
    operators = _as_str_list(value)
    for operator in operators:
        if len(operator) != 1:
            raise ValueError(f"operators must be single characters, got {operator!r}")
    return operators


def _as_choice(raw: Any, allowed: set[str], field_name: str) -> str:
    value = str(raw).lower()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value


def _as_positive_int(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{field_name} must be an integer")
    if raw <= 0:
        raise ValueError(f"{field_name} must be > 0")
    return raw


def _as_bool(raw: Any, field_name: str) -> bool:
    if not isinstance(raw, bool):
        raise ValueError(f"{field_name} must be a boolean")
    return raw
