"""CLI entrypoint for cbo."""

from __future__ import annotations

import fnmatch
import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from cbo import __version__
from cbo.checker import LoadFailure, RunReport, check_paths
from cbo.config import CONFIG_FILENAMES, AppConfig, default_config_template, load_app_config
from cbo.output import (
    EchoSink,
    NullSink,
    OutputSink,
    render_json,
    render_rule_list,
    render_summary,
    report_file,
)
from cbo.rules import build_rules, list_rule_info
from cbo.rules.base import Rule
from cbo.source import SourceFile

CONTEXT_SETTINGS = {"help_option_names": ["-help", "--help"]}

app = typer.Typer(
    name="cbo",
    add_completion=False,
    context_settings=CONTEXT_SETTINGS,
    help="Check the coding style of C source (.c) and header (.h) files.",
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.command(context_settings=CONTEXT_SETTINGS)
def check_command(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Files to check. Only .c and .h files are rule-checked."),
    ] = None,
    list_file: Annotated[
        bool,
        typer.Option("-listFile", "--list-file", help="Only print the files with errors."),
    ] = False,
    format: Annotated[
        str | None, typer.Option(help="Output format: human|json.", show_default="human")
    ] = None,
    max_line_length: Annotated[
        int | None, typer.Option("--max-line-length", help="Maximum line length.", min=1)
    ] = None,
    enable: Annotated[list[str] | None, typer.Option(help="Only run this rule id.")] = None,
    disable: Annotated[list[str] | None, typer.Option(help="Skip this rule id.")] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
    list_rules: Annotated[
        bool, typer.Option("--list-rules", help="List the rules and exit.")
    ] = False,
    show_config: Annotated[
        bool, typer.Option("--show-config", help="Print the resolved configuration and exit.")
    ] = False,
    init_config: Annotated[
        bool, typer.Option("--init-config", help="Write a starter .cbo.toml and exit.")
    ] = False,
    color: Annotated[bool, typer.Option("--color/--no-color", help="Colorize output.")] = True,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log debug details.")] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version", help="Show version and exit.", callback=version_callback, is_eager=True
        ),
    ] = False,
) -> None:
    """Check files and report every style violation found."""
    _ = version
    _configure_logging(verbose)

    if init_config:
        _write_starter_config(Path.cwd() / CONFIG_FILENAMES[0])
        return

    app_config = _load_config_or_raise(config_file)
    output_format = (format or app_config.format).lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")
    if max_line_length is not None:
        app_config.max_line_length = max_line_length
    if enable:
        app_config.rule_enable = list(enable)
    if disable:
        app_config.rule_disable = [*app_config.rule_disable, *disable]
    rules = _build_configured_rules_or_raise(app_config)

    if list_rules:
        typer.echo(render_rule_list(list_rule_info(), {rule.rule_id for rule in rules}))
        return
    if show_config:
        payload = app_config.to_dict()
        payload["active_rule_ids"] = [rule.rule_id for rule in rules]
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    file_paths = list(paths or [])
    for path in file_paths:
        if not _is_readable(path):
            typer.echo(f"The path [{path}] is incorrect")
            raise typer.Exit(code=1)
    file_paths = _filter_paths(file_paths, includes=app_config.include, excludes=app_config.exclude)

    list_only = list_file or app_config.list_files
    use_color = color and output_format == "human"
    sink: OutputSink = NullSink() if list_only or output_format == "json" else EchoSink()
    report = _run_checks(
        file_paths,
        rules=rules,
        app_config=app_config,
        sink=sink,
        list_only=list_only and output_format == "human",
        color=use_color,
    )

    if output_format == "json":
        typer.echo(render_json(report))
    elif not list_only:
        summary = render_summary(report, color=use_color)
        if summary:
            typer.echo(summary)

    if not report.success:
        raise typer.Exit(code=1)


def main() -> None:
    """Console script entrypoint."""
    app()


def _run_checks(
    paths: list[Path],
    *,
    rules: list[Rule],
    app_config: AppConfig,
    sink: OutputSink,
    list_only: bool,
    color: bool,
) -> RunReport:
    def on_checked(source: SourceFile) -> None:
        report_file(source, sink, color=color)
        if list_only and not source.passed:
            typer.echo(source.path)

    def on_load_failure(failure: LoadFailure) -> None:
        typer.echo(f"error: {failure.reason}", err=True)

    return check_paths(
        paths,
        rules,
        max_line_buffer=app_config.max_line_buffer,
        on_checked=on_checked,
        on_load_failure=on_load_failure,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _is_readable(path: Path) -> bool:
    try:
        with path.open("rb"):
            return True
    except OSError:
        return False


def _filter_paths(paths: list[Path], *, includes: list[str], excludes: list[str]) -> list[Path]:
    filtered: list[Path] = []
    for path in paths:
        name = path.as_posix()
        if includes and not any(fnmatch.fnmatch(name, pattern) for pattern in includes):
            continue
        if excludes and any(fnmatch.fnmatch(name, pattern) for pattern in excludes):
            continue
        filtered.append(path)
    return filtered


def _load_config_or_raise(config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(Path.cwd(), config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_configured_rules_or_raise(app_config: AppConfig) -> list[Rule]:
    try:
        return build_rules(
            enabled_rule_ids=app_config.rule_enable,
            disabled_rule_ids=app_config.rule_disable,
            settings=app_config.rule_settings(),
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="rules") from exc


def _write_starter_config(out_path: Path) -> None:
    if out_path.exists():
        raise typer.BadParameter(f"Refusing to overwrite existing file: {out_path}.")
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")
