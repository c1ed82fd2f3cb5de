"""CLI entrypoint for deluge-lint."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from deluge_lint import __version__
from deluge_lint.config import LintConfig, default_config_template, load_lint_config
from deluge_lint.output import render_human, render_json
from deluge_lint.rules import list_rule_info
from deluge_lint.runner import has_errors, lint_paths

app = typer.Typer(
    name="deluge-lint",
    no_args_is_help=True,
    help="Lint Zoho Deluge scripts for style and reliability problems.",
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
) -> None:
    """Root command callback."""
    _ = version
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


@app.command("check")
def check_command(
    paths: Annotated[list[Path], typer.Argument(help="Deluge files or directories to lint.")],
    repo: Annotated[Path, typer.Option(help="Project root for config and excludes.")] = Path("."),
    format: Annotated[
        str | None, typer.Option(help="Output format: human|json.", show_default="human")
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to a config file."),
    ] = None,
) -> None:
    """Lint files and exit nonzero when any error is reported."""
    lint_config = _load_config_or_raise(repo, config_file)
    output_format = (format or lint_config.format).lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    reports = lint_paths(paths, lint_config, root=repo)
    if output_format == "json":
        typer.echo(render_json(reports, config_source=lint_config.source))
    else:
        typer.echo(render_human(reports))

    if has_errors(reports):
        raise typer.Exit(code=1)


@app.command("rules")
def rules_command(
    repo: Annotated[Path, typer.Option(help="Project root.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to a config file."),
    ] = None,
) -> None:
    """List available rules and their configured levels."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    lint_config = _load_config_or_raise(repo, config_file)
    rule_info = list_rule_info(lint_config.rules)

    if output_format == "json":
        payload = {
            "rules": [
                {
                    "rule_id": item.rule_id,
                    "name": item.name,
                    "description": item.description,
                    "default": item.default,
                    "level": item.level,
                    "implemented": item.implemented,
                }
                for item in rule_info
            ],
            "meta": {"config_source": lint_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available rules:"]
    for item in rule_info:
        status = str(item.level) if item.implemented else "not implemented"
        lines.append(f"- {item.rule_id} [{status}] - {item.description}")
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    repo: Annotated[Path, typer.Option(help="Project root.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to a config file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    lint_config = _load_config_or_raise(repo, config_file)
    payload = lint_config.to_dict()

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- exclude: {payload['exclude']}",
        f"- env: {payload['env']}",
    ]
    for rule_id, level in payload["rules"].items():
        lines.append(f"- rules.{rule_id}: {level}")
    typer.echo("\n".join(lines))


@app.command("init")
def init_command(
    out: Annotated[Path, typer.Option(help="Output path for the starter config.")] = Path(
        ".delugerc"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter .delugerc file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        typer.echo(f"{out_path} already exists. Use --force to overwrite.", err=True)
        raise typer.Exit(code=1)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


def main() -> None:
    """Console script entrypoint."""
    app()


def _load_config_or_raise(repo: Path, config_file: Path | None = None) -> LintConfig:
    try:
        return load_lint_config(repo, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc
