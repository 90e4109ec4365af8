"""Command line interface for the Sha1-Hulud scanner."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict

import click

from .core.config import ScanConfig, get_config
from .core.engine import ScanEngine
from .core.errors import ScanError
from .core.logger import setup_logging
from .core.models import Project
from .reporting.render import (
    render_json,
    render_project,
    render_project_list,
    render_summary,
)


def _emit_error(ctx: click.Context, message: str, json_mode: bool) -> None:
    """Report a fatal error and exit with status 1."""

    if json_mode:
        payload: Dict[str, Any] = {"status": "error", "message": message}
        click.echo(json.dumps(payload, indent=2, sort_keys=True))
    else:
        click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def _log_level(config: ScanConfig, verbose: bool, quiet: bool) -> str:
    # Quiet mode takes precedence over verbose output to avoid mixed messaging.
    if quiet:
        return "ERROR"
    if verbose:
        return "DEBUG"
    return config.log_level


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("path", required=False, type=click.Path(path_type=Path))
@click.option(
    "--signatures",
    type=click.Path(path_type=Path),
    default=None,
    help="Compromised package list (defaults to the bundled list)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML config file",
)
@click.option(
    "--allow",
    multiple=True,
    help="Extra allowlist entry for the sha1 marker pass (repeatable)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Parse manifests and lockfiles instead of matching text",
)
@click.option("--json", "json_mode", is_flag=True, help="Emit a JSON report")
@click.option("--quiet", "-q", is_flag=True, help="Only print the summary")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(
    ctx: click.Context,
    path: Path | None,
    signatures: Path | None,
    config_file: Path | None,
    allow: tuple[str, ...],
    strict: bool,
    json_mode: bool,
    quiet: bool,
    verbose: bool,
    no_color: bool,
) -> None:
    """Scan Node.js projects under PATH for Sha1-Hulud compromised packages.

    PATH may be a single project or a directory holding many projects. The
    exit status is 0 when every project is clean and 1 otherwise.
    """

    if path is None:
        click.echo(ctx.get_help())
        ctx.exit(1)

    overrides: Dict[str, Any] = {
        "signature_file": signatures,
        "strict": True if strict else None,
        "color": False if no_color else None,
        "output_format": "json" if json_mode else None,
    }

    try:
        config = get_config(config_file=config_file, overrides=overrides)
    except ScanError as exc:
        _emit_error(ctx, str(exc), json_mode)
        return

    json_mode = config.output_format == "json"
    color = config.color and not json_mode
    setup_logging(level=_log_level(config, verbose, quiet), use_color=color)

    try:
        engine = ScanEngine.from_config(
            replace(config, allowlist=config.allowlist + tuple(allow))
        )
        projects = engine.discover(path)
    except ScanError as exc:
        _emit_error(ctx, str(exc), json_mode)
        return

    show_projects = not json_mode and not quiet

    def on_project(project: Project) -> None:
        if show_projects:
            for line in render_project(project, color=color):
                click.echo(line)

    if show_projects:
        for line in render_project_list(projects):
            click.echo(line)

    report = engine.scan_projects(projects, on_project=on_project)

    if json_mode:
        click.echo(render_json(report, indent=None if quiet else 2))
    else:
        for line in render_summary(report, color=color):
            click.echo(line)

    ctx.exit(report.exit_code)


def main() -> None:
    """Entry point for console scripts."""

    cli(prog_name="hulud-scan")


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
