"""
nativedeps — CLI entrypoint.

Usage:
    nativedeps --help
    nativedeps status
    nativedeps build prebuild --target android
    nativedeps build postbuild --target ios --batch
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from nativedeps import __version__
from nativedeps.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="nativedeps")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to nativedeps.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """nativedeps — native dependency manifests for mobile builds."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("NATIVEDEPS_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("NATIVEDEPS_LOG_FILE"),
        log_file_level=os.environ.get("NATIVEDEPS_LOG_FILE_LEVEL"),
    )


def _mark(enabled: bool) -> str:
    return click.style("on ", fg="green") if enabled else click.style("off", fg="white")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show module enablement and remembered build state."""
    from nativedeps.core.use_cases.status import get_status

    result = get_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.project is not None
    click.secho(f"\n📋 {result.project.name}", fg="cyan", bold=True)
    click.echo()
    click.secho(f"   Modules: {len(result.modules)}", fg="white", bold=True)
    click.echo("     android  ios")
    for mod in result.modules:
        templates = f"  → {', '.join(mod.ios_templates)}" if mod.ios_templates else ""
        click.echo(f"     {_mark(mod.android)}      {_mark(mod.ios)}  {mod.name}{templates}")

    state = result.state
    if state is not None:
        if state.define_symbols:
            click.echo()
            click.secho("   Define symbols:", fg="white", bold=True)
            for group, symbols in state.define_symbols.items():
                click.echo(f"     {group}: {symbols or '(none)'}")
        if state.active_templates:
            click.echo()
            click.secho("   Active iOS templates:", fg="white", bold=True)
            for name in state.active_templates:
                click.echo(f"     • {name}")
        if state.last_build.phase:
            record = state.last_build
            color = {"ok": "green", "partial": "yellow", "failed": "red"}.get(record.status, "white")
            click.echo()
            click.echo(f"   Last build: {record.phase} {record.target} — ", nl=False)
            click.secho(record.status or "?", fg=color)

    click.echo()


@cli.group()
def config() -> None:
    """Project configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate nativedeps.yml."""
    from nativedeps.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.project is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Project: {result.project.name}")
        click.echo(f"   Declared modules: {len(result.project.modules)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    click.echo()
    if not result.valid:
        sys.exit(1)


@cli.command()
@click.option("--group", default="ios", show_default=True, help="Platform symbol group.")
@click.pass_context
def symbols(ctx: click.Context, group: str) -> None:
    """Print the define-symbol list for a platform group."""
    from nativedeps.core.config.loader import find_project_file, project_root
    from nativedeps.core.persistence.state_file import default_state_path, load_state

    config_path: Path | None = ctx.obj.get("config_path") or find_project_file()
    root = project_root(config_path) if config_path else Path.cwd()
    state = load_state(default_state_path(root))
    click.echo(state.define_symbols.get(group, ""))


# ── Register sub-command groups from nativedeps/ui/cli/ ──────────

from nativedeps.ui.cli.build import build  # noqa: E402
from nativedeps.ui.cli.ios import ios  # noqa: E402

cli.add_command(build)
cli.add_command(ios)


if __name__ == "__main__":
    cli()
