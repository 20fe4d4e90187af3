"""
CLI commands for the build lifecycle.

    nativedeps build prebuild --target android
    nativedeps build postbuild --target android --batch
"""

from __future__ import annotations

import json
import os
import sys

import click

_TARGETS = click.Choice(["android", "ios", "other"], case_sensitive=False)


def _env_batch_default() -> bool:
    return os.environ.get("NATIVEDEPS_BATCH_MODE", "").lower() in ("1", "true", "yes")


@click.group()
def build() -> None:
    """Pre-build and post-build dependency reconciliation."""


def _print_report(result, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error or (result.report and result.report.status == "failed"):
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    click.secho(f"\n⚡ {report.phase} {report.target.value}", fg="cyan", bold=True)

    if report.skipped_reason:
        click.secho(f"   ⊘ {report.skipped_reason}", fg="yellow")

    if report.android is not None:
        for name in report.android.written:
            click.secho(f"   ✓ {name}", fg="green")
        for name, message in report.android.errors.items():
            click.secho(f"   ✗ {name}: {message}", fg="red")
        click.echo(f"   Resolver runs: {report.android.resolve_calls}")

    if report.ios is not None:
        for name in report.ios.activated:
            click.secho(f"   ✓ {name}", fg="green")
        for name in report.ios.excluded:
            click.echo(f"   – {name}")
        for name, message in report.ios.errors.items():
            click.secho(f"   ✗ {name}: {message}", fg="red")
        if report.ios.aborted:
            click.secho("   iOS dependency setup aborted", fg="red", bold=True)

    for name in report.cleaned_templates:
        click.echo(f"   🧹 {name}")

    click.echo()
    if report.status == "failed":
        sys.exit(1)


@build.command("prebuild")
@click.option("--target", "-t", type=_TARGETS, required=True, help="Build target platform.")
@click.option("--mock", is_flag=True, help="Don't run host hooks.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def prebuild(ctx: click.Context, target: str, mock: bool, as_json: bool) -> None:
    """Write manifests / activate templates before the build starts."""
    from nativedeps.core.use_cases.build import run_prebuild

    result = run_prebuild(target, config_path=ctx.obj.get("config_path"), mock_mode=mock)
    _print_report(result, as_json)


@build.command("postbuild")
@click.option("--target", "-t", type=_TARGETS, required=True, help="Build target platform.")
@click.option(
    "--batch/--interactive",
    default=_env_batch_default,
    help="Clean up (batch) or keep files for inspection (interactive). "
    "Defaults to NATIVEDEPS_BATCH_MODE.",
)
@click.option("--mock", is_flag=True, help="Don't run host hooks.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def postbuild(ctx: click.Context, target: str, batch: bool, mock: bool, as_json: bool) -> None:
    """Remove what the pre-build created (batch mode only)."""
    from nativedeps.core.use_cases.build import run_postbuild

    result = run_postbuild(
        target, batch_mode=batch, config_path=ctx.obj.get("config_path"), mock_mode=mock
    )
    _print_report(result, as_json)
