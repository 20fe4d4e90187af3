"""
CLI commands for iOS support.

    nativedeps ios enable
    nativedeps ios disable
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def ios() -> None:
    """Switch iOS support (define symbol + base dependency template)."""


def _apply(ctx: click.Context, enabled: bool, mock: bool, as_json: bool) -> None:
    from nativedeps.core.use_cases.ios_support import set_ios_support

    update = set_ios_support(enabled, config_path=ctx.obj.get("config_path"), mock_mode=mock)

    if as_json:
        click.echo(json.dumps(update.to_dict(), indent=2))
        sys.exit(1 if update.error else 0)

    if update.error:
        click.secho(f"❌ {update.error}", fg="red")
        sys.exit(1)

    support = update.support
    label = "enabled" if enabled else "disabled"
    click.secho(f"✅ iOS support {label}", fg="green", bold=True)
    click.echo(f"   Define symbols: {update.symbols or '(none)'}")
    if support and support.error:
        click.secho(f"   ⚠️  {support.error}", fg="yellow")


@ios.command("enable")
@click.option("--mock", is_flag=True, help="Don't run host hooks.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def enable(ctx: click.Context, mock: bool, as_json: bool) -> None:
    """Turn iOS support on."""
    _apply(ctx, True, mock, as_json)


@ios.command("disable")
@click.option("--mock", is_flag=True, help="Don't run host hooks.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def disable(ctx: click.Context, mock: bool, as_json: bool) -> None:
    """Turn iOS support off."""
    _apply(ctx, False, mock, as_json)
