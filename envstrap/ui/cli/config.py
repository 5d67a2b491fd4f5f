"""
CLI commands for the envstrap settings file.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
import yaml


def _config_path(ctx: click.Context) -> Path | None:
    config_path: Path | None = ctx.obj.get("config_path")
    if config_path is None:
        from envstrap.core.config.loader import find_config_file

        config_path = find_config_file()
    return config_path


@click.group()
def config() -> None:
    """Settings file commands."""


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Print the resolved settings (file values over defaults)."""
    from envstrap.core.config.loader import ConfigError, load_settings

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    data = settings.model_dump(mode="json")
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    source = _config_path(ctx)
    click.secho(f"# {source if source else 'defaults (no settings file)'}", fg="cyan")
    click.echo(yaml.safe_dump({"envstrap": data}, sort_keys=False, default_flow_style=False))


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate the settings file."""
    from envstrap.core.config.loader import ConfigError, load_settings

    source = _config_path(ctx)
    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"valid": False, "path": str(source), "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({
            "valid": True,
            "path": str(source) if source else None,
            "skip": settings.skip,
            "extra_entries": len(settings.extra_entries),
        }, indent=2))
        return

    if source is None:
        click.secho("✅ No settings file — defaults are valid", fg="green")
        return
    click.secho(f"✅ {source} is valid", fg="green", bold=True)
    if settings.skip:
        click.echo(f"   Skipping: {', '.join(settings.skip)}")
    if settings.extra_entries:
        click.echo(f"   Extra entries: {len(settings.extra_entries)}")
