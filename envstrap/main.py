"""
envstrap — CLI entrypoint.

Usage:
    envstrap --help
    envstrap run --dry-run
    envstrap status
    envstrap config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from envstrap import __version__
from envstrap.core.observability.logging_config import (
    FILE_ENV_VAR,
    FILE_LEVEL_ENV_VAR,
    resolve_level,
    setup_logging,
)

if TYPE_CHECKING:
    from envstrap.core.engine.orchestrator import ComponentResult


@click.group()
@click.version_option(version=__version__, prog_name="envstrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to the envstrap settings YAML (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """envstrap — idempotent zsh environment bootstrap."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(FILE_ENV_VAR),
        log_file_level=os.environ.get(FILE_LEVEL_ENV_VAR),
    )


# ── run ─────────────────────────────────────────────────────────

_STATUS_ICONS = {
    "ok": ("✅", "green"),
    "skipped": ("⏭️ ", "white"),
    "failed": ("⚠️ ", "yellow"),
}


def _echo_component(result: ComponentResult, verbose: bool) -> None:
    icon, color = _STATUS_ICONS.get(result.status, ("❔", "white"))
    receipt = result.receipt

    if result.status == "skipped":
        click.secho(f"   {icon} {result.name} — {result.skip_reason}", fg=color)
        return

    if result.status == "failed":
        click.secho(f"   {icon} {result.name} — {receipt.error}", fg=color)
    elif result.was_present:
        click.secho(f"   {icon} {result.name} already installed", fg=color)
    elif receipt is not None and receipt.skipped:
        click.secho(f"   📦 {result.name} would be installed", fg="cyan")
        for command in receipt.metadata.get("commands", []):
            click.echo(f"      $ {command}")
    else:
        timing = f" ({receipt.duration_ms}ms)" if receipt and receipt.duration_ms else ""
        click.secho(f"   📦 {result.name} installed{timing}", fg="green")
        if verbose and receipt and receipt.output:
            for line in receipt.output.splitlines()[-10:]:
                click.echo(f"      │ {line}")

    for entry in result.changed_entries:
        prefix = "would be " if entry.dry_run else ""
        click.echo(f"      ✎ {entry.path}: {prefix}{entry.action} {entry.line}")
    for described in result.config_skipped:
        click.secho(f"      ✗ not configured: {described}", fg="yellow")


def _echo_next_steps() -> None:
    click.echo()
    click.secho("👉 Next steps:", bold=True)
    click.echo("  1) Restart your terminal OR run: exec zsh")
    click.echo("  2) Set your terminal font to: FiraCode Nerd Font")
    click.echo("  3) (Optional) Configure Starship: ~/.config/starship.toml")
    click.echo()
    click.echo("Notes:")
    click.echo("  - Homebrew is installed/used on macOS only.")
    click.echo("  - Starship is installed to ~/.local/bin to avoid /usr/local/bin issues.")
    click.echo()


@cli.command()
@click.option("--dry-run", is_flag=True, help="Show what would change; touch nothing.")
@click.option("--mock", is_flag=True, help="Use the mock installer (no real commands).")
@click.option("--only", "only", multiple=True, help="Run only this component (repeatable).")
@click.option("--skip", "skip", multiple=True, help="Skip this component (repeatable).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def run(
    ctx: click.Context,
    dry_run: bool,
    mock: bool,
    only: tuple[str, ...],
    skip: tuple[str, ...],
    as_json: bool,
) -> None:
    """Install and configure every component.

    Examples:

        envstrap run

        envstrap run --dry-run

        envstrap run --only oh-my-zsh --only starship
    """
    from envstrap.core.use_cases.bootstrap import run_bootstrap

    installer = None
    if mock:
        from envstrap.adapters.mock import MockInstaller

        installer = MockInstaller()

    quiet = ctx.obj.get("quiet", False)
    if not as_json and not quiet:
        mode_label = "[dry-run] " if dry_run else "[mock] " if mock else ""
        click.secho(f"\n🚀 {mode_label}Setting up Zsh environment...", fg="cyan", bold=True)
        click.echo()

    result = run_bootstrap(
        config_path=ctx.obj.get("config_path"),
        dry_run=dry_run,
        only=list(only) or None,
        skip=list(skip),
        installer=installer,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.report:
        for component_result in result.report.results:
            _echo_component(component_result, ctx.obj.get("verbose", False))

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None

    click.echo()
    if report.failed:
        click.secho(
            f"⚠️  Setup finished with failures: {', '.join(report.failed)}",
            fg="yellow",
            bold=True,
        )
    elif dry_run:
        click.secho(
            f"✅ Dry run complete — {report.changed} config change(s) pending",
            fg="green",
            bold=True,
        )
    else:
        click.secho("✅ Setup complete!", fg="green", bold=True)

    if not quiet and not dry_run:
        _echo_next_steps()


# ── status ──────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show which components are installed."""
    from envstrap.core.use_cases.status import get_status

    result = get_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho(f"\n📋 envstrap on {result.os_name}", fg="cyan", bold=True)
    click.echo(f"   Settings: {result.config_path or '(defaults)'}")
    click.echo(f"   rc:       {result.rc_file}")
    click.echo(f"   profile:  {result.profile_file}")
    click.echo(f"   Installed: {result.present_count}/{len(result.components)}")
    click.echo()

    for component in result.components:
        if not component["supported"]:
            click.secho(f"   – {component['name']} (not on {result.os_name})", fg="white")
        elif component["present"]:
            click.secho(f"   ✓ {component['name']}", fg="green")
        else:
            label = " (required)" if component["critical"] else ""
            click.secho(f"   ✗ {component['name']}{label}", fg="red")
    click.echo()


# ── Register sub-command groups from envstrap/ui/cli/ ─────────────

from envstrap.ui.cli.config import config  # noqa: E402
from envstrap.ui.cli.ensure import ensure  # noqa: E402

cli.add_command(config)
cli.add_command(ensure)


if __name__ == "__main__":
    cli()
