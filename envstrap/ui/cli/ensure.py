"""
CLI commands for single idempotent edits.

Thin wrappers over the DesiredEntry models, so the same validation
applies as for ``extra_entries`` in the settings file.
"""

from __future__ import annotations

import json
import sys

import click
from pydantic import ValidationError

from envstrap.core.models.entry import ExactLine, ListMembership, PatternedSetting
from envstrap.core.textedit.config_file import ConfigFile
from envstrap.core.textedit.primitives import EnsureResult


def _build(factory, **fields):
    try:
        return factory(**fields)
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        click.secho(f"❌ Invalid entry: {messages}", fg="red")
        sys.exit(2)


def _apply(entry, file: str, dry_run: bool, as_json: bool) -> None:
    target = ConfigFile(file)
    try:
        result: EnsureResult = entry.ensure(target, dry_run=dry_run)
    except OSError as e:
        if as_json:
            click.echo(json.dumps({"kind": "io", "error": str(e), "path": str(target.path)}, indent=2))
        else:
            click.secho(f"❌ Cannot update {target.path}: {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.changed:
        click.secho(f"✓ {result.path}: already present", fg="green")
    elif result.dry_run:
        click.secho(f"✎ {result.path}: would be {result.action}: {result.line}", fg="cyan")
    else:
        click.secho(f"✎ {result.path}: {result.action}: {result.line}", fg="green")


@click.group()
def ensure() -> None:
    """Ensure — one idempotent edit to a configuration file."""


@ensure.command("line")
@click.argument("line")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--guard", default=None, help="Regex; a matching line also counts as present.")
@click.option("--header", "header", multiple=True, help="Comment line written before LINE.")
@click.option("--dry-run", is_flag=True, help="Report the change without writing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def ensure_line(
    line: str,
    file: str,
    guard: str | None,
    header: tuple[str, ...],
    dry_run: bool,
    as_json: bool,
) -> None:
    """Append LINE to FILE unless it is already there."""
    entry = _build(ExactLine, line=line, guard=guard, header=list(header))
    _apply(entry, file, dry_run, as_json)


@ensure.command("setting")
@click.argument("pattern")
@click.argument("replacement")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Report the change without writing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def ensure_setting(
    pattern: str,
    replacement: str,
    file: str,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Rewrite the first line matching PATTERN to REPLACEMENT, or append it."""
    entry = _build(PatternedSetting, pattern=pattern, replacement=replacement)
    _apply(entry, file, dry_run, as_json)


@ensure.command("member")
@click.argument("anchor")
@click.argument("token")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--header", "header", multiple=True, help="Comment line before a new list.")
@click.option("--dry-run", is_flag=True, help="Report the change without writing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def ensure_member(
    anchor: str,
    token: str,
    file: str,
    header: tuple[str, ...],
    dry_run: bool,
    as_json: bool,
) -> None:
    """Make TOKEN an element of the list opened by ANCHOR (e.g. 'plugins=(')."""
    entry = _build(ListMembership, anchor=anchor, token=token, header=list(header))
    _apply(entry, file, dry_run, as_json)
