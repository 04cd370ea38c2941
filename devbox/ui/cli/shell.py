"""
CLI commands for shell config files.

Thin wrappers over ``devbox.core.services.shell_config``.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from devbox.ui.cli.helpers import echo_outcome, load_config_or_exit


def _updater(ctx: click.Context):
    from devbox.core.services.backup import BackupDirectory
    from devbox.core.services.shell_config import ConfigUpdater

    config = load_config_or_exit(ctx)
    home = Path.home()
    backups = BackupDirectory.for_home(home, config.backup_root)
    return ConfigUpdater(home, backups, login_shell=os.environ.get("SHELL", ""))


@click.group()
def shell() -> None:
    """Shell config — add lines to rc files, preview targets."""


@shell.command("add")
@click.argument("line")
@click.option("--comment", "-m", default=None, help="Comment written above the line.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def add(ctx: click.Context, line: str, comment: str | None, as_json: bool) -> None:
    """Ensure LINE is present in every shell config file.

    Files that already contain LINE exactly are left untouched; every
    other file is backed up first.

    Examples:

        devbox shell add 'export PATH="$HOME/.bun/bin:$PATH"' -m Bun

        devbox shell add "alias vim='nvim'"
    """
    updater = _updater(ctx)
    try:
        outcomes = updater.ensure_line_present(line, comment)
    except ValueError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    failed = any(not o.ok for o in outcomes)

    if as_json:
        click.echo(json.dumps({
            "ok": not failed,
            "backup_dir": str(updater.backups.path) if updater.backups.created else None,
            "outcomes": [o.model_dump() for o in outcomes],
        }, indent=2))
        if failed:
            sys.exit(1)
        return

    for outcome in outcomes:
        echo_outcome(outcome)

    if updater.backups.created:
        click.echo(f"\n   📁 Backups: {updater.backups.path}")

    if failed:
        sys.exit(1)


@shell.command("targets")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def targets(ctx: click.Context, as_json: bool) -> None:
    """Show which shell config files a line would be written to."""
    updater = _updater(ctx)
    found = updater.discover_targets(create=False)

    if as_json:
        click.echo(json.dumps([
            {"path": str(t.path), "shell": t.shell, "exists": t.existed}
            for t in found
        ], indent=2))
        return

    click.secho("🐚 Shell config targets:", fg="cyan", bold=True)
    for target in found:
        note = "" if target.existed else "  (will be created)"
        click.echo(f"   • {target.path} [{target.shell}]{note}")
