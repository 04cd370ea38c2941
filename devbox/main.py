"""
devbox — CLI entrypoint.

Usage:
    devbox --help
    devbox setup
    devbox shell add 'export PATH="$HOME/.bun/bin:$PATH"' --comment Bun
    devbox verify
"""

from __future__ import annotations

import json
import os
import sys
import time
from pathlib import Path

import click

from devbox import __version__
from devbox.core.observability.logging_config import setup_logging
from devbox.ui.cli.helpers import echo_outcome, load_config_or_exit


@click.group()
@click.version_option(version=__version__, prog_name="devbox")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to devbox.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """devbox — provision a developer workstation."""
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
        level = os.environ.get("DEVBOX_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("DEVBOX_LOG_FILE"),
        log_file_level=os.environ.get("DEVBOX_LOG_FILE_LEVEL"),
    )


def _detect_or_exit():
    from devbox.core.services.detection import UnsupportedSystemError, detect_system

    try:
        return detect_system()
    except UnsupportedSystemError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def detect(as_json: bool) -> None:
    """Detect OS, distro and package manager."""
    profile = _detect_or_exit()

    if as_json:
        click.echo(json.dumps(profile.to_dict(), indent=2))
        return

    pm = profile.package_manager.value if profile.package_manager else "none found"
    click.secho("\n🖥  System", fg="cyan", bold=True)
    click.echo(f"   OS:              {profile.os.value} ({profile.distro} {profile.version})".rstrip())
    click.echo(f"   Package manager: {pm}")
    click.echo(f"   Login shell:     {profile.login_shell or 'unknown'}")
    click.echo()


def _echo_verification(report) -> None:
    for tool in report.tools:
        if tool.installed:
            click.secho(f"   ✓ {tool.name}", fg="green", nl=False)
            click.echo(f": {tool.version}")
        else:
            click.secho(f"   ✗ {tool.name}", fg="red", nl=False)
            click.echo(": not installed")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def verify(ctx: click.Context, as_json: bool) -> None:
    """Check that the expected tools are installed."""
    from devbox.core.services.verify import verify_installations

    config = load_config_or_exit(ctx)
    report = verify_installations(config.tools)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        if not report.ok:
            sys.exit(1)
        return

    click.secho("\n🔎 Verifying installations", fg="cyan", bold=True)
    _echo_verification(report)
    click.echo()

    if not report.ok:
        sys.exit(1)


@cli.command()
@click.option("--skip-tmux", is_flag=True, help="Don't write ~/.tmux.conf.")
@click.option("--skip-aliases", is_flag=True, help="Don't add shell aliases.")
@click.option("--skip-verify", is_flag=True, help="Don't run the verification report.")
@click.option(
    "--run-log",
    type=click.Path(dir_okay=False),
    default=None,
    help="Run log path (default: /tmp/devbox-setup-<timestamp>.log).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def setup(
    ctx: click.Context,
    skip_tmux: bool,
    skip_aliases: bool,
    skip_verify: bool,
    run_log: str | None,
    as_json: bool,
) -> None:
    """Configure this workstation: tmux, PATH entries, aliases.

    Every file that is changed is backed up first to
    ~/.config-backups/<timestamp>/.  Safe to run repeatedly.

    Examples:

        devbox setup

        devbox setup --skip-aliases --json
    """
    from devbox.core.data.defaults import RUN_LOG_TEMPLATE
    from devbox.core.observability.logging_config import attach_run_log
    from devbox.core.services.backup import BackupDirectory
    from devbox.core.services.provision import provision
    from devbox.core.services.verify import verify_installations

    config = load_config_or_exit(ctx)
    log_path = attach_run_log(Path(run_log) if run_log else Path(time.strftime(RUN_LOG_TEMPLATE)))

    profile = _detect_or_exit()
    backups = BackupDirectory.for_home(Path(profile.home), config.backup_root)

    report = provision(
        profile,
        config,
        backups,
        skip_tmux=skip_tmux,
        skip_aliases=skip_aliases,
    )
    verification = None if skip_verify else verify_installations(config.tools)

    if as_json:
        click.echo(json.dumps({
            "system": profile.to_dict(),
            "provision": report.to_dict(),
            "verification": verification.to_dict() if verification else None,
            "run_log": str(log_path) if log_path else None,
        }, indent=2))
        if not report.ok:
            sys.exit(1)
        return

    quiet = ctx.obj.get("quiet", False)
    verbose = ctx.obj.get("verbose", False)

    pm = profile.package_manager.value if profile.package_manager else "none"
    click.secho(f"\n🚀 devbox setup — {profile.distro} ({pm})", fg="cyan", bold=True)

    if report.tmux:
        tmux = report.tmux
        if tmux.status == "created":
            click.secho(f"   ✓ Created {tmux.path}", fg="green")
        elif tmux.status == "kept":
            click.secho(f"   ⊘ Kept existing {tmux.path}", fg="yellow")
        else:
            click.secho(f"   ✗ {tmux.path}: {tmux.error}", fg="red")

    for outcome in report.outcomes:
        if outcome.status == "present" and not verbose:
            continue
        echo_outcome(outcome)

    if verification and not quiet:
        click.secho("\n🔎 Verifying installations", fg="cyan", bold=True)
        _echo_verification(verification)

    click.echo()
    status_color = "green" if report.ok else "red"
    click.secho(
        f"   Result: {len(report.added)} line(s) added, {len(report.failures)} failed",
        fg=status_color,
        bold=True,
    )

    if not quiet:
        click.echo()
        click.echo("📝 Next steps:")
        click.echo("   1. Restart your terminal or run: source ~/.bashrc (or ~/.zshrc)")
        click.echo("   2. Initialize Claude Code: claude auth")
        if report.backup_created:
            click.echo(f"\n📁 Backups saved to: {report.backup_dir}")
        if log_path:
            click.echo(f"📄 Setup log: {log_path}")

    click.echo()
    if not report.ok:
        sys.exit(1)


# ── Register sub-command groups from devbox/ui/cli/ ─────────────────

from devbox.ui.cli.config import config
from devbox.ui.cli.shell import shell

cli.add_command(config)
cli.add_command(shell)


if __name__ == "__main__":
    cli()
