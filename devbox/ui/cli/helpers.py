"""
Shared CLI helpers — config loading and outcome rendering.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from devbox.core.config.loader import ConfigError, load_config
from devbox.core.models.config import DevboxConfig
from devbox.core.models.outcome import TargetOutcome


def load_config_or_exit(ctx: click.Context) -> DevboxConfig:
    """Load devbox.yml (or defaults); print the error and exit 1 if invalid."""
    config_path: Path | None = ctx.obj.get("config_path")
    try:
        return load_config(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def echo_outcome(outcome: TargetOutcome) -> None:
    """Print one shell config outcome on a single line."""
    if outcome.status == "added":
        click.secho("   ✓ ", fg="green", nl=False)
        click.echo(f"Added to {outcome.target}: {outcome.line}")
    elif outcome.status == "present":
        click.secho("   · ", fg="white", nl=False)
        click.echo(f"Already in {outcome.target}: {outcome.line}")
    else:
        click.secho(f"   ✗ {outcome.target} ", fg="red", nl=False)
        click.echo(f"[{outcome.failure}] {outcome.error}")
