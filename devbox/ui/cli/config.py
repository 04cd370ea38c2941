"""
CLI commands for devbox.yml.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate devbox.yml (or report that defaults are in use)."""
    from devbox.core.config.loader import ConfigError, find_config_file, load_config

    config_path: Path | None = ctx.obj.get("config_path") or find_config_file()

    try:
        cfg = load_config(config_path, search=False)
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"valid": False, "path": str(config_path), "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red", bold=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({
            "valid": True,
            "path": str(config_path) if config_path else None,
            "config": cfg.model_dump(),
        }, indent=2))
        return

    source = str(config_path) if config_path else "built-in defaults"
    click.secho("✅ Configuration is valid", fg="green", bold=True)
    click.echo(f"   Source:        {source}")
    click.echo(f"   Backup root:   {cfg.backup_root}")
    click.echo(f"   PATH entries:  {len(cfg.path_entries)}")
    click.echo(f"   Alias groups:  {len(cfg.aliases)}")
    click.echo(f"   Tool checks:   {len(cfg.tools)}")
    click.echo()
