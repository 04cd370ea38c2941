"""
Provisioning run — config files, PATH entries and aliases.

Drives ``ConfigUpdater`` once per desired line and writes the bundled
tmux configuration.  Everything that touches an existing file goes
through the run's ``BackupDirectory`` first.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path

from devbox.core.data.tmux_conf import TMUX_CONF
from devbox.core.models.config import AliasGroup, DevboxConfig, PathEntry
from devbox.core.models.outcome import FileWriteResult, ProvisionReport, TargetOutcome
from devbox.core.models.system import SystemProfile
from devbox.core.services.backup import BackupDirectory, BackupError
from devbox.core.services.shell_config import ConfigUpdater

logger = logging.getLogger(__name__)

TMUX_CONF_NAME = ".tmux.conf"


def write_tmux_config(home: Path, backups: BackupDirectory) -> FileWriteResult:
    """Write ``~/.tmux.conf`` unless one exists; an existing one is only backed up."""
    path = home / TMUX_CONF_NAME

    if path.exists():
        logger.warning("tmux configuration already exists: %s", path)
        try:
            backup_path = backups.backup(path)
        except BackupError as e:
            logger.error("Could not back up %s: %s", path, e)
            return FileWriteResult(path=str(path), status="kept", error=str(e))
        return FileWriteResult(path=str(path), status="kept", backup_path=str(backup_path))

    try:
        path.write_text(TMUX_CONF, encoding="utf-8")
    except OSError as e:
        logger.error("Cannot write %s: %s", path, e)
        return FileWriteResult(path=str(path), status="failed", error=str(e))

    logger.info("Created tmux configuration: %s", path)
    return FileWriteResult(path=str(path), status="created")


def _expand(path: str, home: Path) -> Path:
    return Path(os.path.expandvars(path.replace("$HOME", str(home)))).expanduser()


def setup_path_entries(
    updater: ConfigUpdater,
    entries: list[PathEntry],
    home: Path,
) -> list[TargetOutcome]:
    """Add a PATH export for every entry whose directory exists."""
    outcomes: list[TargetOutcome] = []
    for entry in entries:
        directory = _expand(entry.path, home)
        if not directory.is_dir():
            logger.debug("Skipping PATH entry %s (no such directory)", directory)
            continue
        outcomes.extend(updater.ensure_line_present(entry.line, entry.comment or None))
    return outcomes


def setup_aliases(
    updater: ConfigUpdater,
    groups: list[AliasGroup],
    is_available: Callable[[str], object] = shutil.which,
) -> list[TargetOutcome]:
    """Write each alias group; the group comment goes above its first line only.

    Groups with ``requires`` are skipped when that CLI is not on PATH.
    """
    logger.info("Setting up aliases...")
    outcomes: list[TargetOutcome] = []
    for group in groups:
        if group.requires and not is_available(group.requires):
            logger.info("Skipping %s: %s not installed", group.comment or "aliases", group.requires)
            continue
        for i, line in enumerate(group.lines):
            comment = group.comment if i == 0 else None
            outcomes.extend(updater.ensure_line_present(line, comment or None))
    return outcomes


def provision(
    profile: SystemProfile,
    config: DevboxConfig,
    backups: BackupDirectory,
    *,
    skip_tmux: bool = False,
    skip_aliases: bool = False,
    is_available: Callable[[str], object] = shutil.which,
) -> ProvisionReport:
    """Run every configuration step and collect the results."""
    home = Path(profile.home)
    updater = ConfigUpdater(home, backups, login_shell=profile.login_shell)

    tmux = None
    if config.write_tmux_config and not skip_tmux:
        logger.info("Creating configuration files...")
        tmux = write_tmux_config(home, backups)

    outcomes = setup_path_entries(updater, config.path_entries, home)
    if not skip_aliases:
        outcomes.extend(setup_aliases(updater, config.aliases, is_available))

    report = ProvisionReport(
        backup_dir=str(backups.path),
        backup_created=backups.created,
        tmux=tmux,
        outcomes=outcomes,
    )
    logger.info(
        "Provisioning finished: %d added, %d failed",
        len(report.added), len(report.failures),
    )
    return report
