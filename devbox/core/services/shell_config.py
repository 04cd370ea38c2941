"""
Shell config updater — idempotently append lines to shell rc files.

``ConfigUpdater.ensure_line_present(line, comment)`` makes sure ``line``
appears in every applicable shell startup file:

1. **Discover targets.**  Every existing file among ``~/.bashrc``,
   ``~/.zshrc`` and ``~/.config/fish/config.fish``.  When none exist,
   exactly one default picked from the login shell (zsh → ``.zshrc``,
   bash → ``.bashrc``, anything else → ``.profile``) is touched into
   existence.
2. **Skip** targets that already contain ``line`` as a full line.
3. **Back up** the target into the run's ``BackupDirectory``.  No backup,
   no write.
4. **Append** a blank line, ``# comment`` (optional) and ``line``.

Matching is exact full-line equality.  A commented-out or re-quoted
variant of the same statement counts as absent.  The line is written
verbatim to every target, fish included; callers that need fish syntax
must pass fish syntax.

Failures are per target: each one becomes a failed ``TargetOutcome``
and the remaining targets are still processed.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from devbox.core.data.shell_profiles import (
    FALLBACK_RC_FILES,
    GENERIC_PROFILE,
    KNOWN_RC_FILES,
)
from devbox.core.models.outcome import TargetOutcome
from devbox.core.services.backup import BackupDirectory, BackupError

logger = logging.getLogger(__name__)


class ShellConfigError(Exception):
    """Base class for per-target shell config failures."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class DiscoveryError(ShellConfigError):
    """No shell config exists and the default one cannot be created."""


class AppendError(ShellConfigError):
    """The backup succeeded but the line could not be appended."""


@dataclass(frozen=True)
class ConfigTarget:
    """One shell startup file."""

    path: Path
    shell: str
    existed: bool = True


def has_exact_line(content: str, line: str) -> bool:
    """True if any line of ``content`` is exactly ``line``."""
    # Not splitlines(): it also breaks on \f, \v and the unicode separators
    return line in content.split("\n")


def build_block(content: str, line: str, comment: str | None = None) -> str:
    """Text to append to a file currently holding ``content``."""
    parts = []
    # Terminate a dangling last line so the separator is a real blank line
    if content and not content.endswith("\n"):
        parts.append("\n")
    parts.append("\n")
    if comment:
        parts.append(f"# {comment}\n")
    parts.append(f"{line}\n")
    return "".join(parts)


def _read(path: Path) -> str:
    if not path.is_file():
        return ""
    return path.read_text(encoding="utf-8", errors="surrogateescape")


def _write_block(path: Path, block: str) -> None:
    with path.open("a", encoding="utf-8", errors="surrogateescape") as f:
        f.write(block)


def _append_block(path: Path, block: str) -> None:
    """Append ``block`` to ``path``; on failure, cut the file back to its old size."""
    try:
        original_size = path.stat().st_size
    except OSError as e:
        raise AppendError(path, f"Cannot stat {path}: {e}") from e

    try:
        _write_block(path, block)
    except (OSError, UnicodeError) as e:
        try:
            os.truncate(path, original_size)
        except OSError as trunc_err:
            logger.warning(
                "Could not restore %s to %d bytes: %s", path, original_size, trunc_err,
            )
        raise AppendError(path, f"Cannot append to {path}: {e}") from e


class ConfigUpdater:
    """Ensures lines are present in the user's shell startup files.

    Args:
        home: Home directory holding the shell config files.
        backups: The run's backup directory, shared by every call.
        login_shell: The user's login shell (``$SHELL``), consulted only
            when no shell config file exists yet.
    """

    def __init__(
        self,
        home: Path,
        backups: BackupDirectory,
        login_shell: str = "",
    ) -> None:
        self.home = home
        self.backups = backups
        self.login_shell = login_shell

    def _fallback_target(self) -> ConfigTarget:
        shell = os.path.basename(self.login_shell) if self.login_shell else ""
        rel = FALLBACK_RC_FILES.get(shell)
        if rel is None:
            shell, rel = "sh", GENERIC_PROFILE
        path = self.home / rel
        # .profile is not probed above, so it may already exist
        return ConfigTarget(path, shell, existed=path.is_file())

    def discover_targets(self, create: bool = True) -> list[ConfigTarget]:
        """Return the shell config files a line should go into.

        Args:
            create: Touch the fallback file into existence when no
                config exists.  ``False`` only previews.

        Raises:
            DiscoveryError: The fallback file cannot be created.
        """
        existing = [
            ConfigTarget(self.home / rel, shell)
            for shell, rel in KNOWN_RC_FILES
            if (self.home / rel).is_file()
        ]
        if existing:
            return existing

        target = self._fallback_target()
        if create and not target.existed:
            try:
                target.path.touch(exist_ok=True)
            except OSError as e:
                raise DiscoveryError(target.path, f"Cannot create {target.path}: {e}") from e
            logger.info("No shell config found, created %s", target.path)
        return [target]

    def ensure_line_present(
        self,
        line: str,
        comment: str | None = None,
    ) -> list[TargetOutcome]:
        """Append ``line`` to every shell config that lacks it.

        Returns:
            One outcome per target (a single failed outcome when
            discovery itself fails).

        Raises:
            ValueError: ``line`` is empty, or ``line`` or ``comment``
                spans several lines.
        """
        if not line or "\n" in line or "\r" in line:
            raise ValueError(f"Expected a single non-empty line, got {line!r}")
        if comment and ("\n" in comment or "\r" in comment):
            raise ValueError(f"Expected a single-line comment, got {comment!r}")

        try:
            targets = self.discover_targets(create=True)
        except DiscoveryError as e:
            logger.error("Failed %s: %s", e.path, e)
            return [TargetOutcome.failed(str(e.path), line, "discovery", str(e))]

        return [self._apply(target.path, line, comment) for target in targets]

    def _apply(self, path: Path, line: str, comment: str | None) -> TargetOutcome:
        try:
            content = _read(path)
        except OSError as e:
            logger.error("Skipped %s (unreadable): %s", path, e)
            return TargetOutcome.failed(str(path), line, "backup", f"Cannot read {path}: {e}")

        if has_exact_line(content, line):
            logger.info("Already present in %s: %s", path, line)
            return TargetOutcome.present(str(path), line)

        try:
            backup_path = self.backups.backup(path)
        except BackupError as e:
            logger.error("Skipped %s (backup failed): %s", path, e)
            return TargetOutcome.failed(str(path), line, "backup", str(e))

        try:
            _append_block(path, build_block(content, line, comment))
        except AppendError as e:
            logger.error("Failed to append to %s: %s", path, e)
            return TargetOutcome.failed(
                str(path), line, "append", str(e), backup_path=str(backup_path),
            )

        logger.info("Added to %s: %s", path, line)
        return TargetOutcome.added(str(path), line, str(backup_path))
