"""
Per-run backup directory.

Every file devbox is about to modify is first copied into
``~/.config-backups/<YYYYMMDD_HHMMSS>/``.  The timestamp is taken once
per run; the directory itself is only created when the first backup is
actually needed, so a no-op run leaves nothing behind.  A run never
writes into a directory another run created.
"""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path

from devbox.core.data.defaults import DEFAULT_BACKUP_ROOT

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# Suffixes tried when a run in the same second already took the name
MAX_NAME_ATTEMPTS = 100


class BackupError(Exception):
    """Raised when the backup directory or a backup copy cannot be written."""


class BackupDirectory:
    """Lazily-created, timestamped backup directory for one run.

    The directory belongs to this run alone: when another run already
    used the timestamp, a ``_1``, ``_2``, ... suffix is added.  Backups
    are stored under the source file's basename.  Backing up two files
    with the same basename in one run overwrites the first copy.
    """

    def __init__(self, root: Path, timestamp: str | None = None) -> None:
        self.root = root
        self.timestamp = timestamp or time.strftime(TIMESTAMP_FORMAT)
        # Final once ensure() has claimed a directory
        self.path = root / self.timestamp
        self._created = False

    @classmethod
    def for_home(
        cls,
        home: Path,
        backup_root: str = DEFAULT_BACKUP_ROOT,
        timestamp: str | None = None,
    ) -> BackupDirectory:
        """Backup directory rooted at ``home / backup_root`` (absolute roots win)."""
        root = Path(backup_root).expanduser()
        if not root.is_absolute():
            root = home / root
        return cls(root, timestamp=timestamp)

    @property
    def created(self) -> bool:
        """True once this run has created its directory."""
        return self._created

    def entries(self) -> list[Path]:
        """Files backed up so far in this run."""
        if not self._created:
            return []
        return sorted(p for p in self.path.iterdir() if p.is_file())

    def ensure(self) -> Path:
        """Create this run's directory on the first backup of the run."""
        if self._created:
            return self.path

        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BackupError(f"Cannot create backup directory {self.path}: {e}") from e

        for attempt in range(MAX_NAME_ATTEMPTS):
            name = self.timestamp if attempt == 0 else f"{self.timestamp}_{attempt}"
            candidate = self.root / name
            try:
                candidate.mkdir()
            except FileExistsError:
                continue
            except OSError as e:
                raise BackupError(f"Cannot create backup directory {candidate}: {e}") from e
            self.path = candidate
            self._created = True
            logger.debug("Created backup directory %s", candidate)
            return candidate

        raise BackupError(
            f"Cannot create backup directory under {self.root}: "
            f"{MAX_NAME_ATTEMPTS} names for {self.timestamp} already taken"
        )

    def backup(self, source: Path) -> Path:
        """Copy ``source`` verbatim into the run's directory.

        Returns:
            Path of the backup copy.

        Raises:
            BackupError: If the directory or the copy cannot be written.
        """
        dest = self.ensure() / source.name
        try:
            shutil.copy2(source, dest)
        except OSError as e:
            raise BackupError(f"Cannot back up {source} to {dest}: {e}") from e
        logger.debug("Backed up %s → %s", source, dest)
        return dest
