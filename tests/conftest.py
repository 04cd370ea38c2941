"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from devbox.core.services.backup import BackupDirectory
from devbox.core.services.shell_config import ConfigUpdater

RUN_TIMESTAMP = "20250101_120000"


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI tests reconfigure the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """An empty home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def backups(home: Path) -> BackupDirectory:
    """The run's backup directory, with a fixed timestamp."""
    return BackupDirectory.for_home(home, timestamp=RUN_TIMESTAMP)


@pytest.fixture
def updater(home: Path, backups: BackupDirectory) -> ConfigUpdater:
    """A ConfigUpdater for a bash user."""
    return ConfigUpdater(home, backups, login_shell="/bin/bash")
