"""
Configuration loader — reads devbox.yml into ``DevboxConfig``.

The file is optional.  It is looked up in the current directory and its
parents, then at ``~/.config/devbox/devbox.yml``; when none is found the
built-in defaults apply.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from devbox.core.models.config import DevboxConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "devbox.yml"
USER_CONFIG_PATH = Path(".config") / "devbox" / CONFIG_FILE


class ConfigError(Exception):
    """Raised when devbox configuration is invalid or unreadable."""


def find_config_file(
    start_dir: Path | None = None,
    home: Path | None = None,
) -> Path | None:
    """Search for devbox.yml from ``start_dir`` upward, then in the user config dir.

    Returns:
        Path to devbox.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    user_config = (home or Path.home()) / USER_CONFIG_PATH
    if user_config.is_file():
        return user_config

    return None


def load_config(path: Path | None = None, *, search: bool = True) -> DevboxConfig:
    """Load and validate devbox configuration.

    Args:
        path: Explicit path to devbox.yml.  Must exist when given.
        search: Look for a config file when ``path`` is None.

    Returns:
        Validated DevboxConfig (defaults when no file is found).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file() if search else None
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return DevboxConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading devbox config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = DevboxConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid devbox configuration: {e}") from e

    logger.info(
        "Loaded %s: %d alias group(s), %d PATH entr(ies), %d tool check(s)",
        path, len(config.aliases), len(config.path_entries), len(config.tools),
    )
    return config
