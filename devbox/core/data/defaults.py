"""
Built-in defaults for a provisioning run.

Pure data. No logic. Used as the default values of ``DevboxConfig``.
"""

from __future__ import annotations

# Relative to the user's home directory.
DEFAULT_BACKUP_ROOT = ".config-backups"

# Run log written by ``devbox setup`` (strftime pattern).
RUN_LOG_TEMPLATE = "/tmp/devbox-setup-%Y%m%d_%H%M%S.log"

DEFAULT_PATH_ENTRIES: list[dict] = [
    {"path": "$HOME/.bun/bin", "comment": "Bun"},
]

DEFAULT_ALIAS_GROUPS: list[dict] = [
    {
        "comment": "Neovim aliases",
        "lines": ["alias vim='nvim'", "alias vi='nvim'"],
    },
    {
        "comment": "Useful aliases",
        "lines": ["alias ll='ls -alF'", "alias la='ls -A'", "alias l='ls -CF'"],
    },
    {
        "comment": "Docker aliases",
        "lines": [
            "alias dps='docker ps'",
            "alias dpsa='docker ps -a'",
            "alias dimg='docker images'",
            "alias dexec='docker exec -it'",
        ],
        "requires": "docker",
    },
]

# tmux prints "tmux 3.4" for -V; everything else understands --version.
DEFAULT_TOOL_CHECKS: list[dict] = [
    {"name": "tmux", "cli": "tmux", "version_args": ["-V"]},
    {"name": "ripgrep", "cli": "rg"},
    {"name": "neovim", "cli": "nvim"},
    {"name": "node", "cli": "node"},
    {"name": "bun", "cli": "bun"},
    {"name": "docker", "cli": "docker"},
    {"name": "claude", "cli": "claude", "fallback": "installed"},
    {"name": "git", "cli": "git"},
    {"name": "gh", "cli": "gh"},
]
