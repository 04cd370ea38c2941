"""
Shell startup file locations.

Maps shell types to their rc files, relative to the home directory.
"""

from __future__ import annotations

# Probed in this order; every one that exists is a target.
KNOWN_RC_FILES: list[tuple[str, str]] = [
    ("bash", ".bashrc"),
    ("zsh", ".zshrc"),
    ("fish", ".config/fish/config.fish"),
]

# Used only when none of the above exist, keyed by login shell name.
FALLBACK_RC_FILES: dict[str, str] = {
    "zsh": ".zshrc",
    "bash": ".bashrc",
}
GENERIC_PROFILE = ".profile"
