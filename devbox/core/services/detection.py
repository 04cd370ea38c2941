"""
System detection — OS, distro and package manager.

Read-only probes.  Produces the immutable ``SystemProfile`` that the
rest of devbox receives as an argument.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
from pathlib import Path

from devbox.core.models.system import OSKind, PackageManager, SystemProfile
from devbox.core.services.subprocess_runner import run_command

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

# First match wins.
_LINUX_PM_ORDER: list[PackageManager] = [
    PackageManager.APT,
    PackageManager.YUM,
    PackageManager.DNF,
    PackageManager.PACMAN,
    PackageManager.APK,
]


class UnsupportedSystemError(Exception):
    """Raised when devbox runs on an OS it does not support."""


def parse_os_release(path: Path = OS_RELEASE_PATH) -> dict[str, str]:
    """Parse ``/etc/os-release`` into a dict.  Missing file → ``{}``."""
    info: dict[str, str] = {}
    try:
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                info[key] = value.strip().strip('"').strip("'")
    except (FileNotFoundError, OSError):
        logger.debug("Cannot read %s", path)
    return info


def detect_package_manager(os_kind: OSKind) -> PackageManager | None:
    """Return the system package manager, or None when none is on PATH."""
    if os_kind is OSKind.MACOS:
        return PackageManager.BREW if shutil.which("brew") else None

    for pm in _LINUX_PM_ORDER:
        if shutil.which(pm.value):
            return pm
    return None


def _macos_version() -> str:
    result = run_command(["sw_vers", "-productVersion"], timeout=5)
    return result["stdout"].strip() if result["ok"] else ""


def detect_system(
    *,
    os_release: Path = OS_RELEASE_PATH,
    home: Path | None = None,
    login_shell: str | None = None,
) -> SystemProfile:
    """Detect the host system.

    Raises:
        UnsupportedSystemError: Neither Linux nor macOS.
    """
    system = platform.system()
    if system == "Linux":
        os_kind = OSKind.LINUX
        info = parse_os_release(os_release)
        distro = info.get("NAME", "Linux")
        version = info.get("VERSION_ID", "")
    elif system == "Darwin":
        os_kind = OSKind.MACOS
        distro = "macOS"
        version = _macos_version()
    else:
        raise UnsupportedSystemError(f"Unsupported OS: {system or 'unknown'}")

    logger.info("Detected OS: %s (%s %s)", os_kind.value, distro, version)

    pm = detect_package_manager(os_kind)
    if pm is None:
        logger.warning("No supported package manager found on %s", distro)
    else:
        logger.info("Package manager: %s", pm.value)

    return SystemProfile(
        os=os_kind,
        distro=distro,
        version=version,
        package_manager=pm,
        login_shell=os.environ.get("SHELL", "") if login_shell is None else login_shell,
        home=str(home or Path.home()),
    )
