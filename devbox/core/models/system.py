"""
SystemProfile — what machine are we provisioning.

Built once by ``detect_system()`` and passed explicitly to everything
that needs to branch on OS or package manager.  Frozen: nothing mutates
it after detection.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class OSKind(str, Enum):
    """Supported operating systems."""

    LINUX = "linux"
    MACOS = "macos"


class PackageManager(str, Enum):
    """System package managers devbox knows how to detect."""

    APT = "apt"
    YUM = "yum"
    DNF = "dnf"
    PACMAN = "pacman"
    APK = "apk"
    BREW = "brew"


class SystemProfile(BaseModel):
    """Immutable snapshot of the host system."""

    model_config = ConfigDict(frozen=True)

    os: OSKind
    distro: str = ""
    version: str = ""
    package_manager: PackageManager | None = None
    login_shell: str = ""
    home: str = ""

    def to_dict(self) -> dict:
        return {
            "os": self.os.value,
            "distro": self.distro,
            "version": self.version,
            "package_manager": self.package_manager.value if self.package_manager else None,
            "login_shell": self.login_shell,
            "home": self.home,
        }
