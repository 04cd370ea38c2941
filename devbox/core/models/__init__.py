"""
Domain models — Pydantic types for devbox.

All models are re-exported here for convenient access:

    from devbox.core.models import SystemProfile, DevboxConfig, TargetOutcome
"""

from devbox.core.models.config import AliasGroup, DevboxConfig, PathEntry, ToolCheck
from devbox.core.models.outcome import (
    FileWriteResult,
    ProvisionReport,
    TargetOutcome,
)
from devbox.core.models.system import OSKind, PackageManager, SystemProfile

__all__ = [
    # config.py
    "AliasGroup",
    "DevboxConfig",
    "PathEntry",
    "ToolCheck",
    # outcome.py
    "FileWriteResult",
    "ProvisionReport",
    "TargetOutcome",
    # system.py
    "OSKind",
    "PackageManager",
    "SystemProfile",
]
