"""
Installation verification — is each expected tool on PATH, and which version.
"""

from __future__ import annotations

import logging
import shutil

from pydantic import BaseModel, Field

from devbox.core.models.config import ToolCheck
from devbox.core.services.subprocess_runner import run_command

logger = logging.getLogger(__name__)


class ToolStatus(BaseModel):
    """Verification result for one tool."""

    name: str
    installed: bool = False
    version: str = ""
    path: str | None = None


class VerificationReport(BaseModel):
    """Verification results for every configured tool."""

    tools: list[ToolStatus] = Field(default_factory=list)

    @property
    def missing(self) -> list[ToolStatus]:
        return [t for t in self.tools if not t.installed]

    @property
    def ok(self) -> bool:
        return not self.missing

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "installed": len(self.tools) - len(self.missing),
            "missing": [t.name for t in self.missing],
            "tools": [t.model_dump() for t in self.tools],
        }


def check_tool(tool: ToolCheck) -> ToolStatus:
    """Probe one tool: on PATH? version string from its first output line."""
    path = shutil.which(tool.cli)
    if path is None:
        logger.info("%s: not installed", tool.name)
        return ToolStatus(name=tool.name, installed=False)

    result = run_command([tool.cli, *tool.version_args])
    version = tool.fallback
    if result["ok"]:
        # Some tools (old tmux, java) print their version on stderr
        text = (result["stdout"] or result["stderr"]).strip()
        if text:
            version = text.splitlines()[0].strip()
    else:
        logger.debug("%s version probe failed: %s", tool.name, result["error"])

    logger.info("%s: %s", tool.name, version)
    return ToolStatus(name=tool.name, installed=True, version=version, path=path)


def verify_installations(tools: list[ToolCheck]) -> VerificationReport:
    """Check every tool in order."""
    return VerificationReport(tools=[check_tool(t) for t in tools])
