"""
DevboxConfig — what a provisioning run should do.

Loaded from an optional devbox.yml.  Every field has a default, so an
absent file means "the standard workstation".
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devbox.core.data.defaults import (
    DEFAULT_ALIAS_GROUPS,
    DEFAULT_BACKUP_ROOT,
    DEFAULT_PATH_ENTRIES,
    DEFAULT_TOOL_CHECKS,
)


def _single_line(value: str, field: str) -> str:
    if "\n" in value or "\r" in value:
        raise ValueError(f"{field} must be a single line: {value!r}")
    return value


class PathEntry(BaseModel):
    """A directory to prepend to PATH once it exists on disk."""

    model_config = ConfigDict(frozen=True)

    path: str                       # may reference $HOME
    comment: str = ""

    @field_validator("path")
    @classmethod
    def _check_path(cls, path: str) -> str:
        if not path.strip():
            raise ValueError("path must not be empty")
        return _single_line(path, "path")

    @field_validator("comment")
    @classmethod
    def _check_comment(cls, comment: str) -> str:
        return _single_line(comment, "comment")

    @property
    def line(self) -> str:
        return f'export PATH="{self.path}:$PATH"'


class AliasGroup(BaseModel):
    """Aliases written together under a single comment."""

    model_config = ConfigDict(frozen=True)

    comment: str = ""
    lines: list[str] = Field(default_factory=list)
    requires: str | None = None     # CLI that must be on PATH

    @field_validator("comment")
    @classmethod
    def _check_comment(cls, comment: str) -> str:
        return _single_line(comment, "comment")

    @field_validator("lines")
    @classmethod
    def _single_lines(cls, lines: list[str]) -> list[str]:
        for line in lines:
            if not line.strip() or "\n" in line or "\r" in line:
                raise ValueError(f"alias lines must be single non-empty lines: {line!r}")
        return lines


class ToolCheck(BaseModel):
    """How to verify one installed tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    cli: str
    version_args: list[str] = Field(default_factory=lambda: ["--version"])
    fallback: str = "version unknown"


class DevboxConfig(BaseModel):
    """Root configuration for a provisioning run."""

    model_config = ConfigDict(frozen=True)

    version: int = 1

    backup_root: str = DEFAULT_BACKUP_ROOT
    write_tmux_config: bool = True

    path_entries: list[PathEntry] = Field(
        default_factory=lambda: [PathEntry(**e) for e in DEFAULT_PATH_ENTRIES]
    )
    aliases: list[AliasGroup] = Field(
        default_factory=lambda: [AliasGroup(**g) for g in DEFAULT_ALIAS_GROUPS]
    )
    tools: list[ToolCheck] = Field(
        default_factory=lambda: [ToolCheck(**t) for t in DEFAULT_TOOL_CHECKS]
    )
