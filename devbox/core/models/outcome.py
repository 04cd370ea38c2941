"""
Outcome models — what happened to each file devbox touched.

A ``TargetOutcome`` is produced for every shell config target on every
``ensure_line_present`` call.  Failures are captured here, never raised.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

FailureKind = Literal["discovery", "backup", "append"]


class TargetOutcome(BaseModel):
    """Result of ensuring one line in one shell config file."""

    target: str
    line: str
    status: Literal["added", "present", "failed"] = "added"
    failure: FailureKind | None = None
    backup_path: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != "failed"

    @classmethod
    def added(cls, target: str, line: str, backup_path: str) -> TargetOutcome:
        return cls(target=target, line=line, status="added", backup_path=backup_path)

    @classmethod
    def present(cls, target: str, line: str) -> TargetOutcome:
        return cls(target=target, line=line, status="present")

    @classmethod
    def failed(
        cls,
        target: str,
        line: str,
        failure: FailureKind,
        error: str,
        backup_path: str | None = None,
    ) -> TargetOutcome:
        return cls(
            target=target,
            line=line,
            status="failed",
            failure=failure,
            error=error,
            backup_path=backup_path,
        )


class FileWriteResult(BaseModel):
    """Result of writing a standalone config file (e.g. ``~/.tmux.conf``)."""

    path: str
    status: Literal["created", "kept", "failed"]
    backup_path: str | None = None
    error: str | None = None


class ProvisionReport(BaseModel):
    """Everything a provisioning run changed, skipped, or failed on."""

    backup_dir: str
    backup_created: bool = False
    tmux: FileWriteResult | None = None
    outcomes: list[TargetOutcome] = Field(default_factory=list)

    @property
    def added(self) -> list[TargetOutcome]:
        return [o for o in self.outcomes if o.status == "added"]

    @property
    def failures(self) -> list[TargetOutcome]:
        return [o for o in self.outcomes if o.status == "failed"]

    @property
    def ok(self) -> bool:
        tmux_ok = self.tmux is None or self.tmux.status != "failed"
        return tmux_ok and not self.failures

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "backup_dir": self.backup_dir,
            "backup_created": self.backup_created,
            "tmux": self.tmux.model_dump() if self.tmux else None,
            "added": len(self.added),
            "failed": len(self.failures),
            "outcomes": [o.model_dump() for o in self.outcomes],
        }
