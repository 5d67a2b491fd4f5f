"""
InstallAction and Receipt models — the installer contract.

InstallActions describe one external command a component needs run.
Receipts describe what happened. Installers take actions and return
receipts. Never exceptions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class InstallAction(BaseModel):
    """One external command run on behalf of a component.

    Exactly one of ``argv`` (exec directly) or ``shell`` (run through
    ``sh -c``, needed for ``curl ... | sh`` pipelines) is set.
    """

    id: str                          # "<component>:<step>"
    description: str = ""
    argv: list[str] | None = None
    shell: str | None = None
    env: dict[str, str] = Field(default_factory=dict)
    cwd: str | None = None
    timeout: float | None = None     # None = wait forever (network stalls accepted)
    best_effort: bool = False        # failure is logged, not propagated

    @model_validator(mode="after")
    def _one_command(self) -> InstallAction:
        if (self.argv is None) == (self.shell is None):
            raise ValueError(f"{self.id}: exactly one of 'argv' or 'shell' is required")
        if self.argv is not None and not self.argv:
            raise ValueError(f"{self.id}: 'argv' must not be empty")
        return self

    @property
    def command_text(self) -> str:
        """Human-readable command for logs and dry-run output."""
        if self.shell is not None:
            return self.shell
        return " ".join(self.argv or [])


class Receipt(BaseModel):
    """Result of an install step (or of a whole component install).

    Receipts capture the full outcome. Installers NEVER raise:
    failures are captured here.
    """

    installer: str
    action_id: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the action succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the action failed."""
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @classmethod
    def success(
        cls,
        installer: str,
        action_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            installer=installer,
            action_id=action_id,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        installer: str,
        action_id: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            installer=installer,
            action_id=action_id,
            status="failed",
            error=error,
            **kwargs,
        )

    @classmethod
    def skip(
        cls,
        installer: str,
        action_id: str,
        reason: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a skip receipt."""
        return cls(
            installer=installer,
            action_id=action_id,
            status="skipped",
            output=reason,
            **kwargs,
        )
