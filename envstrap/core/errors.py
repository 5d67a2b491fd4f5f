"""
Error taxonomy for a bootstrap run.

Every fatal condition is a ``BootstrapError`` with a ``kind`` tag.
Best-effort failures never raise; they are captured in receipts.

    precondition  — a required external tool is entirely absent
    install       — a critical component failed to install
    io            — a configuration file could not be read or written
    config        — the envstrap settings file is missing or invalid
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from envstrap.core.engine.orchestrator import RunReport


class BootstrapError(Exception):
    """Base class for fatal bootstrap errors."""

    kind: str = "error"

    def __init__(
        self,
        message: str,
        *,
        component: str | None = None,
        report: RunReport | None = None,
    ):
        super().__init__(message)
        self.component = component
        # Partial report of the steps that ran before the abort.
        self.report = report

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "error": str(self),
            "component": self.component,
        }


class PreconditionError(BootstrapError):
    """A required external tool is not on the search path."""

    kind = "precondition"


class InstallError(BootstrapError):
    """A critical component failed to install."""

    kind = "install"


class ConfigIOError(BootstrapError):
    """A shell configuration file could not be created or rewritten."""

    kind = "io"


class ConfigError(BootstrapError):
    """The envstrap settings file is invalid."""

    kind = "config"
