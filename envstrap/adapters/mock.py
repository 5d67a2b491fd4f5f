"""
Mock installer — deterministic test double for install actions.

Succeeds by default. Failures and side effects (e.g. "create the
directory a real installer would have created") can be configured
per action ID.
"""

from __future__ import annotations

from collections.abc import Callable

from envstrap.adapters.base import Installer
from envstrap.core.models.action import InstallAction, Receipt


class MockInstaller(Installer):
    """Universal mock installer for tests and ``--mock`` runs."""

    def __init__(
        self,
        installer_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = installer_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._effects: dict[str, Callable[[], None]] = {}
        self._call_log: list[InstallAction] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[InstallAction]:
        """All actions this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def called_ids(self) -> list[str]:
        return [a.id for a in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific action ID."""
        self._responses[action_id] = receipt

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Configure a specific action to fail."""
        self._responses[action_id] = Receipt.failure(
            installer=self._name,
            action_id=action_id,
            error=error,
        )

    def set_effect(self, action_id: str, effect: Callable[[], None]) -> None:
        """Run ``effect`` when ``action_id`` succeeds (simulates the install)."""
        self._effects[action_id] = effect

    def run(self, action: InstallAction) -> Receipt:
        self._call_log.append(action)

        receipt = self._responses.get(action.id)
        if receipt is None:
            receipt = Receipt.success(
                installer=self._name,
                action_id=action.id,
                output=self._default_output,
                metadata={"mock": True, "command": action.command_text},
            )

        if receipt.ok and action.id in self._effects:
            self._effects[action.id]()
        return receipt

    def reset(self) -> None:
        """Clear call log, custom responses and effects."""
        self._call_log.clear()
        self._responses.clear()
        self._effects.clear()
