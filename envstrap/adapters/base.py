"""
Installer base — the contract between components and external tools.

Components never call subprocess themselves: they describe
InstallActions and hand them to an Installer. Swapping the Installer
(see ``MockInstaller``) lets the orchestrator and the text engine be
exercised without network or package-manager side effects.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from envstrap.core.models.action import InstallAction, Receipt


class Installer(ABC):
    """Abstract base class for installers.

    Installers perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The installer identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether this installer can run anything at all. Never raises."""

    @abstractmethod
    def run(self, action: InstallAction) -> Receipt:
        """Execute one action and return its receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
