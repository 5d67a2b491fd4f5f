"""
Component base — one named external capability and its config wiring.

A component answers three questions for the orchestrator:

    is_present()     — is it already installed? (pure query)
    install()        — run its InstallActions through an Installer
    registrations()  — which DesiredEntries it needs in which file

Components never touch configuration files directly and never spawn
processes directly; the orchestrator does both.
"""

from __future__ import annotations

import logging
import os
import tempfile
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from envstrap.adapters.base import Installer
from envstrap.core.models.action import InstallAction, Receipt
from envstrap.core.models.entry import ExactLine, ListMembership, PatternedSetting
from envstrap.core.models.settings import BootstrapSettings
from envstrap.core.textedit.config_file import ConfigFile

logger = logging.getLogger(__name__)

RC = "rc"
PROFILE = "profile"


@dataclass
class BootstrapContext:
    """Everything a component needs: settings, platform, file handles."""

    settings: BootstrapSettings
    os_name: str
    rc: ConfigFile
    profile: ConfigFile
    dry_run: bool = False

    @classmethod
    def from_settings(
        cls,
        settings: BootstrapSettings,
        *,
        os_name: str,
        dry_run: bool = False,
    ) -> BootstrapContext:
        return cls(
            settings=settings,
            os_name=os_name,
            rc=ConfigFile(settings.rc_file),
            profile=ConfigFile(settings.profile_file),
            dry_run=dry_run,
        )

    def file(self, target: str) -> ConfigFile:
        """``"rc"`` or ``"profile"`` → the matching handle."""
        if target == RC:
            return self.rc
        if target == PROFILE:
            return self.profile
        raise ValueError(f"Unknown config file target: {target!r}")

    @staticmethod
    def expand(path: str) -> Path:
        return Path(os.path.expanduser(os.path.expandvars(path)))

    # ── Well-known locations ────────────────────────────────────

    @property
    def oh_my_zsh_dir(self) -> Path:
        return self.expand(self.settings.oh_my_zsh_dir)

    @property
    def zsh_custom(self) -> Path:
        """``$ZSH_CUSTOM`` if set, else ``<oh-my-zsh>/custom``."""
        custom = os.environ.get("ZSH_CUSTOM")
        if custom:
            return self.expand(custom)
        return self.oh_my_zsh_dir / "custom"

    @property
    def plugin_dir(self) -> Path:
        return self.zsh_custom / "plugins" / self.settings.plugin

    @property
    def starship_bin_dir(self) -> Path:
        return self.expand(self.settings.starship_bin_dir)

    @property
    def font_dir(self) -> Path:
        return self.expand(self.settings.font_dir)


@dataclass(frozen=True)
class Registration:
    """A DesiredEntry bound to a target file.

    ``gated`` entries are only written when the component is actually
    present after the install attempt.
    """

    file: str
    entry: ExactLine | PatternedSetting | ListMembership
    gated: bool = False


class Component(ABC):
    """Abstract base class for environment components."""

    name: str = ""
    kind: str = ""
    platforms: tuple[str, ...] | None = None   # None = every platform
    critical: bool = False
    requires: tuple[str, ...] = ()             # always needed
    install_requires: tuple[str, ...] = ()     # needed only to install

    def supports(self, os_name: str) -> bool:
        return self.platforms is None or os_name in self.platforms

    def required_tools(self, ctx: BootstrapContext, *, installing: bool) -> tuple[str, ...]:
        if installing:
            return self.requires + self.install_requires
        return self.requires

    @abstractmethod
    def is_present(self, ctx: BootstrapContext) -> bool:
        """Pure presence query. Never writes, never raises."""

    @abstractmethod
    def install_actions(self, ctx: BootstrapContext, workdir: Path) -> list[InstallAction]:
        """Commands that install the component.

        ``workdir`` is a scratch directory removed after the install.
        """

    def prepare(self, ctx: BootstrapContext) -> None:
        """Create directories the install commands expect. Not run in dry-run."""

    def activate(self, ctx: BootstrapContext) -> None:
        """Make the component usable by later steps of this same run."""

    def registrations(self, ctx: BootstrapContext) -> list[Registration]:
        return []

    def planned_actions(self, ctx: BootstrapContext) -> list[InstallAction]:
        """Install actions as a dry-run would show them."""
        placeholder = Path(tempfile.gettempdir()) / f"envstrap-{self.name}"
        return self.install_actions(ctx, placeholder)

    def install(self, ctx: BootstrapContext, installer: Installer) -> Receipt:
        """Prepare, then run every install action in order."""
        self.prepare(ctx)
        with tempfile.TemporaryDirectory(prefix=f"envstrap-{self.name}-") as tmp:
            return run_actions(self.name, installer, self.install_actions(ctx, Path(tmp)))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


def run_actions(
    component: str,
    installer: Installer,
    actions: list[InstallAction],
) -> Receipt:
    """Run actions sequentially and fold them into one receipt.

    A failed best-effort action is logged and skipped over. Any other
    failure stops the sequence and fails the whole install.
    """
    action_id = f"{component}:install"
    start = time.monotonic()
    steps: list[dict] = []
    outputs: list[str] = []

    for action in actions:
        receipt = installer.run(action)
        steps.append({"id": action.id, "status": receipt.status, "error": receipt.error})
        if receipt.output:
            outputs.append(receipt.output)

        if not receipt.failed:
            continue
        if action.best_effort:
            logger.warning("%s: optional step %s failed: %s", component, action.id, receipt.error)
            continue
        return Receipt.failure(
            installer=installer.name,
            action_id=action_id,
            error=receipt.error or f"{action.id} failed",
            duration_ms=int((time.monotonic() - start) * 1000),
            metadata={"steps": steps, "failed_step": action.id},
        )

    return Receipt.success(
        installer=installer.name,
        action_id=action_id,
        output="\n".join(outputs),
        duration_ms=int((time.monotonic() - start) * 1000),
        metadata={"steps": steps},
    )
