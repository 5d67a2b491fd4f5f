"""
FiraCode Nerd Font — Homebrew cask on macOS, zip download on Linux.

Entirely best-effort: no configuration entries, never fatal.
"""

from __future__ import annotations

import logging
from pathlib import Path

from envstrap.core.components.base import BootstrapContext, Component
from envstrap.core.detection import LINUX, MACOS, command_exists, path_exists
from envstrap.core.models.action import InstallAction

logger = logging.getLogger(__name__)

FONT_GLOB = "FiraCode*"


class FiraCodeFontComponent(Component):
    name = "firacode-nerd-font"
    kind = "font"
    platforms = (MACOS, LINUX)

    def required_tools(self, ctx: BootstrapContext, *, installing: bool) -> tuple[str, ...]:
        if not installing:
            return ()
        if ctx.os_name == MACOS:
            return ("brew",)
        return ("curl", "unzip")

    def is_present(self, ctx: BootstrapContext) -> bool:
        # The cask install is idempotent, so macOS always (re)runs it.
        if ctx.os_name != LINUX or not path_exists(ctx.font_dir, directory=True):
            return False
        return any(ctx.font_dir.glob(FONT_GLOB))

    def prepare(self, ctx: BootstrapContext) -> None:
        if ctx.os_name == LINUX:
            ctx.font_dir.mkdir(parents=True, exist_ok=True)

    def install_actions(self, ctx: BootstrapContext, workdir: Path) -> list[InstallAction]:
        if ctx.os_name == MACOS:
            return self._macos_actions(ctx)
        return self._linux_actions(ctx, workdir)

    def _macos_actions(self, ctx: BootstrapContext) -> list[InstallAction]:
        s = ctx.settings
        return [
            InstallAction(
                id=f"{self.name}:tap",
                description=f"brew tap {s.font_tap}",
                argv=["brew", "tap", s.font_tap],
                best_effort=True,
            ),
            InstallAction(
                id=f"{self.name}:cask",
                description=f"brew install --cask {s.font_cask}",
                argv=["brew", "install", "--cask", s.font_cask],
                best_effort=True,
            ),
        ]

    def _linux_actions(self, ctx: BootstrapContext, workdir: Path) -> list[InstallAction]:
        archive = workdir / "FiraCode.zip"
        actions = [
            InstallAction(
                id=f"{self.name}:download",
                description="Download FiraCode.zip",
                argv=["curl", "-fLo", str(archive), ctx.settings.font_url],
            ),
            InstallAction(
                id=f"{self.name}:unzip",
                description=f"Unpack fonts into {ctx.font_dir}",
                argv=["unzip", "-o", str(archive), "-d", str(ctx.font_dir)],
            ),
        ]
        if command_exists("fc-cache"):
            actions.append(
                InstallAction(
                    id=f"{self.name}:fc-cache",
                    description="Refresh the font cache",
                    argv=["fc-cache", "-fv"],
                    best_effort=True,
                )
            )
        else:
            logger.debug("fc-cache not found; skipping font cache refresh")
        return actions
