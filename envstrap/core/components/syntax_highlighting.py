"""
zsh-syntax-highlighting — cloned into $ZSH_CUSTOM/plugins and enabled
through the Oh My Zsh ``plugins=(...)`` list.
"""

from __future__ import annotations

from pathlib import Path

from envstrap.core.components.base import RC, BootstrapContext, Component, Registration
from envstrap.core.detection import path_exists
from envstrap.core.models.action import InstallAction
from envstrap.core.models.entry import ListMembership

PLUGINS_ANCHOR = "plugins=("


class SyntaxHighlightingComponent(Component):
    name = "zsh-syntax-highlighting"
    kind = "plugin"
    install_requires = ("git",)

    def is_present(self, ctx: BootstrapContext) -> bool:
        return path_exists(ctx.plugin_dir, directory=True)

    def prepare(self, ctx: BootstrapContext) -> None:
        ctx.plugin_dir.parent.mkdir(parents=True, exist_ok=True)

    def install_actions(self, ctx: BootstrapContext, workdir: Path) -> list[InstallAction]:
        return [
            InstallAction(
                id=f"{self.name}:clone",
                description=f"Clone {ctx.settings.plugin}",
                argv=["git", "clone", ctx.settings.plugin_repo, str(ctx.plugin_dir)],
            )
        ]

    def registrations(self, ctx: BootstrapContext) -> list[Registration]:
        # A plugin listed but missing on disk makes Oh My Zsh warn at every start.
        return [
            Registration(
                RC,
                ListMembership(
                    anchor=PLUGINS_ANCHOR,
                    token=ctx.settings.plugin,
                    header=["# Oh My Zsh plugins"],
                ),
                gated=True,
            )
        ]
