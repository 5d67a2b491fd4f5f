"""
Oh My Zsh — the shell framework. The one critical component.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from envstrap.core.components.base import RC, BootstrapContext, Component, Registration
from envstrap.core.detection import path_exists
from envstrap.core.models.action import InstallAction
from envstrap.core.models.entry import ExactLine, PatternedSetting
from envstrap.core.textedit.shell_lines import export_line, shell_path

# Any prior `export ZSH=...`, whatever path or quoting it used.
EXPORT_ZSH_PATTERN = r"^\s*export\s+ZSH=.*$"
SOURCE_LINE = "source $ZSH/oh-my-zsh.sh"
SOURCE_GUARD = r"source \$ZSH/oh-my-zsh\.sh"


class OhMyZshComponent(Component):
    name = "oh-my-zsh"
    kind = "shell-framework"
    critical = True
    requires = ("zsh",)
    install_requires = ("curl",)

    def is_present(self, ctx: BootstrapContext) -> bool:
        return path_exists(ctx.oh_my_zsh_dir, directory=True)

    def install_actions(self, ctx: BootstrapContext, workdir: Path) -> list[InstallAction]:
        url = shlex.quote(ctx.settings.oh_my_zsh_install_url)
        return [
            InstallAction(
                id="oh-my-zsh:install",
                description="Run the Oh My Zsh installer",
                shell=f'sh -c "$(curl -fsSL {url})"',
                # Don't launch zsh, don't overwrite the existing .zshrc
                env={
                    "RUNZSH": "no",
                    "KEEP_ZSHRC": "yes",
                    "ZSH": str(ctx.oh_my_zsh_dir),
                },
            )
        ]

    def registrations(self, ctx: BootstrapContext) -> list[Registration]:
        zsh_home = shell_path(ctx.settings.oh_my_zsh_dir)
        return [
            Registration(
                RC,
                PatternedSetting(
                    pattern=EXPORT_ZSH_PATTERN,
                    replacement=export_line(env_var=("ZSH", zsh_home)),
                ),
            ),
            Registration(RC, ExactLine(line=f'ZSH_THEME="{ctx.settings.theme}"')),
            Registration(
                RC,
                ExactLine(line=SOURCE_LINE, guard=SOURCE_GUARD, header=["# Load Oh My Zsh"]),
            ),
        ]
