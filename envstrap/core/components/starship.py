"""
Starship — the prompt, installed into a user bin dir (no sudo, no
/usr/local/bin).
"""

from __future__ import annotations

import shlex
from pathlib import Path

from envstrap.core.components.base import (
    PROFILE,
    RC,
    BootstrapContext,
    Component,
    Registration,
)
from envstrap.core.detection import command_exists, is_executable
from envstrap.core.models.action import InstallAction
from envstrap.core.models.entry import ExactLine
from envstrap.core.textedit.shell_lines import eval_line, export_line, shell_path

INIT_COMMAND = "starship init zsh"


class StarshipComponent(Component):
    name = "starship"
    kind = "prompt"
    install_requires = ("curl", "sh")

    def is_present(self, ctx: BootstrapContext) -> bool:
        return command_exists("starship") or is_executable(ctx.starship_bin_dir / "starship")

    def prepare(self, ctx: BootstrapContext) -> None:
        ctx.starship_bin_dir.mkdir(parents=True, exist_ok=True)

    def install_actions(self, ctx: BootstrapContext, workdir: Path) -> list[InstallAction]:
        url = shlex.quote(ctx.settings.starship_install_url)
        bin_dir = shlex.quote(str(ctx.starship_bin_dir))
        return [
            InstallAction(
                id="starship:install",
                description=f"Install Starship to {ctx.starship_bin_dir}",
                shell=f"curl -sS {url} | sh -s -- -y -b {bin_dir}",
            )
        ]

    def registrations(self, ctx: BootstrapContext) -> list[Registration]:
        path_line = export_line(path_entry=shell_path(ctx.settings.starship_bin_dir))
        return [
            # Bin dir on PATH for both login and interactive shells
            Registration(PROFILE, ExactLine(line=path_line)),
            Registration(RC, ExactLine(line=path_line)),
            Registration(
                RC,
                ExactLine(
                    line=eval_line(INIT_COMMAND),
                    guard=INIT_COMMAND,
                    header=["# Starship prompt"],
                ),
                gated=True,
            ),
        ]
