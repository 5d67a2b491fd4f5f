"""
Homebrew — package manager bootstrap (macOS only).
"""

from __future__ import annotations

import logging
import os
import shlex
from pathlib import Path

from envstrap.core.components.base import PROFILE, BootstrapContext, Component, Registration
from envstrap.core.detection import MACOS, command_exists, is_executable
from envstrap.core.models.action import InstallAction
from envstrap.core.models.entry import ExactLine
from envstrap.core.textedit.shell_lines import eval_line

logger = logging.getLogger(__name__)

# Apple Silicon first, then Intel.
BREW_PREFIXES = ("/opt/homebrew", "/usr/local")


def find_brew() -> Path | None:
    """Path of the brew binary under a standard prefix, if any."""
    for prefix in BREW_PREFIXES:
        candidate = Path(prefix) / "bin" / "brew"
        if is_executable(candidate):
            return candidate
    return None


class HomebrewComponent(Component):
    name = "homebrew"
    kind = "package-manager"
    platforms = (MACOS,)
    install_requires = ("curl",)

    def is_present(self, ctx: BootstrapContext) -> bool:
        return command_exists("brew") or find_brew() is not None

    def install_actions(self, ctx: BootstrapContext, workdir: Path) -> list[InstallAction]:
        url = shlex.quote(ctx.settings.homebrew_install_url)
        return [
            InstallAction(
                id="homebrew:install",
                description="Run the Homebrew installer",
                shell=f'/bin/bash -c "$(curl -fsSL {url})"',
                env={"NONINTERACTIVE": "1"},
            )
        ]

    def activate(self, ctx: BootstrapContext) -> None:
        # Equivalent of `eval "$(brew shellenv)"` for the rest of this run.
        brew = find_brew()
        if brew is None or command_exists("brew"):
            return
        bin_dir = str(brew.parent)
        os.environ["PATH"] = os.pathsep.join([bin_dir, os.environ.get("PATH", "")])
        logger.info("Added %s to PATH for this run", bin_dir)

    def registrations(self, ctx: BootstrapContext) -> list[Registration]:
        brew = find_brew()
        if brew is None:
            if command_exists("brew"):
                logger.warning(
                    "brew found on PATH but not under %s; not adding shellenv to the profile",
                    " or ".join(BREW_PREFIXES),
                )
            return []
        return [
            Registration(PROFILE, ExactLine(line=eval_line(f"{brew} shellenv")), gated=True)
        ]
