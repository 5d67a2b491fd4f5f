"""
BootstrapSettings — everything a run can be configured with.

Loaded from an optional YAML file (see ``envstrap.core.config.loader``).
Every field has a default, so an absent file means "the stock setup":
Oh My Zsh + zsh-syntax-highlighting + Starship + FiraCode Nerd Font.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from envstrap.core.models.entry import DesiredEntry


class CustomEntry(BaseModel):
    """A user-declared entry applied after the built-in components."""

    model_config = ConfigDict(extra="forbid")

    file: Literal["rc", "profile"] = "rc"
    entry: DesiredEntry


class BootstrapSettings(BaseModel):
    """Root settings model."""

    model_config = ConfigDict(extra="forbid")

    # ── Configuration files ─────────────────────────────────────
    rc_file: str = "~/.zshrc"
    profile_file: str = "~/.zprofile"

    # ── Oh My Zsh ───────────────────────────────────────────────
    oh_my_zsh_dir: str = "~/.oh-my-zsh"
    oh_my_zsh_install_url: str = (
        "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"
    )
    theme: str = "robbyrussell"

    # ── Plugin ──────────────────────────────────────────────────
    plugin: str = "zsh-syntax-highlighting"
    plugin_repo: str = "https://github.com/zsh-users/zsh-syntax-highlighting.git"

    # ── Homebrew (macOS) ────────────────────────────────────────
    homebrew_install_url: str = (
        "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
    )

    # ── Starship ────────────────────────────────────────────────
    starship_install_url: str = "https://starship.rs/install.sh"
    starship_bin_dir: str = "~/.local/bin"

    # ── Font ────────────────────────────────────────────────────
    font_url: str = (
        "https://github.com/ryanoasis/nerd-fonts/releases/latest/download/FiraCode.zip"
    )
    font_dir: str = "~/.local/share/fonts"
    font_tap: str = "homebrew/cask-fonts"
    font_cask: str = "font-fira-code-nerd-font"

    # ── Selection ───────────────────────────────────────────────
    skip: list[str] = Field(default_factory=list)
    extra_entries: list[CustomEntry] = Field(default_factory=list)
