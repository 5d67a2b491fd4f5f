"""
Environment components, in pipeline order.
"""

from envstrap.core.components.base import (
    PROFILE,
    RC,
    BootstrapContext,
    Component,
    Registration,
    run_actions,
)
from envstrap.core.components.font import FiraCodeFontComponent
from envstrap.core.components.homebrew import HomebrewComponent
from envstrap.core.components.oh_my_zsh import OhMyZshComponent
from envstrap.core.components.starship import StarshipComponent
from envstrap.core.components.syntax_highlighting import SyntaxHighlightingComponent

# Name under which settings.extra_entries are reported.
CUSTOM = "custom"


def build_components() -> list[Component]:
    """The built-in components in their fixed execution order.

    Homebrew comes first so later steps (the macOS font cask) find
    ``brew`` on PATH; the plugin needs Oh My Zsh's custom dir.
    """
    return [
        HomebrewComponent(),
        OhMyZshComponent(),
        SyntaxHighlightingComponent(),
        StarshipComponent(),
        FiraCodeFontComponent(),
    ]


def component_names() -> list[str]:
    return [c.name for c in build_components()]


__all__ = [
    "CUSTOM",
    "PROFILE",
    "RC",
    "BootstrapContext",
    "Component",
    "FiraCodeFontComponent",
    "HomebrewComponent",
    "OhMyZshComponent",
    "Registration",
    "StarshipComponent",
    "SyntaxHighlightingComponent",
    "build_components",
    "component_names",
    "run_actions",
]
