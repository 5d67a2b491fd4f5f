"""
Detection — read-only checks of the host.

These functions READ system state but never WRITE.
"""

from __future__ import annotations

import os
import platform
import shutil
from pathlib import Path

MACOS = "macos"
LINUX = "linux"
UNSUPPORTED = "unsupported"

_SYSTEM_MAP = {"Darwin": MACOS, "Linux": LINUX}


def detect_os() -> str:
    """``macos`` | ``linux`` | ``unsupported`` from ``platform.system()``."""
    return _SYSTEM_MAP.get(platform.system(), UNSUPPORTED)


def command_exists(name: str) -> bool:
    """Whether ``name`` resolves on the current search path."""
    return shutil.which(name) is not None


def missing_commands(names: tuple[str, ...] | list[str]) -> list[str]:
    """Subset of ``names`` that are not on the search path, in order."""
    return [n for n in names if not command_exists(n)]


def path_exists(path: str | Path, *, directory: bool = False) -> bool:
    """Whether ``path`` exists (``~`` expanded); ``directory`` demands a dir."""
    p = Path(os.path.expanduser(str(path)))
    return p.is_dir() if directory else p.exists()


def is_executable(path: str | Path) -> bool:
    p = Path(os.path.expanduser(str(path)))
    return p.is_file() and os.access(p, os.X_OK)
