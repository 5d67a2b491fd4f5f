"""
Installers — the only code that shells out to external tools.
"""

from envstrap.adapters.base import Installer
from envstrap.adapters.mock import MockInstaller
from envstrap.adapters.shell.command import ShellInstaller

__all__ = ["Installer", "MockInstaller", "ShellInstaller"]
