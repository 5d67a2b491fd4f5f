"""
Shared test fixtures and configuration.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from envstrap.core.components.base import BootstrapContext
from envstrap.core.detection import LINUX
from envstrap.core.models.settings import BootstrapSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own settings and logging env out of tests."""
    for var in (
        "ENVSTRAP_CONFIG",
        "ENVSTRAP_LOG_LEVEL",
        "ENVSTRAP_LOG_FILE",
        "ENVSTRAP_LOG_FILE_LEVEL",
        "ZSH_CUSTOM",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A throwaway $HOME; ``~`` expands into it."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def fake_bin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[..., Path]:
    """Replace PATH with an empty bin dir; call the fixture to add tools.

        fake_bin("zsh", "curl")
    """
    bin_dir = tmp_path / "fake-bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))

    def add(*names: str) -> Path:
        for name in names:
            tool = bin_dir / name
            tool.write_text("#!/bin/sh\nexit 0\n")
            tool.chmod(0o755)
        return bin_dir

    return add


@pytest.fixture
def make_ctx(home: Path) -> Callable[..., BootstrapContext]:
    """Build a BootstrapContext rooted in the temporary $HOME."""

    def make(os_name: str = LINUX, dry_run: bool = False, **overrides) -> BootstrapContext:
        settings = BootstrapSettings(**overrides)
        return BootstrapContext.from_settings(settings, os_name=os_name, dry_run=dry_run)

    return make
