"""
Tests for host checks and shell line builders.
"""

from pathlib import Path

import pytest

from envstrap.core import detection
from envstrap.core.errors import BootstrapError, ConfigIOError, InstallError, PreconditionError
from envstrap.core.textedit.shell_lines import eval_line, export_line, shell_path


class TestDetectOS:
    @pytest.mark.parametrize(
        ("system", "expected"),
        [("Darwin", "macos"), ("Linux", "linux"), ("Windows", "unsupported")],
    )
    def test_mapping(self, monkeypatch: pytest.MonkeyPatch, system: str, expected: str):
        monkeypatch.setattr(detection.platform, "system", lambda: system)
        assert detection.detect_os() == expected


class TestCommands:
    def test_command_exists(self, fake_bin):
        fake_bin("zsh")
        assert detection.command_exists("zsh")
        assert not detection.command_exists("curl")

    def test_missing_commands_keeps_order(self, fake_bin):
        fake_bin("curl")
        assert detection.missing_commands(("zsh", "curl", "git")) == ["zsh", "git"]

    def test_is_executable(self, tmp_path: Path):
        script = tmp_path / "tool"
        script.write_text("#!/bin/sh\n")
        assert not detection.is_executable(script)
        script.chmod(0o755)
        assert detection.is_executable(script)
        assert not detection.is_executable(tmp_path)

    def test_path_exists_expands_home(self, home: Path):
        (home / ".oh-my-zsh").mkdir()
        assert detection.path_exists("~/.oh-my-zsh")
        assert not detection.path_exists("~/.missing")

    def test_path_exists_directory_only(self, home: Path):
        (home / ".zshrc").write_text("")
        assert detection.path_exists("~/.zshrc")
        assert not detection.path_exists("~/.zshrc", directory=True)
        assert detection.path_exists("~", directory=True)


class TestShellLines:
    def test_shell_path(self):
        assert shell_path("~/.local/bin") == "$HOME/.local/bin"
        assert shell_path("~") == "$HOME"
        assert shell_path("/opt/bin") == "/opt/bin"

    def test_export_lines(self):
        assert export_line(path_entry="$HOME/.local/bin") == 'export PATH="$HOME/.local/bin:$PATH"'
        assert export_line(env_var=("ZSH", "$HOME/.oh-my-zsh")) == 'export ZSH="$HOME/.oh-my-zsh"'
        assert export_line() == ""

    def test_eval_line(self):
        assert eval_line("starship init zsh") == 'eval "$(starship init zsh)"'


class TestErrors:
    @pytest.mark.parametrize(
        ("cls", "kind"),
        [(PreconditionError, "precondition"), (InstallError, "install"), (ConfigIOError, "io")],
    )
    def test_kinds(self, cls, kind: str):
        error = cls("boom", component="oh-my-zsh")
        assert isinstance(error, BootstrapError)
        assert error.to_dict() == {"kind": kind, "error": "boom", "component": "oh-my-zsh"}
