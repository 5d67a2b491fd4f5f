"""
Tests for ConfigFile — line reads and atomic writes.
"""

import os
from pathlib import Path

import pytest

from envstrap.core.textedit.config_file import ConfigFile


class TestRead:
    def test_missing_file_reads_empty(self, tmp_path: Path):
        assert ConfigFile(tmp_path / "nope").read_lines() == []

    def test_lines_without_terminators(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_text("a\nb\r\nc")
        assert ConfigFile(path).read_lines() == ["a", "b", "c"]

    def test_only_newline_splits_lines(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_text("alias x='a\x0cb'\nPS1='\u2028'\n", encoding="utf-8")
        assert ConfigFile(path).read_lines() == ["alias x='a\x0cb'", "PS1='\u2028'"]

    def test_lone_carriage_return_stays_in_line(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_bytes(b"a\rb\n")
        assert ConfigFile(path).read_lines() == ["a\rb"]

    def test_tilde_expands_to_home(self, home: Path):
        assert ConfigFile("~/.zshrc").path == home / ".zshrc"

    def test_contains_line_is_whole_line(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_text("export FOO=1 # comment\n")
        file = ConfigFile(path)
        assert file.contains_line("export FOO=1 # comment")
        assert not file.contains_line("export FOO=1")

    def test_undecodable_bytes_survive_roundtrip(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_bytes(b"alias x='\xff'\n")
        file = ConfigFile(path)
        file.write_lines(file.read_lines() + ["new"])
        assert path.read_bytes() == b"alias x='\xff'\nnew\n"


class TestEnsureExists:
    def test_creates_parents_and_empty_file(self, tmp_path: Path):
        path = tmp_path / "a" / "b" / ".zprofile"
        assert ConfigFile(path).ensure_exists() is True
        assert path.read_text() == ""

    def test_existing_file_untouched(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_text("keep\n")
        assert ConfigFile(path).ensure_exists() is False
        assert path.read_text() == "keep\n"


class TestWrite:
    def test_single_trailing_newline(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        ConfigFile(path).write_lines(["one", "two"])
        assert path.read_text() == "one\ntwo\n"

    def test_empty_list_writes_empty_file(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_text("old\n")
        ConfigFile(path).write_lines([])
        assert path.read_text() == ""

    def test_no_temp_or_backup_left(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_text("x\n")
        ConfigFile(path).write_lines(["x", "y"])
        assert sorted(p.name for p in tmp_path.iterdir()) == [".zshrc"]

    def test_failed_write_cleans_up(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = tmp_path / ".zshrc"
        path.write_text("original\n")

        def boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", boom)
        with pytest.raises(OSError, match="disk full"):
            ConfigFile(path).write_lines(["new"])

        assert path.read_text() == "original\n"
        assert sorted(p.name for p in tmp_path.iterdir()) == [".zshrc"]

    def test_preserves_mode(self, tmp_path: Path):
        path = tmp_path / ".zshrc"
        path.write_text("x\n")
        path.chmod(0o600)
        ConfigFile(path).write_lines(["x", "y"])
        assert path.stat().st_mode & 0o777 == 0o600

    def test_symlink_kept_and_target_rewritten(self, tmp_path: Path):
        real = tmp_path / "dotfiles" / "zshrc"
        real.parent.mkdir()
        real.write_text("x\n")
        link = tmp_path / ".zshrc"
        link.symlink_to(real)

        ConfigFile(link).write_lines(["x", "y"])

        assert link.is_symlink()
        assert real.read_text() == "x\ny\n"
