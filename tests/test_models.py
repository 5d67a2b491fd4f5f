"""
Tests for pydantic models — entries, install actions, receipts.
"""

from pathlib import Path

import pytest
from pydantic import TypeAdapter, ValidationError

from envstrap.core.models import (
    DesiredEntry,
    ExactLine,
    InstallAction,
    ListMembership,
    PatternedSetting,
    Receipt,
)
from envstrap.core.textedit import ConfigFile


class TestDesiredEntry:
    def test_discriminated_by_kind(self):
        adapter = TypeAdapter(DesiredEntry)
        entry = adapter.validate_python(
            {"kind": "list_membership", "anchor": "plugins=(", "token": "git"}
        )
        assert isinstance(entry, ListMembership)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(DesiredEntry).validate_python({"kind": "nope", "line": "x"})

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            ExactLine(line="x", colour="red")

    def test_entries_are_frozen(self):
        entry = ExactLine(line="x")
        with pytest.raises(ValidationError):
            entry.line = "y"


class TestExactLine:
    def test_multiline_rejected(self):
        with pytest.raises(ValidationError, match="single line"):
            ExactLine(line="a\nb")

    def test_bad_guard_rejected(self):
        with pytest.raises(ValidationError, match="regular expression"):
            ExactLine(line="x", guard="(")

    def test_ensure_delegates(self, tmp_path: Path):
        file = ConfigFile(tmp_path / ".zshrc")
        result = ExactLine(line="x", header=["# h"]).ensure(file)
        assert result.changed
        assert file.read_lines() == ["# h", "x"]


class TestPatternedSetting:
    def test_replacement_must_match_pattern(self):
        with pytest.raises(ValidationError, match="does not match"):
            PatternedSetting(pattern=r"^export ZSH=", replacement="ZSH=/x")

    def test_valid(self):
        entry = PatternedSetting(
            pattern=r"^\s*export\s+ZSH=.*$", replacement='export ZSH="$HOME/.oh-my-zsh"'
        )
        assert entry.kind == "patterned_setting"


class TestListMembership:
    @pytest.mark.parametrize("anchor", ["plugins=", "", "plugins=(\n"])
    def test_bad_anchor(self, anchor: str):
        with pytest.raises(ValidationError):
            ListMembership(anchor=anchor, token="git")

    @pytest.mark.parametrize("token", ["", "two words", "a)", "#x"])
    def test_bad_token(self, token: str):
        with pytest.raises(ValidationError):
            ListMembership(anchor="plugins=(", token=token)


class TestInstallAction:
    def test_needs_exactly_one_command(self):
        with pytest.raises(ValidationError):
            InstallAction(id="x:y")
        with pytest.raises(ValidationError):
            InstallAction(id="x:y", argv=["true"], shell="true")

    def test_empty_argv_rejected(self):
        with pytest.raises(ValidationError):
            InstallAction(id="x:y", argv=[])

    def test_command_text(self):
        assert InstallAction(id="a", argv=["git", "clone", "u"]).command_text == "git clone u"
        assert InstallAction(id="b", shell="curl u | sh").command_text == "curl u | sh"


class TestReceipt:
    def test_success(self):
        r = Receipt.success(installer="mock", action_id="a", output="done")
        assert r.ok and not r.failed and not r.skipped

    def test_failure(self):
        r = Receipt.failure(installer="mock", action_id="a", error="boom")
        assert r.failed
        assert r.error == "boom"

    def test_skip_keeps_reason(self):
        r = Receipt.skip(installer="mock", action_id="a", reason="already installed")
        assert r.skipped
        assert r.output == "already installed"

    def test_json_dump(self):
        data = Receipt.success(installer="shell", action_id="a").model_dump(mode="json")
        assert data["status"] == "ok"
        assert isinstance(data["started_at"], str)
