"""
DesiredEntry models — the configuration effects a component wants.

Three variants, one ``ensure(file)`` method each:

    ExactLine         → append_if_missing
    PatternedSetting  → replace_or_append
    ListMembership    → ensure_list_member

``DesiredEntry`` is a tagged union on ``kind`` so entries can also be
declared in the envstrap YAML settings file.
"""

from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from envstrap.core.textedit.config_file import ConfigFile
from envstrap.core.textedit.primitives import (
    EnsureResult,
    append_if_missing,
    ensure_list_member,
    replace_or_append,
)


def _single_line(value: str, field: str) -> str:
    if "\n" in value or "\r" in value:
        raise ValueError(f"{field} must be a single line")
    return value


def _valid_regex(value: str, field: str) -> str:
    try:
        re.compile(value)
    except re.error as e:
        raise ValueError(f"{field} is not a valid regular expression: {e}") from e
    return value


class _Entry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("header", check_fields=False)
    @classmethod
    def _header_lines(cls, value: list[str]) -> list[str]:
        for line in value:
            _single_line(line, "header")
        return value


class ExactLine(_Entry):
    """A literal line that must exist verbatim."""

    kind: Literal["exact_line"] = "exact_line"
    line: str
    guard: str | None = None          # regex; a matching line also counts as present
    header: list[str] = Field(default_factory=list)

    @field_validator("line")
    @classmethod
    def _check_line(cls, value: str) -> str:
        return _single_line(value, "line")

    @field_validator("guard")
    @classmethod
    def _check_guard(cls, value: str | None) -> str | None:
        return _valid_regex(value, "guard") if value is not None else None

    def describe(self) -> str:
        return f"line {self.line!r}"

    def ensure(self, file: ConfigFile, dry_run: bool = False) -> EnsureResult:
        return append_if_missing(
            file,
            self.line,
            guard=self.guard,
            header=self.header,
            dry_run=dry_run,
            description=self.describe(),
        )


class PatternedSetting(_Entry):
    """A setting detected by regex and rewritten to a canonical line.

    The replacement must itself match the pattern, otherwise a second
    run would append it again.
    """

    kind: Literal["patterned_setting"] = "patterned_setting"
    pattern: str
    replacement: str

    @field_validator("pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        return _valid_regex(value, "pattern")

    @field_validator("replacement")
    @classmethod
    def _check_replacement(cls, value: str) -> str:
        return _single_line(value, "replacement")

    @model_validator(mode="after")
    def _replacement_matches(self) -> PatternedSetting:
        if not re.search(self.pattern, self.replacement):
            raise ValueError(
                f"replacement {self.replacement!r} does not match pattern {self.pattern!r}"
            )
        return self

    def describe(self) -> str:
        return f"setting {self.replacement!r}"

    def ensure(self, file: ConfigFile, dry_run: bool = False) -> EnsureResult:
        return replace_or_append(
            file,
            self.pattern,
            self.replacement,
            dry_run=dry_run,
            description=self.describe(),
        )


class ListMembership(_Entry):
    """A token that must be an element of a ``name=(...)`` list."""

    kind: Literal["list_membership"] = "list_membership"
    anchor: str                       # e.g. "plugins=("
    token: str
    header: list[str] = Field(default_factory=list)

    @field_validator("anchor")
    @classmethod
    def _check_anchor(cls, value: str) -> str:
        _single_line(value, "anchor")
        if not value.strip() or not value.endswith("("):
            raise ValueError(f"anchor must open a list and end with '(': {value!r}")
        return value

    @field_validator("token")
    @classmethod
    def _check_token(cls, value: str) -> str:
        if not value or any(c.isspace() for c in value) or any(c in value for c in "()#"):
            raise ValueError(f"token must be a single word: {value!r}")
        return value

    def describe(self) -> str:
        return f"{self.token} in {self.anchor}...)"

    def ensure(self, file: ConfigFile, dry_run: bool = False) -> EnsureResult:
        return ensure_list_member(
            file,
            self.anchor,
            self.token,
            header=self.header,
            dry_run=dry_run,
            description=self.describe(),
        )


DesiredEntry = Annotated[
    Union[ExactLine, PatternedSetting, ListMembership],
    Field(discriminator="kind"),
]
