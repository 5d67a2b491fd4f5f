"""
Idempotent text mutations over a ConfigFile.

Three primitives, each a full read-modify-write cycle:

    append_if_missing   — literal line present exactly once
    replace_or_append   — first regex match rewritten, else appended
    ensure_list_member  — token present in a ``name=(a b c)`` list

Every primitive returns an ``EnsureResult`` and writes nothing when
the desired state already holds, so running any of them twice leaves
the file exactly as running it once did. I/O errors propagate as
``OSError``; the caller decides whether they are fatal.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from envstrap.core.textedit.config_file import ConfigFile

logger = logging.getLogger(__name__)

UNCHANGED = "unchanged"
APPENDED = "appended"
REPLACED = "replaced"
INSERTED = "inserted"

_VERBS = {APPENDED: "append", REPLACED: "replace", INSERTED: "insert"}


@dataclass(frozen=True)
class EnsureResult:
    """Outcome of one primitive against one file."""

    path: str
    action: str
    line: str
    description: str = ""
    dry_run: bool = False

    @property
    def changed(self) -> bool:
        return self.action != UNCHANGED

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "action": self.action,
            "changed": self.changed,
            "line": self.line,
            "description": self.description,
            "dry_run": self.dry_run,
        }


def _separated(lines: list[str], header: Sequence[str]) -> list[str]:
    """Header block to place before an appended line.

    A blank line keeps the block apart from preceding content.
    """
    if not header:
        return []
    block: list[str] = []
    if lines and lines[-1].strip():
        block.append("")
    block.extend(header)
    return block


def _commit(
    file: ConfigFile,
    lines: list[str],
    *,
    action: str,
    line: str,
    description: str,
    dry_run: bool,
) -> EnsureResult:
    if dry_run:
        logger.info("[dry-run] Would %s in %s: %s", _VERBS[action], file.path, line)
    else:
        file.ensure_exists()
        file.write_lines(lines)
        logger.info("%s %s: %s", action.capitalize(), file.path, line)
    return EnsureResult(
        path=str(file.path),
        action=action,
        line=line,
        description=description,
        dry_run=dry_run,
    )


def _unchanged(file: ConfigFile, line: str, description: str, dry_run: bool) -> EnsureResult:
    logger.debug("Already present in %s: %s", file.path, line)
    return EnsureResult(
        path=str(file.path),
        action=UNCHANGED,
        line=line,
        description=description,
        dry_run=dry_run,
    )


# ── Append-if-missing ───────────────────────────────────────────


def append_if_missing(
    file: ConfigFile,
    line: str,
    *,
    guard: str | re.Pattern[str] | None = None,
    header: Sequence[str] = (),
    dry_run: bool = False,
    description: str = "",
) -> EnsureResult:
    """Ensure ``line`` exists verbatim; append it at end-of-file if not.

    Args:
        file: Target file (created with its parent dirs if missing).
        line: Literal line, matched as a whole line.
        guard: Optional regex; any matching line also counts as present.
        header: Comment lines written just before ``line`` when appended.
        dry_run: Compute the result without touching the filesystem.
    """
    description = description or f"line {line!r}"

    if file.contains_line(line):
        return _unchanged(file, line, description, dry_run)
    lines = file.read_lines()
    if guard is not None:
        regex = re.compile(guard) if isinstance(guard, str) else guard
        if any(regex.search(existing) for existing in lines):
            return _unchanged(file, line, description, dry_run)

    new_lines = lines + _separated(lines, header) + [line]
    return _commit(
        file, new_lines,
        action=APPENDED, line=line, description=description, dry_run=dry_run,
    )


# ── Replace-or-append ───────────────────────────────────────────


def replace_or_append(
    file: ConfigFile,
    pattern: str | re.Pattern[str],
    replacement: str,
    *,
    dry_run: bool = False,
    description: str = "",
) -> EnsureResult:
    """Rewrite the first line matching ``pattern``; append if none match.

    Only the first match is touched. Later matching lines stay as
    they are: the first writer wins, there is no normalization pass.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    lines = file.read_lines()
    description = description or f"setting /{regex.pattern}/"

    for i, existing in enumerate(lines):
        if not regex.search(existing):
            continue
        if existing == replacement:
            return _unchanged(file, replacement, description, dry_run)
        logger.debug("Replacing %r with %r in %s", existing, replacement, file.path)
        lines[i] = replacement
        return _commit(
            file, lines,
            action=REPLACED, line=replacement, description=description, dry_run=dry_run,
        )

    return _commit(
        file, lines + [replacement],
        action=APPENDED, line=replacement, description=description, dry_run=dry_run,
    )


# ── List membership ─────────────────────────────────────────────


def _list_members(first: str, following: Sequence[str]) -> list[str]:
    """Collect the words of a ``(...)`` list body.

    ``first`` is the text right after the opening parenthesis. Lists
    that do not close on the anchor line continue into ``following``.
    A word starting with ``#`` comments out the rest of its line, so a
    ``)`` inside a comment does not close the list.
    """
    members: list[str] = []
    for segment in [first, *following]:
        for word in segment.split():
            if word.startswith("#"):
                break
            if ")" in word:
                head = word.split(")", 1)[0].strip("'\"")
                if head:
                    members.append(head)
                return members
            members.append(word.strip("'\""))
    return members


def ensure_list_member(
    file: ConfigFile,
    anchor: str,
    token: str,
    *,
    header: Sequence[str] = (),
    dry_run: bool = False,
    description: str = "",
) -> EnsureResult:
    """Ensure ``token`` is an element of the list opened by ``anchor``.

    Args:
        file: Target file.
        anchor: Literal prefix opening the list, e.g. ``"plugins=("``.
        token: Element to ensure. Matched as a whole word, so
            ``foo-extra`` does not count as ``foo``.
        header: Comment lines written before a newly created list line.

    Missing anchor line → ``anchor + token + ")"`` is appended.
    Present anchor line without the token → the token becomes the
    first element. Only the first anchor line is considered.
    """
    lines = file.read_lines()
    description = description or f"{token} in {anchor}...)"

    for i, existing in enumerate(lines):
        stripped = existing.lstrip()
        if not stripped.startswith(anchor):
            continue

        body = stripped[len(anchor):]
        if token in _list_members(body, lines[i + 1:]):
            return _unchanged(file, existing, description, dry_run)

        indent = existing[: len(existing) - len(stripped)]
        rest = body.lstrip()
        sep = "" if not rest or rest.startswith(")") else " "
        lines[i] = f"{indent}{anchor}{token}{sep}{rest}"
        return _commit(
            file, lines,
            action=INSERTED, line=lines[i], description=description, dry_run=dry_run,
        )

    new_line = f"{anchor}{token})"
    new_lines = lines + _separated(lines, header) + [new_line]
    return _commit(
        file, new_lines,
        action=APPENDED, line=new_line, description=description, dry_run=dry_run,
    )
