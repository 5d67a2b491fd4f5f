"""
ConfigFile — a line-oriented shell configuration file.

Reads split the file into lines without terminators. Writes are
atomic (write to temp file, then rename) so an interrupted run never
leaves a truncated ``~/.zshrc`` behind, and no backup or temp file
survives the write.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

# Round-trip undecodable bytes instead of failing on foreign content.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class ConfigFile:
    """Handle on one configuration file, identified by its path."""

    def __init__(self, path: str | Path):
        self.path = Path(os.path.expanduser(str(path)))

    def __repr__(self) -> str:
        return f"<ConfigFile {str(self.path)!r}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigFile):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def ensure_exists(self) -> bool:
        """Create parent directories and an empty file if needed.

        Returns:
            True if the file was created.
        """
        if self.path.is_file():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch()
        logger.info("Created %s", self.path)
        return True

    def read_lines(self) -> list[str]:
        """Return the file's lines. A missing file reads as empty.

        Only ``\\n`` separates lines; form feeds and other Unicode line
        breaks stay inside the line they belong to. A ``\\r`` before the
        ``\\n`` is dropped, so CRLF files are rewritten with LF endings.
        """
        if not self.path.is_file():
            return []
        with self.path.open(encoding=_ENCODING, errors=_ERRORS, newline="") as f:
            text = f.read()
        if not text:
            return []
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    def contains_line(self, line: str) -> bool:
        """Whole-line, exact match."""
        return line in self.read_lines()

    def write_lines(self, lines: list[str]) -> None:
        """Replace the file content atomically.

        The target is resolved first so a symlinked rc file (dotfile
        managers) keeps its link and the real file is rewritten.
        """
        target = self.path.resolve() if self.path.is_symlink() else self.path
        target.parent.mkdir(parents=True, exist_ok=True)

        content = "\n".join(lines) + "\n" if lines else ""

        fd, tmp_path = tempfile.mkstemp(
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with os.fdopen(fd, "w", encoding=_ENCODING, errors=_ERRORS, newline="\n") as f:
                f.write(content)
            if target.exists():
                shutil.copymode(target, tmp)
            os.replace(tmp, target)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d lines to %s", len(lines), target)
