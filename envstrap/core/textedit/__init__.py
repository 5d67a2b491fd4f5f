"""
Text-mutation engine — idempotent edits to line-oriented config files.
"""

from envstrap.core.textedit.config_file import ConfigFile
from envstrap.core.textedit.primitives import (
    APPENDED,
    INSERTED,
    REPLACED,
    UNCHANGED,
    EnsureResult,
    append_if_missing,
    ensure_list_member,
    replace_or_append,
)

__all__ = [
    "APPENDED",
    "ConfigFile",
    "EnsureResult",
    "INSERTED",
    "REPLACED",
    "UNCHANGED",
    "append_if_missing",
    "ensure_list_member",
    "replace_or_append",
]
