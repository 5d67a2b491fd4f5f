"""
Shell line builders — canonical lines written to zsh config files.
"""

from __future__ import annotations


def shell_path(path: str) -> str:
    """Render a ``~``-relative path the way rc files spell it.

    ``~/.local/bin`` → ``$HOME/.local/bin``; other paths unchanged.
    """
    if path == "~":
        return "$HOME"
    if path.startswith("~/"):
        return "$HOME/" + path[2:]
    return path


def export_line(
    *,
    path_entry: str | None = None,
    env_var: tuple[str, str] | None = None,
) -> str:
    """Generate a POSIX PATH or env export line.

    Args:
        path_entry: Directory to prepend to PATH, e.g. ``"$HOME/.local/bin"``.
        env_var: Tuple of ``(name, value)`` e.g. ``("ZSH", "$HOME/.oh-my-zsh")``.

    Returns:
        Export line, or ``""`` when neither argument is given.
    """
    if path_entry:
        return f'export PATH="{path_entry}:$PATH"'
    if env_var:
        return f'export {env_var[0]}="{env_var[1]}"'
    return ""


def eval_line(command: str) -> str:
    """``eval "$(command)"`` — used for shellenv / prompt init hooks."""
    return f'eval "$({command})"'
