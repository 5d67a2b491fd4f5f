"""envstrap — idempotent zsh environment bootstrapper."""

__version__ = "0.1.0"
