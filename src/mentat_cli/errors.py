"""Exception types raised by mentat-cli.

Every error carries a human-readable ``message`` and is recoverable:
the shell prints it and keeps accepting input.
"""

from __future__ import annotations


class MentatCliError(Exception):
    """Base class for all mentat-cli errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class CommandParseError(MentatCliError):
    """A line could not be parsed as a dot-command."""


class StoreError(MentatCliError):
    """A store could not be opened."""
