"""Command values produced by the shell grammar.

A closed set of immutable value types, built fresh for each line and
consumed once by the shell. ``Query`` and ``Transact`` carry bodies in
the database's structured notation that may span several lines, so they
are never complete on their own; every other command is.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import ClassVar

HELP_COMMAND = "help"
OPEN_COMMAND = "open"
CLOSE_COMMAND = "close"


@dataclass(frozen=True)
class Command:
    """Base for all command values."""

    complete: ClassVar[bool] = True

    def is_complete(self) -> bool:
        """Whether the command can be executed without further input."""
        return self.complete


@dataclass(frozen=True)
class _ArgsCommand(Command):
    args: tuple[str, ...] = field(default=())

    def __init__(self, args: Sequence[str] = ()) -> None:
        object.__setattr__(self, "args", tuple(args))


@dataclass(frozen=True, init=False)
class Transact(_ArgsCommand):
    """Tokens of a transaction body."""

    complete: ClassVar[bool] = False


@dataclass(frozen=True, init=False)
class Query(_ArgsCommand):
    """Tokens of a query body."""

    complete: ClassVar[bool] = False


@dataclass(frozen=True, init=False)
class Help(_ArgsCommand):
    """``.help [token ...]``."""


@dataclass(frozen=True)
class Open(Command):
    """``.open <path>``."""

    path: str


@dataclass(frozen=True)
class Close(Command):
    """``.close``."""


def is_complete(cmd: Command) -> bool:
    """Return True if no more input is required to execute *cmd*."""
    return cmd.is_complete()
