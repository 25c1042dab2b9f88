"""Grammar for shell dot-commands.

::

    line    := ws* '.' keyword ws* args? ws* EOF
    keyword := "help" | "open" | "close"
    args    := token (ws+ token)*
    token   := (non-whitespace char)+

Alternatives are tried in the order help, open, close. No keyword is a
prefix of another, so at most one alternative can match a line. Argument
errors for ``open`` are reported with their own message; any argument
given to ``close`` makes the whole line invalid instead.

Pure functions, no state between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from mentat_cli.domain.command import (
    CLOSE_COMMAND,
    HELP_COMMAND,
    OPEN_COMMAND,
    Close,
    Command,
    Help,
    Open,
)
from mentat_cli.errors import CommandParseError

logger = logging.getLogger(__name__)

_SIMPLE_ESCAPES: dict[str, str] = {
    '"': '\\"',
    "\\": "\\\\",
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\0": "\\0",
}


class _NoMatch(Exception):
    """The alternative does not match; the line is reported as invalid."""


def debug_quote(value: str) -> str:
    """Quote *value* the way a debug formatter renders a string.

    ``debug_quote('a "b"')`` returns ``'"a \\"b\\""'``.
    """
    out: list[str] = ['"']
    for ch in value:
        escaped = _SIMPLE_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ch.isprintable():
            out.append(ch)
        else:
            out.append(f"\\u{{{ord(ch):x}}}")
    out.append('"')
    return "".join(out)


def tokenize(text: str) -> list[str]:
    """Split *text* into maximal runs of non-whitespace characters."""
    return text.split()


def _help(args: Sequence[str]) -> Command:
    return Help(args)


def _open(args: Sequence[str]) -> Command:
    if len(args) < 1:
        raise CommandParseError("Missing required argument")
    if len(args) > 1:
        raise CommandParseError(f"Unrecognized argument {debug_quote(args[1])}")
    return Open(args[0])


def _close(args: Sequence[str]) -> Command:
    if args:
        raise _NoMatch
    return Close()


_ALTERNATIVES: tuple[tuple[str, Callable[[Sequence[str]], Command]], ...] = (
    (HELP_COMMAND, _help),
    (OPEN_COMMAND, _open),
    (CLOSE_COMMAND, _close),
)


def parse_command(line: str) -> Command:
    """Parse one raw input line into a :class:`Command`.

    Raises:
        CommandParseError: The line is not a valid dot-command. The
            message quotes the untrimmed *line* for unrecognised input.
    """
    invalid = CommandParseError(f"Invalid command {debug_quote(line)}")

    text = line.lstrip()
    if not text.startswith("."):
        raise invalid
    text = text[1:]

    for keyword, build in _ALTERNATIVES:
        if not text.startswith(keyword):
            continue
        try:
            command = build(tokenize(text[len(keyword) :]))
        except _NoMatch:
            break
        logger.debug("Parsed command %r", command)
        return command

    raise invalid
