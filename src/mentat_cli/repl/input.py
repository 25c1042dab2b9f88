"""Line accumulation for the interactive shell.

Dot-prefixed lines go through the command grammar and are complete on
their own. Any other input starts a query or transaction body, which is
held here until its delimiters balance; lines typed while a body is
pending are appended to it verbatim, dot-prefixed or not.
"""

from __future__ import annotations

import logging
import re

from mentat_cli.domain.balance import is_balanced
from mentat_cli.domain.command import Command, Query, Transact
from mentat_cli.domain.parser import parse_command, tokenize

logger = logging.getLogger(__name__)

_QUERY_START = re.compile(r"^\s*[\[{]\s*:find\b")


def classify_body(text: str) -> type[Query] | type[Transact]:
    """Return :class:`Query` for ``[:find ...]``/``{:find ...}`` bodies, else :class:`Transact`."""
    if _QUERY_START.match(text):
        return Query
    return Transact


class InputReader:
    """Turns successive input lines into executable commands."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._kind: type[Query] | type[Transact] | None = None

    @property
    def is_pending(self) -> bool:
        """Whether a multi-line body is being accumulated."""
        return self._kind is not None

    def push(self, line: str) -> Command | None:
        """Feed one line.

        Returns a command once one is ready to execute, or None when the
        line was blank or a body still needs more input.

        Raises:
            CommandParseError: A dot-prefixed line failed to parse.
        """
        if self._kind is None:
            stripped = line.strip()
            if not stripped:
                return None
            if stripped.startswith("."):
                return parse_command(line)
            self._kind = classify_body(line)
            logger.debug("Started %s body", self._kind.__name__.lower())

        self._lines.append(line)
        text = "\n".join(self._lines)
        if not is_balanced(text):
            return None

        command = self._kind(tokenize(text))
        self.abandon()
        return command

    def abandon(self) -> None:
        """Discard any pending body."""
        if self._lines:
            logger.debug("Discarding %d pending line(s)", len(self._lines))
        self._lines = []
        self._kind = None
