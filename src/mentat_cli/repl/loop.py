"""The read-parse-dispatch loop.

Each line goes through :class:`InputReader`. Parse errors are printed
and the line is dropped; complete commands are executed by the
:class:`ShellService` and rendered. While a query or transaction body
is still open, the continuation prompt is shown instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

import click

from mentat_cli.errors import CommandParseError
from mentat_cli.output.formatters import OutputSettings, format_result
from mentat_cli.repl.input import InputReader

if TYPE_CHECKING:
    from mentat_cli.config.settings import MentatSettings
    from mentat_cli.services.result import ServiceResult
    from mentat_cli.services.shell import ShellService

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str]
Write = Callable[[str, bool], None]

INCOMPLETE_INPUT = "Incomplete input at end of session"


def _prompt(prompt: str) -> str:
    # click.prompt turns Ctrl-C into Abort; read directly so it reaches run().
    return click.termui.visible_prompt_func(prompt)


def _echo(text: str, err: bool) -> None:
    click.echo(text, err=err)


class Repl:
    """Interactive shell session bound to one ShellService."""

    def __init__(
        self,
        service: ShellService,
        settings: MentatSettings,
        *,
        read_line: ReadLine | None = None,
        write: Write | None = None,
    ) -> None:
        self.service = service
        self.settings = settings
        self.reader = InputReader()
        self.failures = 0
        self._read_line = read_line or _prompt
        self._write = write or _echo
        self._output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )

    @property
    def prompt(self) -> str:
        if self.reader.is_pending:
            return self.settings.repl.continuation_prompt
        return self.settings.repl.prompt

    def handle_line(self, line: str) -> ServiceResult | None:
        """Process one line of input.

        Returns the result of the command the line completed, or None
        if nothing was executed.
        """
        try:
            command = self.reader.push(line)
        except CommandParseError as exc:
            self.failures += 1
            self._write(exc.message, True)
            return None
        if command is None:
            return None

        result = self.service.execute(command)
        self.emit(result)
        return result

    def emit(self, result: ServiceResult) -> None:
        """Render *result*: successes to stdout, failures to stderr."""
        output = format_result(result, settings=self._output)
        if result.ok:
            if output:
                self._write(output, False)
            if not self._output.json_output:
                for warning in result.warnings:
                    self._write(f"WARNING: {warning}", True)
        else:
            self.failures += 1
            self._write(output, True)

    def run(self) -> None:
        """Read lines until end of input, then close the store.

        Ctrl-C drops the pending body and returns to the main prompt.
        """
        try:
            while True:
                try:
                    line = self._read_line(self.prompt)
                except KeyboardInterrupt:
                    self.reader.abandon()
                    self._write("", False)
                    continue
                except (EOFError, click.Abort):
                    break
                self.handle_line(line)
        finally:
            self._finish()

    def run_lines(self, lines: Iterable[str]) -> None:
        """Feed *lines* non-interactively, then close the store.

        A body still open after the last line counts as a failure.
        """
        try:
            for line in lines:
                self.handle_line(line)
        finally:
            self._finish(strict=True)

    def _finish(self, *, strict: bool = False) -> None:
        if self.reader.is_pending:
            self.reader.abandon()
            if strict:
                self.failures += 1
                self._write(INCOMPLETE_INPUT, True)
            else:
                logger.warning("Discarding incomplete input at end of session")
        self.service.shutdown()
