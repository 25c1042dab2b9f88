"""Root CLI command for mentat-cli."""

from __future__ import annotations

import click

from mentat_cli import __version__
from mentat_cli.config.logging import configure_logging
from mentat_cli.config.settings import MentatSettings
from mentat_cli.plugins.manager import PluginManager
from mentat_cli.repl.loop import Repl
from mentat_cli.services.shell import ShellService


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="mentat-cli")
@click.option("-d", "--db", "db_path", default=None, help="Open this database on startup.")
@click.option(
    "-e",
    "--execute",
    "lines",
    multiple=True,
    help="Run this line and exit instead of starting the shell. Repeatable.",
)
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
def cli(
    db_path: str | None,
    lines: tuple[str, ...],
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """mentat-cli — interactive shell for a Mentat store.

    Lines starting with a dot are shell commands (.help, .open, .close).
    Anything else is a query or transaction, read until its brackets
    balance.
    """
    # Unset flags must not shadow MENTAT_* or mentat.toml values.
    flags = {"json_output": json_output, "quiet": quiet, "verbose": verbose, "log_json": log_json}
    settings = MentatSettings.from_cli(
        config_path=config_path,
        **{name: value for name, value in flags.items() if value},
    )
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    plugins = PluginManager()
    if settings.plugins.enabled:
        plugins.discover_and_load()

    repl = Repl(ShellService(settings, plugins), settings)

    startup_db = db_path or settings.store.default_path
    if startup_db:
        result = repl.service.open(startup_db)
        if not result.ok:
            repl.emit(result)
            raise SystemExit(1)

    if lines:
        repl.run_lines(lines)
        if repl.failures:
            raise SystemExit(1)
        return

    repl.run()
