"""ShellService — executes parsed commands against the current store.

The service owns the single open :class:`Store`. ``.open``/``.close``
manage it directly; query and transaction bodies are handed to the
engine plugins through the ``execute_query``/``execute_transact`` hooks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mentat_cli.domain.command import (
    CLOSE_COMMAND,
    HELP_COMMAND,
    OPEN_COMMAND,
    Close,
    Command,
    Help,
    Open,
    Query,
    Transact,
)
from mentat_cli.config.logging import bind_store, unbind_store
from mentat_cli.domain.parser import debug_quote
from mentat_cli.errors import StoreError
from mentat_cli.infrastructure.store import Store
from mentat_cli.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mentat_cli.config.settings import MentatSettings
    from mentat_cli.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

# name -> (usage, description)
COMMAND_HELP: dict[str, tuple[str, str]] = {
    f".{HELP_COMMAND}": ("[COMMAND ...]", "Show help for all commands, or only the named ones."),
    f".{OPEN_COMMAND}": ("PATH", "Open the database at PATH (':memory:' for a scratch store)."),
    f".{CLOSE_COMMAND}": ("", "Close the current database."),
}


class ShellService:
    """Executes commands for one shell session."""

    def __init__(self, settings: MentatSettings, plugins: PluginManager) -> None:
        self._settings = settings
        self._plugins = plugins
        self._store: Store | None = None

    @property
    def store(self) -> Store | None:
        """The currently open store, if any."""
        return self._store

    def execute(self, cmd: Command) -> ServiceResult:
        """Run *cmd* and report the outcome."""
        if isinstance(cmd, Help):
            return self.help(cmd.args)
        if isinstance(cmd, Open):
            return self.open(cmd.path)
        if isinstance(cmd, Close):
            return self.close()
        if isinstance(cmd, Query):
            return self.query(cmd.args)
        if isinstance(cmd, Transact):
            return self.transact(cmd.args)
        raise TypeError(f"Unsupported command: {cmd!r}")

    # ------------------------------------------------------------------
    # Meta-commands
    # ------------------------------------------------------------------

    def help(self, args: Sequence[str] = ()) -> ServiceResult:
        """Describe all commands, or only those named in *args*."""
        warnings: list[str] = []
        if not args:
            names = list(COMMAND_HELP)
        else:
            names = []
            for arg in args:
                name = arg if arg.startswith(".") else f".{arg}"
                if name not in COMMAND_HELP:
                    warnings.append(f"Unknown command {debug_quote(arg)}")
                elif name not in names:
                    names.append(name)

        commands: dict[str, dict[str, str]] = {}
        for name in names:
            usage, description = COMMAND_HELP[name]
            commands[name] = {"usage": f"{name} {usage}".rstrip(), "description": description}
        return ServiceResult.success("help", {"commands": commands}, warnings=warnings)

    def open(self, path: str) -> ServiceResult:
        """Open the store at *path*, replacing any store already open."""
        op = "open"
        if self._store is not None:
            self._close_store()

        try:
            store = Store.open(path, wal=self._settings.store.wal)
        except StoreError as exc:
            return ServiceResult.failure(op, ErrorCode.OPEN_FAILED, exc.message, path=path)

        self._store = store
        bind_store(path)
        self._plugins.hook.post_open(path=path)
        return ServiceResult.success(op, {"path": path})

    def close(self) -> ServiceResult:
        """Close the current store."""
        op = "close"
        if self._store is None:
            return ServiceResult.failure(op, ErrorCode.NO_STORE, "No database is open")
        path = self._close_store()
        return ServiceResult.success(op, {"path": path})

    def shutdown(self) -> None:
        """Close any open store; used when the shell exits."""
        if self._store is not None:
            self._close_store()

    def _close_store(self) -> str:
        assert self._store is not None
        store, self._store = self._store, None
        store.close()
        unbind_store()
        self._plugins.hook.post_close(path=store.path)
        return store.path

    # ------------------------------------------------------------------
    # Engine commands
    # ------------------------------------------------------------------

    def query(self, args: Sequence[str]) -> ServiceResult:
        """Run a query body through the engine plugins."""
        return self._run_engine("query", "execute_query", "query", args)

    def transact(self, args: Sequence[str]) -> ServiceResult:
        """Run a transaction body through the engine plugins."""
        return self._run_engine("transact", "execute_transact", "transaction", args)

    def _run_engine(
        self, op: str, hook_name: str, arg_name: str, args: Sequence[str]
    ) -> ServiceResult:
        if self._store is None:
            return ServiceResult.failure(op, ErrorCode.NO_STORE, "No database is open")

        body = " ".join(args)
        hook = getattr(self._plugins.hook, hook_name)
        try:
            payload = hook(store=self._store, **{arg_name: body})
        except Exception as exc:
            logger.warning("Engine plugin failed during %s", op, exc_info=True)
            return ServiceResult.failure(
                op, ErrorCode.ENGINE_ERROR, str(exc) or exc.__class__.__name__
            )

        if payload is None:
            return ServiceResult.failure(
                op, ErrorCode.NO_ENGINE, f"No engine plugin handled the {arg_name}"
            )
        return ServiceResult.success(op, dict(payload))
