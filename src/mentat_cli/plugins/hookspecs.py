"""Pluggy hook specifications for mentat-cli.

Query and transaction bodies are executed by whichever plugin answers
first; the shell itself never interprets them. Open/close notifications
let plugins set up or tear down per-store state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from mentat_cli.infrastructure.store import Store

hookspec = pluggy.HookspecMarker("mentat_cli")
hookimpl = pluggy.HookimplMarker("mentat_cli")


class MentatHookSpec:
    """Hook specifications for the mentat-cli plugin system."""

    @hookspec(firstresult=True)
    def execute_query(self, store: Store, query: str) -> dict[str, Any] | None:
        """Run *query* against *store*; return a result payload, or None to pass."""

    @hookspec(firstresult=True)
    def execute_transact(self, store: Store, transaction: str) -> dict[str, Any] | None:
        """Apply *transaction* to *store*; return a report payload, or None to pass."""

    @hookspec
    def post_open(self, path: str) -> None:
        """Called after a store is opened."""

    @hookspec
    def post_close(self, path: str) -> None:
        """Called after a store is closed."""
