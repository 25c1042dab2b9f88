"""Shared pytest fixtures and test helpers for mentat-cli tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pluggy
import pytest
from click.testing import CliRunner

from mentat_cli.config.settings import MentatSettings
from mentat_cli.plugins.manager import PluginManager
from mentat_cli.services.shell import ShellService

hookimpl = pluggy.HookimplMarker("mentat_cli")


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's mentat.toml or MENTAT_* env vars out of tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MENTAT_CONFIG", raising=False)
    for var in ("MENTAT_QUIET", "MENTAT_VERBOSE", "MENTAT_JSON_OUTPUT", "MENTAT_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> MentatSettings:
    return MentatSettings.from_cli(start_dir=tmp_path)


@pytest.fixture
def plugins() -> PluginManager:
    """A plugin manager with no plugins registered."""
    return PluginManager()


@pytest.fixture
def shell(settings: MentatSettings, plugins: PluginManager) -> ShellService:
    service = ShellService(settings, plugins)
    try:
        yield service
    finally:
        service.shutdown()


# ---------------------------------------------------------------------------
# Test plugins
# ---------------------------------------------------------------------------


class RecordingEngine:
    """Engine plugin that echoes bodies back and records lifecycle calls."""

    def __init__(self) -> None:
        self.queries: list[str] = []
        self.transactions: list[str] = []
        self.events: list[tuple[str, str]] = []

    @hookimpl
    def execute_query(self, store: Any, query: str) -> dict[str, Any]:
        self.queries.append(query)
        return {"query": query, "results": []}

    @hookimpl
    def execute_transact(self, store: Any, transaction: str) -> dict[str, Any]:
        self.transactions.append(transaction)
        return {"transaction": transaction, "datoms": 0}

    @hookimpl
    def post_open(self, path: str) -> None:
        self.events.append(("open", path))

    @hookimpl
    def post_close(self, path: str) -> None:
        self.events.append(("close", path))


@pytest.fixture
def engine(plugins: PluginManager) -> RecordingEngine:
    """A RecordingEngine registered on the ``plugins`` fixture."""
    plugin = RecordingEngine()
    plugins.register_plugin(plugin, name="recording")
    return plugin
