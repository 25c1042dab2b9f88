"""Tests for PluginManager — registration and hook relay."""

from __future__ import annotations

import logging
from typing import Any

import pluggy
import pytest
from click.testing import CliRunner

from mentat_cli.cli import cli
from mentat_cli.plugins import hookimpl
from mentat_cli.plugins.manager import PluginManager


class _DummyPlugin:
    """Minimal plugin for registration tests."""

    @hookimpl
    def post_open(self, path: str) -> None:
        pass


class _QueryPlugin:
    def __init__(self, answer: dict[str, Any] | None) -> None:
        self.answer = answer

    @hookimpl
    def execute_query(self, store: Any, query: str) -> dict[str, Any] | None:
        return self.answer


class _BrokenPlugin:
    def __init__(self) -> None:
        raise RuntimeError("boom")


class TestPluginManager:
    def test_hook_relay_accessible(self) -> None:
        pm = PluginManager()
        for name in ("execute_query", "execute_transact", "post_open", "post_close"):
            assert hasattr(pm.hook, name)

    def test_register_plugin(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="dummy")
        assert "dummy" in pm.list_plugin_names()

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        assert "_DummyPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self) -> None:
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        pm.unregister(plugin)
        assert "dummy" not in pm.list_plugin_names()

    def test_get_plugins_returns_registered(self) -> None:
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="test")
        assert plugin in pm.get_plugins()

    def test_is_loaded_false_before_discover(self) -> None:
        assert PluginManager().is_loaded is False

    def test_discover_sets_loaded(self) -> None:
        pm = PluginManager()
        names = pm.discover_and_load()
        assert pm.is_loaded is True
        assert isinstance(names, list)


class TestFirstResult:
    def test_no_plugins_returns_none(self) -> None:
        pm = PluginManager()
        assert pm.hook.execute_query(store=None, query="[:find ?e]") is None

    def test_first_non_none_answer_wins(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_QueryPlugin({"from": "a"}), name="a")
        pm.register_plugin(_QueryPlugin(None), name="b")
        assert pm.hook.execute_query(store=None, query="[:find ?e]") == {"from": "a"}


class TestNormalizeInstances:
    def test_class_plugins_are_instantiated(self) -> None:
        pm = PluginManager()
        pm._pm.register(_DummyPlugin, name="cls")
        pm._normalize_plugin_instances()
        plugins = pm.get_plugins()
        assert len(plugins) == 1
        assert isinstance(plugins[0], _DummyPlugin)
        assert pm.list_plugin_names() == ["cls"]

    def test_broken_class_is_dropped(self) -> None:
        pm = PluginManager()
        pm._pm.register(_BrokenPlugin, name="broken")
        pm._normalize_plugin_instances()
        assert pm.get_plugins() == []


class TestDiscoverFailures:
    def test_import_error_is_logged_not_raised(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="early")

        def fail(group: str) -> int:
            raise ImportError("No module named 'mentat_engine'")

        monkeypatch.setattr(pm._pm, "load_setuptools_entrypoints", fail)
        with caplog.at_level(logging.WARNING, logger="mentat_cli"):
            names = pm.discover_and_load()

        assert names == ["early"]
        assert pm.is_loaded is True
        assert "Failed to load plugins" in caplog.text

    def test_cli_starts_with_broken_entry_point(
        self, monkeypatch: pytest.MonkeyPatch, cli_runner: CliRunner
    ) -> None:
        def fail(self: pluggy.PluginManager, group: str) -> int:
            raise ImportError("No module named 'mentat_engine'")

        monkeypatch.setattr(pluggy.PluginManager, "load_setuptools_entrypoints", fail)
        result = cli_runner.invoke(cli, ["-e", ".help"])
        assert result.exit_code == 0
        assert ".open PATH" in result.output
