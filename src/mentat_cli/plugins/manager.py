"""Plugin discovery and loading.

Discovery uses pluggy's setuptools entry-point support for the
``mentat_cli.plugins`` group. Entry points may name a module, a class
or an instance; classes are instantiated before registration.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from mentat_cli.plugins.hookspecs import MentatHookSpec

PROJECT_NAME = "mentat_cli"
ENTRY_POINT_GROUP = "mentat_cli.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(MentatHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load plugins advertised under the ``mentat_cli.plugins`` entry point.

        Returns a list of loaded plugin names. An entry point that fails
        to import stops discovery with a warning; plugins registered
        before it stay loaded and the shell still starts.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning(
                "Failed to load plugins from entry point group %s",
                ENTRY_POINT_GROUP,
                exc_info=True,
            )
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching calls."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def _normalize_plugin_instances(self) -> None:
        """Replace class-based entry points with instances.

        pluggy registers whatever object the entry point resolves to.
        Hook methods on a bare class would be unbound, so the class is
        swapped for an instance. A class that fails to instantiate is
        dropped with a warning.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
