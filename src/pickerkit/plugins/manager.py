"""Plugin registration and discovery.

Discovery: entry points (pip-installed) in the ``pickerkit.plugins`` group
via pluggy's setuptools loader, plus direct registration of plugin objects.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from pickerkit.plugins.hookspecs import PROJECT_NAME, PickerHookSpec

ENTRY_POINT_GROUP = "pickerkit.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, registration, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PickerHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and return the registered plugin names."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> str:
        """Register a plugin instance; returns the name it was registered under."""
        resolved_name = name or f"{plugin.__class__.__name__}-{id(plugin):x}"
        if self._pm.is_registered(plugin):
            return self._pm.get_name(plugin) or resolved_name
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)
        return resolved_name

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance; unknown plugins are ignored."""
        if self._pm.is_registered(plugin):
            self._pm.unregister(plugin)

    def is_registered(self, plugin: object) -> bool:
        return self._pm.is_registered(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def _normalize_plugin_instances(self) -> None:
        """Replace plugin classes registered by entry points with instances."""
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
