"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints
in the ``importmap_resolve.plugins`` group. Import-map plugins built from
a session are registered with :meth:`PluginManager.use_import_map`.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from importmap_resolve.plugins.hookspecs import ImportMapHookSpec

if TYPE_CHECKING:
    from importmap_resolve.plugins.builtins.import_map import ImportMapResolvePlugin
    from importmap_resolve.services.session import ImportMapSession

PROJECT_NAME = "importmap_resolve"
ENTRY_POINT_GROUP = "importmap_resolve.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ImportMapHookSpec)

    def discover_and_load(self) -> list[str]:
        """Load plugins advertised under the ``importmap_resolve.plugins`` entry point.

        Returns a list of registered plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. an import-map plugin)."""
        resolved_name = name or getattr(plugin, "name", None) or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def use_import_map(self, session: ImportMapSession) -> ImportMapResolvePlugin:
        """Register the built-in import-map plugin for *session* and return it.

        Any import-map plugin registered earlier is unregistered first.
        """
        from importmap_resolve.plugins.builtins.import_map import PLUGIN_NAME, ImportMapResolvePlugin

        previous = self._pm.get_plugin(PLUGIN_NAME)
        if previous is not None:
            self.unregister(previous)
        plugin = ImportMapResolvePlugin(session)
        self.register_plugin(plugin, name=PLUGIN_NAME)
        return plugin

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def resolve_id(self, source: str, importer: str | None = None) -> str | None:
        """Ask registered plugins for the module id of *source*.

        Returns None when every plugin defers, meaning the host applies
        its default resolution. Exceptions raised by a plugin (notably
        :class:`~importmap_resolve.domain.errors.ImportBlockedError`)
        propagate to the host.
        """
        return self._pm.hook.resolve_id(source=source, importer=importer)

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
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

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("importmap_resolve")`` sets an
        ``importmap_resolve_impl`` attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, f"{PROJECT_NAME}_impl", None):
                return True
        return False
