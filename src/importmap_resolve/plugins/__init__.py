"""Extension layer: build-tool integration via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Notification hook failures are warnings, never errors.
"""

from importmap_resolve.plugins.builtins.import_map import ImportMapResolvePlugin
from importmap_resolve.plugins.manager import PluginManager

__all__ = ["ImportMapResolvePlugin", "PluginManager"]
