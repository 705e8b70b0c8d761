"""Extension layer — event consumers via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from pickerkit.plugins.event_bus import EventBus
from pickerkit.plugins.hookspecs import hookimpl
from pickerkit.plugins.manager import PluginManager

__all__ = ["EventBus", "PluginManager", "hookimpl"]
