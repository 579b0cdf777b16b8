"""Extension layer: plugin system via pluggy.

Discovery: entry_points (pip-installed) in the ``cikit.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from cikit.plugins.manager import PluginManager

__all__ = ["PluginManager"]
