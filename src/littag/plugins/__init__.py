"""Extension layer — constraint packs via pluggy.

Discovery: entry_points (pip-installed) in the ``littag.plugins`` group.
INVARIANT: Plugin crashes are warnings. Configuration errors raised
while a plugin registers constraints stay fatal.
"""

from littag.plugins.manager import PluginManager

__all__ = ["PluginManager"]
