"""Extension layer — transformer plugins via pluggy.

Discovery: the ``sanitize.plugins`` entry-point group, plus single-file
module plugins from a local directory.
INVARIANT: Plugin failures are warnings, never errors.
"""

from sanitize.plugins.manager import PluginManager

__all__ = ["PluginManager"]
