"""pluggy extension points for declaration parsing and vendored prefixes.

Plugins install under the ``nsresolve.plugins`` entry-point group.
INVARIANT: a failing plugin is logged and skipped; resolution carries on.
"""

from nsresolve.plugins.manager import PluginManager

__all__ = ["PluginManager"]
