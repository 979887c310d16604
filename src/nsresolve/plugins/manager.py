"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) in the ``nsresolve.plugins`` group
via pluggy's setuptools entrypoint loader.
Capabilities: declaration parsers and inlined-dependency prefixes.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from nsresolve.plugins.hookspecs import NsresolveHookSpec

PROJECT_NAME = "nsresolve"
ENTRY_POINT_GROUP = "nsresolve.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(NsresolveHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins. Returns the names of all registered plugins.

        A plugin that fails to import is logged and skipped.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load %s entry points", ENTRY_POINT_GROUP, exc_info=True)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
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
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Hook dispatch
    # ------------------------------------------------------------------

    def parse_declaration(self, relative: str, content: bytes) -> str | None:
        """Ask parsers in order; the first non-None answer wins.

        Parser exceptions propagate to the caller.
        """
        return self._pm.hook.nsresolve_parse_declaration(relative=relative, content=content)

    def path_hint(self, relative: str) -> str | None:
        """Cheap path-only guess at the declared name; None if it cannot be trusted.

        Hints are only used while every declaration parser also provides one.
        A parser without a hint may declare any path differently, so a hint
        from another plugin would hide its sources from name lookups.
        """
        hook = self._pm.hook
        hinting = {impl.plugin_name for impl in hook.nsresolve_path_hint.get_hookimpls()}
        parsers = {impl.plugin_name for impl in hook.nsresolve_parse_declaration.get_hookimpls()}
        if not parsers <= hinting:
            return None
        return hook.nsresolve_path_hint(relative=relative)

    def inlined_prefixes(self) -> list[str]:
        """Collect prefixes from every plugin; a failing plugin contributes none."""
        prefixes: list[str] = []
        for impl in self._pm.hook.nsresolve_inlined_prefixes.get_hookimpls():
            try:
                contributed = impl.function()
            except Exception:
                logger.warning(
                    "Failed to collect inlined prefixes from plugin %s",
                    impl.plugin_name,
                    exc_info=True,
                )
                continue
            if not contributed:
                continue
            prefixes.extend(p for p in contributed if isinstance(p, str) and p)
        return prefixes

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
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
