"""Runtime — the collaborators one resolution query runs against.

The Runtime is the single dependency injected into every service. It
owns the classpath provider, the module registry, the plugin manager,
and the project root. Each collaborator can be replaced for tests.
"""

from __future__ import annotations

import logging
from functools import cached_property
from typing import TYPE_CHECKING

from nsresolve.domain.rules import NamespaceRules
from nsresolve.infrastructure.classpath import SysPathClasspath, current_project_root
from nsresolve.infrastructure.registry import PythonModuleRegistry

if TYPE_CHECKING:
    from nsresolve.config.models import ResolverConfig
    from nsresolve.config.settings import NsSettings
    from nsresolve.domain.types import ProjectRoot
    from nsresolve.infrastructure.classpath import ClasspathProvider
    from nsresolve.infrastructure.registry import ModuleRegistry
    from nsresolve.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Runtime:
    """Bundle of classpath, registry, plugins, and rule tables.

    Plugins are discovered lazily on first access so that building a
    Runtime for ``--help`` never touches entry points.
    """

    def __init__(
        self,
        settings: NsSettings,
        *,
        classpath: ClasspathProvider | None = None,
        registry: ModuleRegistry | None = None,
        plugins: PluginManager | None = None,
        project_root: ProjectRoot | None = None,
    ) -> None:
        self.settings = settings
        self.classpath: ClasspathProvider = classpath or SysPathClasspath(
            settings.resolver.classpath,
            archive_suffixes=tuple(settings.resolver.archive_suffixes),
        )
        self.registry: ModuleRegistry = registry or PythonModuleRegistry()
        self.project_root: ProjectRoot = project_root or current_project_root(
            settings.project_root
        )
        self._plugins = plugins

    @property
    def config(self) -> ResolverConfig:
        return self.settings.resolver

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (discovered on first access)."""
        if self._plugins is None:
            from nsresolve.plugins.builtins.python_source import PythonSourcePlugin
            from nsresolve.plugins.manager import PluginManager

            pm = PluginManager()
            pm.discover_and_load()
            pm.register_plugin(
                PythonSourcePlugin(suffixes=tuple(self.config.source_suffixes)),
                name="python-source-builtin",
            )
            self._plugins = pm
        return self._plugins

    @cached_property
    def rules(self) -> NamespaceRules:
        """Configured rule tables extended by plugin-contributed prefixes."""
        base = NamespaceRules(
            inlined_prefixes=tuple(self.config.inlined_prefixes),
            filter_patterns=tuple(self.config.filter_patterns),
        )
        return base.with_prefixes(self.plugins.inlined_prefixes())

    def parse_declaration(self, relative: str, content: bytes) -> str | None:
        """Declaration-header parser backed by the plugin hook."""
        return self.plugins.parse_declaration(relative, content)

    def path_hint(self, relative: str) -> str | None:
        """Path-only name hint backed by the plugin hook."""
        return self.plugins.path_hint(relative)
