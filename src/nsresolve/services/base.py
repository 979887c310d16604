"""BaseService — abstract foundation for nsresolve services.

Every service receives a :class:`Runtime` at construction time. The
Runtime provides the classpath, the module registry, plugins, and rules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nsresolve.infrastructure.runtime import Runtime


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class NamespaceService(BaseService):
            def project_namespaces(self) -> ServiceResult:
                entries = self._runtime.classpath.entries()
                ...
    """

    def __init__(self, runtime: Runtime) -> None:
        self._runtime = runtime
