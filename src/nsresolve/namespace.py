"""Plain-value namespace helpers for library callers.

Thin wrappers over :class:`~nsresolve.services.namespace.NamespaceService`
that unwrap the ServiceResult: a failed operation yields ``None``, an
empty collection, or ``False``. Each call builds a fresh Runtime from
settings unless one is passed in, so nothing is cached between calls.
"""

from __future__ import annotations

from nsresolve.config.settings import NsSettings
from nsresolve.infrastructure.runtime import Runtime
from nsresolve.services.namespace import NamespaceService


def _service(runtime: Runtime | None) -> NamespaceService:
    return NamespaceService(runtime or Runtime(NsSettings.from_cli()))


def ensure_namespace(name: str, *, runtime: Runtime | None = None) -> str | None:
    """Load *name* (no-op if already loaded); the name on success, else None."""
    result = _service(runtime).ensure_namespace(name)
    return result.data["name"] if result.ok else None


def project_namespaces(*, runtime: Runtime | None = None) -> set[str]:
    """All namespaces defined in source directories within the current project."""
    return set(_service(runtime).project_namespaces().data.get("namespaces", []))


def loaded_namespaces(
    filter_patterns: list[str] | None = None,
    *,
    runtime: Runtime | None = None,
) -> list[str]:
    """Loaded namespaces except inlined dependencies and *filter_patterns* matches."""
    result = _service(runtime).loaded_namespaces(filter_patterns)
    return list(result.data.get("namespaces", []))


def loaded_project_namespaces(*, runtime: Runtime | None = None) -> list[str]:
    return list(_service(runtime).loaded_project_namespaces().data.get("namespaces", []))


def load_project_namespaces(*, runtime: Runtime | None = None) -> list[str]:
    """Require and return all namespaces validly defined in the current project."""
    return list(_service(runtime).load_project_namespaces().data.get("namespaces", []))


def namespace_path(name: str, *, runtime: Runtime | None = None) -> str | None:
    """Path (or archive URI) of the source declaring *name*, or None."""
    result = _service(runtime).namespace_path(name)
    return result.data["path"] if result.ok else None


def has_tests(name: str, *, runtime: Runtime | None = None) -> bool:
    result = _service(runtime).has_tests(name)
    return bool(result.ok and result.data["has_tests"])
