"""NamespaceService — project discovery, loaded listing, loading, and lookup.

Composes the classpath scanner, the declaration matcher, and the
loaded-namespace filter into the public resolution operations.

INVARIANT: No method raises. Malformed names, import errors, unreadable
classpath entries, and unparseable sources all surface as ``ok=False``
results or as warnings on an ``ok=True`` result.
"""

from __future__ import annotations

import inspect
import logging
import re
import unittest
from contextlib import closing
from typing import Any

import structlog

from nsresolve.domain.declaration import iter_declarations, read_declaration
from nsresolve.domain.names import is_valid_name
from nsresolve.domain.types import CandidateSource, ClasspathEntry, NamespaceClass
from nsresolve.infrastructure.scanner import iter_entry_sources, iter_sources, select_entries
from nsresolve.services.base import BaseService
from nsresolve.services.result import (
    INVALID_NAME,
    INVALID_PATTERN,
    LOAD_FAILED,
    NOT_FOUND,
    NOT_LOADED,
    ServiceResult,
)

logger = logging.getLogger(__name__)
log = structlog.get_logger(__name__)


class NamespaceService(BaseService):
    """Resolve namespaces against the classpath and the live module registry."""

    # ------------------------------------------------------------------
    # Scanning helpers
    # ------------------------------------------------------------------

    @property
    def _scan_options(self) -> dict[str, Any]:
        cfg = self._runtime.config
        return {
            "suffixes": tuple(cfg.source_suffixes),
            "skip_dirs": frozenset(cfg.skip_dirs),
        }

    def _classpath(self, warnings: list[str]) -> list[ClasspathEntry]:
        try:
            return self._runtime.classpath.entries()
        except Exception as exc:
            logger.warning("Could not read the classpath", exc_info=True)
            warnings.append(f"Could not read the classpath: {exc}")
            return []

    def _scan_project(self, warnings: list[str]) -> tuple[set[str], dict[str, int]]:
        """Collect declared names from project directories.

        An unreadable directory adds a warning and the walk carries on with
        its siblings; an unreadable entry adds a warning and the scan moves
        on to the next entry.
        """
        runtime = self._runtime
        options = self._scan_options
        entries = select_entries(
            self._classpath(warnings), runtime.project_root, skip_dirs=options["skip_dirs"]
        )

        def skip_unlistable(exc: OSError) -> None:
            logger.warning("Skipping unreadable directory %s", exc.filename, exc_info=exc)
            warnings.append(f"Skipped unreadable directory {exc.filename}: {exc}")

        names: set[str] = set()
        scanned = 0
        for entry in entries:
            sources = iter_entry_sources(entry, onerror=skip_unlistable, **options)
            try:
                for decl in iter_declarations(sources, runtime.parse_declaration):
                    scanned += 1
                    if decl.name is not None:
                        names.add(decl.name)
            except Exception as exc:
                logger.warning("Skipping unreadable classpath entry %s", entry.path, exc_info=True)
                warnings.append(f"Skipped unreadable classpath entry {entry.path}: {exc}")
        stats = {"entries": len(entries), "scanned": scanned, "declared": len(names)}
        log.debug("project.scan", root=runtime.project_root.path, **stats)
        return names, stats

    def _find_source(self, name: str) -> CandidateSource | None:
        """First candidate, in classpath order, declaring exactly *name*.

        Scan errors propagate. The source stream is closed on every exit so
        open archive handles are released on an early match.
        """
        runtime = self._runtime
        scanned = 0
        sources = iter_sources(runtime.classpath.entries(), **self._scan_options)
        with closing(sources):
            for source in sources:
                hint = runtime.path_hint(source.relative)
                if hint is not None and hint != name:
                    continue
                scanned += 1
                if read_declaration(source, runtime.parse_declaration).name == name:
                    log.debug("path.match", name=name, uri=source.uri, parsed=scanned)
                    return source
        log.debug("path.miss", name=name, parsed=scanned)
        return None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def ensure_namespace(self, name: str) -> ServiceResult:
        """Load *name* unless it is already loaded.

        Import errors of any kind, including a module body calling
        ``sys.exit``, become a ``LOAD_FAILED`` result.
        """
        op = "ensure_namespace"
        if not is_valid_name(name):
            return ServiceResult.failure(
                op, INVALID_NAME, f"Not a valid namespace name: {name!r}", name=str(name)
            )
        try:
            resolved = self._runtime.registry.require(name)
        except (Exception, SystemExit) as exc:
            logger.debug("Failed to load %s", name, exc_info=True)
            return ServiceResult.failure(
                op,
                LOAD_FAILED,
                f"Could not load {name}: {exc}",
                name=name,
                exception=type(exc).__name__,
            )
        return ServiceResult.success(op, {"name": resolved})

    def load_project_namespaces(self) -> ServiceResult:
        """Require every project namespace; report those that loaded."""
        op = "load_project_namespaces"
        warnings: list[str] = []
        names, stats = self._scan_project(warnings)
        loaded: list[str] = []
        failed: list[str] = []
        for name in sorted(names):
            result = self.ensure_namespace(name)
            if result.ok:
                loaded.append(result.data["name"])
            else:
                failed.append(name)
        if failed:
            log.info("project.load_failures", count=len(failed), names=failed)
        return ServiceResult.success(
            op,
            {"namespaces": sorted(loaded), "failed": failed},
            warnings=warnings,
            meta=stats,
        )

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def project_namespaces(self) -> ServiceResult:
        """Namespaces declared in classpath directories under the project root."""
        warnings: list[str] = []
        names, stats = self._scan_project(warnings)
        return ServiceResult.success(
            "project_namespaces",
            {"namespaces": sorted(names)},
            warnings=warnings,
            meta=stats,
        )

    def loaded_namespaces(self, filter_patterns: list[str] | None = None) -> ServiceResult:
        """Loaded names minus inlined dependencies and *filter_patterns* matches.

        *filter_patterns* extend the configured patterns and are matched
        anywhere in the name.
        """
        op = "loaded_namespaces"
        rules = self._runtime.rules.with_patterns(filter_patterns)
        try:
            rules.validate_patterns()
        except re.error as exc:
            return ServiceResult.failure(
                op,
                INVALID_PATTERN,
                f"Invalid filter pattern: {exc}",
                patterns=list(rules.filter_patterns),
            )
        loaded = set(self._runtime.registry.list_loaded())
        names = sorted(n for n in loaded if rules.classify(n) is NamespaceClass.ORDINARY)
        return ServiceResult.success(
            op,
            {"namespaces": names},
            meta={"loaded": len(loaded), "excluded": len(loaded) - len(names)},
        )

    def loaded_project_namespaces(self) -> ServiceResult:
        """Project namespaces that are currently loaded. No inlined/internal filtering."""
        warnings: list[str] = []
        names, stats = self._scan_project(warnings)
        loaded = set(self._runtime.registry.list_loaded())
        return ServiceResult.success(
            "loaded_project_namespaces",
            {"namespaces": sorted(names & loaded)},
            warnings=warnings,
            meta=stats,
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def namespace_path(self, name: str) -> ServiceResult:
        """Locate the source declaring *name* anywhere on the classpath."""
        op = "namespace_path"
        if not is_valid_name(name):
            return ServiceResult.failure(
                op, INVALID_NAME, f"Not a valid namespace name: {name!r}", name=str(name)
            )
        try:
            source = self._find_source(name)
        except Exception as exc:
            logger.debug("Lookup of %s aborted", name, exc_info=True)
            return ServiceResult.failure(
                op, NOT_FOUND, f"Namespace not found: {name}", name=name, cause=str(exc)
            )
        if source is None:
            return ServiceResult.failure(op, NOT_FOUND, f"Namespace not found: {name}", name=name)
        return ServiceResult.success(
            op,
            {
                "name": name,
                "path": source.uri,
                "kind": source.kind.value,
                "root": str(source.root),
            },
        )

    def has_tests(self, name: str) -> ServiceResult:
        """Whether loaded namespace *name* defines any test bindings."""
        op = "has_tests"
        registry = self._runtime.registry
        try:
            exports = registry.exports(name) if registry.is_loaded(name) else None
        except KeyError:
            exports = None
        if exports is None:
            return ServiceResult.failure(op, NOT_LOADED, f"Namespace not loaded: {name}", name=name)

        cfg = self._runtime.config
        tests = sorted(
            attr
            for attr, value in exports.items()
            if _is_test_binding(attr, value, marker=cfg.test_marker, prefix=cfg.test_prefix)
        )
        return ServiceResult.success(op, {"name": name, "has_tests": bool(tests), "tests": tests})


def _is_test_binding(attr: str, value: Any, *, marker: str, prefix: str) -> bool:
    """An explicit marker attribute decides.

    Otherwise test-prefixed functions count, as do classes a test runner
    collects: ``unittest.TestCase`` subclasses and ``Test``-prefixed classes.
    """
    try:
        flag = getattr(value, marker, None)
    except Exception:
        return False
    if flag is not None:
        return bool(flag)
    if inspect.isclass(value):
        return issubclass(value, unittest.TestCase) or attr.startswith(prefix.capitalize())
    return inspect.isfunction(value) and attr.startswith(prefix)
