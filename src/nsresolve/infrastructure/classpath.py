"""Classpath provider — the ordered directories and archives modules come from.

By default the classpath is a snapshot of ``sys.path``. Entries are
classified once per query: directories by ``Path.is_dir``, archives by
suffix (case-insensitive) plus a zip signature check. Anything else
(missing paths, plain files) is dropped.

INVARIANT: Entry order is the input order. First match wins downstream.
"""

from __future__ import annotations

import logging
import sys
import zipfile
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from nsresolve.domain.types import ClasspathEntry, EntryKind, ProjectRoot

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_SUFFIXES: tuple[str, ...] = (".zip", ".egg", ".whl", ".pyz", ".jar")


def is_case_insensitive_os(platform: str | None = None) -> bool:
    """Whether path comparison on the host must ignore letter case."""
    plat = sys.platform if platform is None else platform
    return plat.startswith(("win", "cygwin"))


def current_project_root(path: Path | None = None, *, platform: str | None = None) -> ProjectRoot:
    """Project root from *path* (default: cwd) with the host's case policy."""
    return ProjectRoot.from_path(
        path or Path.cwd(),
        case_insensitive=is_case_insensitive_os(platform),
    )


def classify_entry(
    path: Path,
    archive_suffixes: tuple[str, ...] = DEFAULT_ARCHIVE_SUFFIXES,
) -> ClasspathEntry | None:
    """Return a ClasspathEntry for *path*, or None if it is neither shape."""
    if path.is_dir():
        return ClasspathEntry(path=path, kind=EntryKind.DIRECTORY)
    if (
        path.is_file()
        and path.name.lower().endswith(archive_suffixes)
        and zipfile.is_zipfile(path)
    ):
        return ClasspathEntry(path=path, kind=EntryKind.ARCHIVE)
    return None


class ClasspathProvider(Protocol):
    """Supplies the ordered classpath for one query."""

    def entries(self) -> list[ClasspathEntry]: ...


class SysPathClasspath:
    """Classpath backed by ``sys.path`` or an explicit list of paths.

    The path list is re-read on every :meth:`entries` call so that later
    ``sys.path`` edits are visible; nothing is cached between queries.
    """

    def __init__(
        self,
        paths: Iterable[str | Path] | None = None,
        *,
        archive_suffixes: tuple[str, ...] = DEFAULT_ARCHIVE_SUFFIXES,
        cwd: Path | None = None,
    ) -> None:
        self._paths = None if paths is None else list(paths)
        self._archive_suffixes = tuple(s.lower() for s in archive_suffixes)
        self._cwd = cwd

    def _raw_paths(self) -> list[str | Path]:
        return list(sys.path) if self._paths is None else list(self._paths)

    def entries(self) -> list[ClasspathEntry]:
        cwd = self._cwd or Path.cwd()
        seen: set[Path] = set()
        result: list[ClasspathEntry] = []
        for raw in self._raw_paths():
            # "" on sys.path means the current directory
            path = Path(raw) if raw else cwd
            if not path.is_absolute():
                path = cwd / path
            if path in seen:
                continue
            seen.add(path)
            entry = classify_entry(path, self._archive_suffixes)
            if entry is None:
                logger.debug("Skipping classpath element %s", path)
                continue
            result.append(entry)
        return result

    def directories(self) -> list[ClasspathEntry]:
        return [e for e in self.entries() if not e.is_archive]

    def archives(self) -> list[ClasspathEntry]:
        return [e for e in self.entries() if e.is_archive]
