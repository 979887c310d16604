"""Classpath scanner — lazy stream of candidate sources.

Directories are walked recursively in OS listing order; archives are read
in entry order. Nothing is sorted and nothing is materialized: callers pull
one CandidateSource at a time and may stop early.

Read errors (``OSError``, ``zipfile.BadZipFile``) propagate unless the caller
passes an ``onerror`` callback, which lets a directory walk continue past
subdirectories it cannot list.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from nsresolve.domain.types import CandidateSource, ClasspathEntry, EntryKind, ProjectRoot
from nsresolve.infrastructure.archive import archive_uri, iter_archive_members

DEFAULT_SOURCE_SUFFIXES: tuple[str, ...] = (".py",)

# Directories never descended into (dot-directories are skipped as well).
DEFAULT_SKIP_DIRS = frozenset({"__pycache__", "site-packages", "node_modules"})


def _reraise(exc: OSError) -> None:
    raise exc


def iter_directory_sources(
    root: Path,
    *,
    suffixes: tuple[str, ...] = DEFAULT_SOURCE_SUFFIXES,
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS,
    onerror: Callable[[OSError], None] = _reraise,
) -> Iterator[CandidateSource]:
    """Yield every source file under *root*, recursively.

    *onerror* receives listing failures; the default re-raises. A callback
    that returns skips the unreadable directory and the walk goes on.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        dirnames[:] = [d for d in dirnames if d not in skip_dirs and not d.startswith(".")]
        for filename in filenames:
            if not filename.endswith(suffixes):
                continue
            path = Path(dirpath) / filename
            yield CandidateSource(
                uri=str(path.absolute()),
                root=root,
                relative=path.relative_to(root).as_posix(),
                kind=EntryKind.DIRECTORY,
                _loader=path.read_bytes,
            )


def iter_archive_sources(
    archive: Path,
    *,
    suffixes: tuple[str, ...] = DEFAULT_SOURCE_SUFFIXES,
) -> Iterator[CandidateSource]:
    """Yield every source member of *archive*; the archive stays open meanwhile."""
    for entry, loader in iter_archive_members(archive, suffixes):
        yield CandidateSource(
            uri=archive_uri(archive, entry),
            root=archive,
            relative=entry,
            kind=EntryKind.ARCHIVE,
            _loader=loader,
        )


def iter_entry_sources(
    entry: ClasspathEntry,
    *,
    suffixes: tuple[str, ...] = DEFAULT_SOURCE_SUFFIXES,
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS,
    onerror: Callable[[OSError], None] = _reraise,
) -> Iterator[CandidateSource]:
    """Yield the sources of a single classpath entry."""
    if entry.is_archive:
        return iter_archive_sources(entry.path, suffixes=suffixes)
    return iter_directory_sources(
        entry.path, suffixes=suffixes, skip_dirs=skip_dirs, onerror=onerror
    )


def select_entries(
    entries: Iterable[ClasspathEntry],
    project_root: ProjectRoot | None = None,
    *,
    include_archives: bool = True,
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS,
) -> list[ClasspathEntry]:
    """Narrow *entries* to project directories when *project_root* is given.

    Archives are always dependencies, so project scoping drops them. So are
    directories the walk would skip, such as a project-local
    ``.venv/lib/python3.12/site-packages``.
    """
    if project_root is None:
        return [e for e in entries if include_archives or not e.is_archive]
    return [
        e
        for e in entries
        if not e.is_archive
        and e.under_root(project_root)
        and not _inside_skipped_dir(e.path, project_root, skip_dirs)
    ]


def _inside_skipped_dir(path: Path, root: ProjectRoot, skip_dirs: frozenset[str]) -> bool:
    """Whether *path* sits in (or is) a skipped directory below *root*."""
    depth = len(Path(root.path).parts)
    return any(
        part in skip_dirs or part.startswith(".") for part in Path(path).parts[depth:]
    )


def iter_sources(
    entries: Iterable[ClasspathEntry],
    *,
    project_root: ProjectRoot | None = None,
    include_archives: bool = True,
    suffixes: tuple[str, ...] = DEFAULT_SOURCE_SUFFIXES,
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS,
) -> Iterator[CandidateSource]:
    """Chain the sources of every selected entry, in classpath order."""
    selected = select_entries(
        entries, project_root, include_archives=include_archives, skip_dirs=skip_dirs
    )
    for entry in selected:
        yield from iter_entry_sources(entry, suffixes=suffixes, skip_dirs=skip_dirs)
