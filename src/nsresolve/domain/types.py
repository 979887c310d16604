"""Value types shared by the scanner, matcher, and resolution service."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class EntryKind(StrEnum):
    """Storage shape of a classpath entry."""

    DIRECTORY = "directory"
    ARCHIVE = "archive"


class NamespaceClass(StrEnum):
    """Classification of a loaded namespace name."""

    INLINED = "inlined"
    INTERNAL = "internal"
    ORDINARY = "ordinary"


def _path_key(path: str, *, case_insensitive: bool) -> str:
    return path.lower() if case_insensitive else path


def _with_sep(path: str) -> str:
    return path if path.endswith(os.sep) else path + os.sep


@dataclass(frozen=True)
class ProjectRoot:
    """The current project's root directory, rendered with a trailing separator.

    The trailing separator keeps ``/proj`` from claiming ``/project2``.
    """

    path: str
    case_insensitive: bool = False

    @classmethod
    def from_path(cls, path: Path | str, *, case_insensitive: bool = False) -> ProjectRoot:
        return cls(path=_with_sep(str(Path(path).absolute())), case_insensitive=case_insensitive)

    def contains(self, path: Path | str) -> bool:
        """Return True if *path* is the root itself or lies beneath it."""
        candidate = _path_key(_with_sep(str(path)), case_insensitive=self.case_insensitive)
        return candidate.startswith(_path_key(self.path, case_insensitive=self.case_insensitive))


@dataclass(frozen=True)
class ClasspathEntry:
    """One directory or packed archive on the classpath."""

    path: Path
    kind: EntryKind

    @property
    def is_archive(self) -> bool:
        return self.kind is EntryKind.ARCHIVE

    def under_root(self, root: ProjectRoot) -> bool:
        return root.contains(self.path)


@dataclass(frozen=True)
class CandidateSource:
    """One unit of module-declaring content: a loose file or an archive entry.

    Attributes:
        uri: Absolute file path, or ``archive:<archive>!/<entry>``.
        root: The classpath entry the source was found under.
        relative: POSIX path of the source relative to *root*.
        kind: Storage shape of the owning classpath entry.
    """

    uri: str
    root: Path
    relative: str
    kind: EntryKind
    _loader: Callable[[], bytes] = field(repr=False, compare=False, hash=False)

    def read_bytes(self) -> bytes:
        """Return the raw content. Only valid while the owning scan is open."""
        return self._loader()


@dataclass(frozen=True)
class ModuleDeclaration:
    """The outcome of parsing a candidate: its declared name, if any."""

    source: CandidateSource
    name: str | None = None

    @property
    def declared(self) -> bool:
        return self.name is not None
