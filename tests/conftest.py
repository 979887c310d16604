"""Shared pytest fixtures and test helpers for nsresolve tests."""

from __future__ import annotations

import logging
import os
import sys
import zipfile
from collections.abc import Generator, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from nsresolve.config.settings import NsSettings
from nsresolve.domain.types import ProjectRoot
from nsresolve.infrastructure.classpath import SysPathClasspath
from nsresolve.infrastructure.runtime import Runtime
from nsresolve.plugins.builtins.python_source import PythonSourcePlugin
from nsresolve.plugins.manager import PluginManager


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handlers installed by configure_logging (CLI tests call it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    ns = logging.getLogger("nsresolve")
    ns_level = ns.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    ns.setLevel(ns_level)
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Classpath fixtures
# ---------------------------------------------------------------------------


def write_module(root: Path, relative: str, source: str = "") -> Path:
    """Write a source file at *root*/*relative*, creating parent dirs."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    return path


def write_archive(path: Path, members: dict[str, str]) -> Path:
    """Write a zip archive holding *members* (entry name -> source), in order."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, source in members.items():
            zf.writestr(name, source)
    return path


def read_archive_uri(uri: str) -> tuple[str, bytes] | None:
    """Entry name and content behind an ``archive:<path>!/<entry>`` URI; None otherwise."""
    if not uri.startswith("archive:"):
        return None
    archive, entry = uri.removeprefix("archive:").split("!/", 1)
    with zipfile.ZipFile(archive) as zf:
        return entry, zf.read(entry)


def block_listing(monkeypatch: pytest.MonkeyPatch, blocked: Path) -> None:
    """Make listing *blocked* fail with PermissionError, as an unreadable dir would."""
    real_scandir = os.scandir

    def scandir(path: Any = ".") -> Any:
        if Path(path) == blocked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)


@dataclass
class Layout:
    """The standard two-entry classpath used across tests."""

    project: Path
    src: Path
    jar: Path

    @property
    def classpath(self) -> list[Path]:
        return [self.src, self.jar]


@pytest.fixture
def layout(tmp_path: Path) -> Layout:
    """``proj/src`` declaring ``app.core``, plus ``lib.jar`` declaring ``dep.util``.

    ``app/broken.py`` and ``app/notes.txt`` must never surface as namespaces.
    """
    project = tmp_path / "proj"
    src = project / "src"
    write_module(src, "app/core.py", "def run():\n    return 1\n")
    write_module(src, "app/broken.py", "def oops(:\n")
    write_module(src, "app/notes.txt", "not python")
    jar = write_archive(
        tmp_path / "lib.jar",
        {
            "META-INF/MANIFEST.MF": "Manifest-Version: 1.0\n",
            "dep/util.py": "VALUE = 42\n",
        },
    )
    return Layout(project=project, src=src, jar=jar)


# ---------------------------------------------------------------------------
# Runtime fixtures
# ---------------------------------------------------------------------------


class FakeRegistry:
    """In-memory ModuleRegistry.

    ``modules`` maps loaded names to their exported bindings. Names in
    ``broken`` fail to load; ``required`` records every real load.
    """

    def __init__(
        self,
        loaded: Iterable[str] = (),
        *,
        exports: dict[str, dict[str, Any]] | None = None,
        broken: Iterable[str] = (),
    ) -> None:
        self.modules: dict[str, dict[str, Any]] = {name: {} for name in loaded}
        self.modules.update(exports or {})
        self.broken = set(broken)
        self.required: list[str] = []

    def list_loaded(self) -> list[str]:
        return list(self.modules)

    def is_loaded(self, name: str) -> bool:
        return name in self.modules

    def exports(self, name: str) -> dict[str, Any]:
        return dict(self.modules[name])

    def require(self, name: str) -> str:
        if name in self.modules:
            return name
        if name in self.broken:
            raise ImportError(f"No module named {name!r}")
        self.required.append(name)
        self.modules[name] = {}
        return name


def builtin_plugins() -> PluginManager:
    """Plugin manager holding only the built-in Python parser (no entry points)."""
    pm = PluginManager()
    pm.register_plugin(PythonSourcePlugin(), name="python-source-builtin")
    return pm


def make_runtime(
    classpath: Iterable[Path | str],
    *,
    project_root: Path,
    registry: Any | None = None,
    plugins: PluginManager | None = None,
    case_insensitive: bool = False,
    **resolver: Any,
) -> Runtime:
    """Runtime over an explicit classpath, isolated from sys.path and entry points."""
    settings = NsSettings(project_root=project_root)
    if resolver:
        updated = settings.resolver.model_copy(update=resolver)
        settings = settings.model_copy(update={"resolver": updated})
    return Runtime(
        settings,
        classpath=SysPathClasspath(list(classpath)),
        registry=registry if registry is not None else FakeRegistry(),
        plugins=plugins or builtin_plugins(),
        project_root=ProjectRoot.from_path(project_root, case_insensitive=case_insensitive),
    )


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def runtime(layout: Layout, registry: FakeRegistry) -> Runtime:
    """Runtime over the standard layout with a fake registry."""
    return make_runtime(layout.classpath, project_root=layout.project, registry=registry)


@pytest.fixture
def clean_modules(monkeypatch: pytest.MonkeyPatch) -> Generator[list[str]]:
    """Collect module names to drop from ``sys.modules`` after the test.

    ``sys.path`` is restored as well, so tests may prepend to it freely.
    """
    monkeypatch.setattr(sys, "path", list(sys.path))
    names: list[str] = []
    yield names
    for name in list(sys.modules):
        if any(name == n or name.startswith(f"{n}.") for n in names):
            sys.modules.pop(name, None)
