"""Built-in declaration parser for Python source files.

A ``.py`` file declares the dotted name of its location under the
classpath entry, provided it parses as a module. Registered last so
entry-point parsers for other source formats get the first say.
"""

from __future__ import annotations

import pluggy

from nsresolve.domain.declaration import parse_python_declaration
from nsresolve.domain.names import name_from_relative

hookimpl = pluggy.HookimplMarker("nsresolve")


class PythonSourcePlugin:
    """Declaration parser for Python modules and packages."""

    def __init__(self, suffixes: tuple[str, ...] = (".py",)) -> None:
        self._suffixes = suffixes

    @hookimpl(trylast=True)
    def nsresolve_parse_declaration(self, relative: str, content: bytes) -> str | None:
        return parse_python_declaration(relative, content, self._suffixes)

    @hookimpl(trylast=True)
    def nsresolve_path_hint(self, relative: str) -> str | None:
        return name_from_relative(relative, self._suffixes)
