"""Pluggy hook specifications for nsresolve.

Extension points:
- the declaration-header parser (first non-None result wins);
- a path-only hint of that parser's answer, for fast name lookups;
- extra inlined-dependency prefixes for the loaded-namespace filter.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("nsresolve")


class NsresolveHookSpec:
    """Hook specifications for the nsresolve plugin system."""

    @hookspec(firstresult=True)
    def nsresolve_parse_declaration(self, relative: str, content: bytes) -> str | None:
        """Return the namespace name declared by *content*, or None.

        *relative* is the source's path under its classpath entry.
        Raising is allowed; the matcher treats it as "no declaration".
        """

    @hookspec
    def nsresolve_inlined_prefixes(self) -> list[str] | None:
        """Return literal name prefixes used by a vendoring/relocation tool."""

    @hookspec(firstresult=True)
    def nsresolve_path_hint(self, relative: str) -> str | None:
        """Return the only name a source at *relative* could declare, or None if unknown.

        Lets name lookups skip reading sources that cannot match. A hint
        must never disagree with what the parser would return, and a plugin
        that implements both hooks must hint every path it declares: a None
        falls through to the next plugin's hint. Hints are ignored while any
        registered parser lacks this hook.
        """
