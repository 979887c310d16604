"""Declaration matching — what symbolic name does a candidate source declare?

INVARIANT: Matching never raises. Truncated, corrupt, or non-source content
degrades to "no declaration", because the scanner may hand over candidates
that were never meant to be parsed as modules.
"""

from __future__ import annotations

import ast
import logging
import warnings
from collections.abc import Callable, Iterable, Iterator

from nsresolve.domain.names import name_from_relative
from nsresolve.domain.types import CandidateSource, ModuleDeclaration

logger = logging.getLogger(__name__)

# (relative path, raw content) -> declared name or None
DeclarationParser = Callable[[str, bytes], "str | None"]


def parse_python_declaration(
    relative: str,
    content: bytes,
    suffixes: tuple[str, ...] = (".py",),
) -> str | None:
    """Return the module name a Python source declares, or None.

    A Python file declares the dotted name of its location under the
    classpath root, provided the content compiles to a module AST.
    """
    name = name_from_relative(relative, suffixes)
    if name is None:
        return None
    with warnings.catch_warnings():
        # invalid escape sequences etc. in third-party code are not our concern
        warnings.simplefilter("ignore", SyntaxWarning)
        ast.parse(content, filename=relative)
    return name


def read_declaration(source: CandidateSource, parser: DeclarationParser) -> ModuleDeclaration:
    """Parse *source* with *parser*; any failure yields an empty declaration."""
    try:
        name = parser(source.relative, source.read_bytes())
    except Exception:
        logger.debug("No declaration in %s", source.uri, exc_info=True)
        return ModuleDeclaration(source=source)
    if not isinstance(name, str) or not name:
        return ModuleDeclaration(source=source)
    return ModuleDeclaration(source=source, name=name)


def iter_declarations(
    sources: Iterable[CandidateSource],
    parser: DeclarationParser,
) -> Iterator[ModuleDeclaration]:
    """Lazily match every source; one candidate is parsed per pull."""
    for source in sources:
        yield read_declaration(source, parser)
