"""Commands: namespaces loaded in the current interpreter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nsresolve.commands._base import NsCommand

if TYPE_CHECKING:
    from nsresolve.commands._context import AppContext


@click.command(
    cls=NsCommand,
    examples="""\
  nsresolve loaded
  nsresolve loaded -x '^_' -x '^encodings\\.'
  nsresolve -q loaded | grep json""",
)
@click.option(
    "-x",
    "--exclude",
    "patterns",
    multiple=True,
    help="Regex; hide namespaces it matches (searched anywhere in the name).",
)
@click.pass_obj
def loaded(app: AppContext, patterns: tuple[str, ...]) -> None:
    """List loaded namespaces, hiding inlined dependencies."""
    app.emit(app.namespaces.loaded_namespaces(list(patterns) or None))


@click.command(
    "loaded-project",
    cls=NsCommand,
    examples="""\
  nsresolve loaded-project""",
)
@click.pass_obj
def loaded_project(app: AppContext) -> None:
    """List project namespaces that are currently loaded."""
    app.emit(app.namespaces.loaded_project_namespaces())
