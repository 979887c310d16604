"""Commands: project namespace discovery and loading."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nsresolve.commands._base import NsCommand

if TYPE_CHECKING:
    from nsresolve.commands._context import AppContext


@click.command(
    cls=NsCommand,
    examples="""\
  nsresolve project
  nsresolve --project-root ~/src/app --classpath ~/src/app/src project
  nsresolve -q project | wc -l""",
)
@click.pass_obj
def project(app: AppContext) -> None:
    """List namespaces defined in source directories under the project root."""
    app.emit(app.namespaces.project_namespaces())


@click.command(
    "load-project",
    cls=NsCommand,
    examples="""\
  nsresolve load-project
  nsresolve --json load-project""",
)
@click.pass_obj
def load_project(app: AppContext) -> None:
    """Import every project namespace and list those that loaded."""
    app.emit(app.namespaces.load_project_namespaces())


@click.command(
    cls=NsCommand,
    examples="""\
  nsresolve ensure json.decoder
  nsresolve --classpath src ensure app.core""",
)
@click.argument("name")
@click.pass_obj
def ensure(app: AppContext, name: str) -> None:
    """Import NAME unless it is already loaded."""
    app.emit(app.namespaces.ensure_namespace(name))
