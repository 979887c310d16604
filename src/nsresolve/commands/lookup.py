"""Commands: source lookup and test detection for a single namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nsresolve.commands._base import NsCommand

if TYPE_CHECKING:
    from nsresolve.commands._context import AppContext


@click.command(
    cls=NsCommand,
    examples="""\
  nsresolve path json.decoder
  nsresolve --classpath lib/vendor.zip path vendor.util""",
)
@click.argument("name")
@click.pass_obj
def path(app: AppContext, name: str) -> None:
    """Show the file or archive entry that declares NAME."""
    app.emit(app.namespaces.namespace_path(name))


@click.command(
    "has-tests",
    cls=NsCommand,
    examples="""\
  nsresolve has-tests tests.test_core
  nsresolve --classpath . has-tests tests.test_core""",
)
@click.argument("name")
@click.option("--load", is_flag=True, help="Import NAME first if it is not loaded.")
@click.pass_obj
def has_tests(app: AppContext, name: str, load: bool) -> None:
    """Report whether namespace NAME defines test functions."""
    svc = app.namespaces
    if load:
        loaded = svc.ensure_namespace(name)
        if not loaded.ok:
            app.emit(loaded)
    app.emit(svc.has_tests(name))
