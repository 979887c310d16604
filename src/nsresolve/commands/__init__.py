"""Subcommand modules for nsresolve.

Provides register_commands() which uses deferred imports to keep
``nsresolve --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from nsresolve.commands.loaded import loaded, loaded_project
    from nsresolve.commands.lookup import has_tests, path
    from nsresolve.commands.project import ensure, load_project, project

    cli.add_command(project)
    cli.add_command(load_project)
    cli.add_command(ensure)
    cli.add_command(loaded)
    cli.add_command(loaded_project)
    cli.add_command(path)
    cli.add_command(has_tests)
