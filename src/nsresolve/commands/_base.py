"""Click base classes shared by every nsresolve command.

Each command may carry usage examples. They stay out of ``--help`` and
print on demand with ``--examples``.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class ExamplesOption(click.Option):
    """Eager ``--examples`` flag that prints *examples* and exits."""

    def __init__(self, examples: str) -> None:
        self.examples = textwrap.dedent(examples).strip("\n")
        super().__init__(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._show,
            help="Show usage examples.",
        )

    def _show(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(self.examples, "  "))
        ctx.exit(0)


class NsCommand(click.Command):
    """Command accepting an ``examples=`` block in its decorator."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(ExamplesOption(examples))


class NsGroup(click.Group):
    """Root group; ``@group.command`` builds :class:`NsCommand` instances."""

    command_class = NsCommand
