"""Root CLI group for nsresolve with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from nsresolve import __version__
from nsresolve.commands import register_commands
from nsresolve.commands._base import NsGroup
from nsresolve.commands._context import AppContext
from nsresolve.config.settings import NsSettings


@click.group(cls=NsGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="nsresolve")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (bare namespace lists).")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and scan statistics.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--project-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory).",
)
@click.option(
    "--classpath",
    "classpath",
    multiple=True,
    help="Classpath element; repeat to build the list (default: sys.path).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    project_root: Path | None,
    classpath: tuple[str, ...],
) -> None:
    """nsresolve — resolve module namespaces against the classpath."""
    settings = NsSettings.from_cli(
        config_path=config_path,
        project_root=project_root.absolute() if project_root else None,
        classpath=list(classpath),
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)


def main() -> None:
    cli()
