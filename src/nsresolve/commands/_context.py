"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Runtime construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from nsresolve.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from nsresolve.config.settings import NsSettings
    from nsresolve.infrastructure.runtime import Runtime
    from nsresolve.services.namespace import NamespaceService
    from nsresolve.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The runtime is built on first use so ``--help`` and ``--version``
    never discover plugins or read the classpath.
    """

    def __init__(self, settings: NsSettings) -> None:
        self.settings = settings
        self._runtime: Runtime | None = None

        from nsresolve.config.logging import bind_scan_context, configure_logging

        configure_logging(
            verbose=settings.verbose, quiet=settings.quiet, log_json=settings.log_json
        )
        bind_scan_context(settings.project_root, settings.resolver.classpath)

    @property
    def runtime(self) -> Runtime:
        """The runtime (built on first access).

        An explicit classpath is also put on ``sys.path`` so that loading
        commands can import what the scans find.
        """
        if self._runtime is None:
            from nsresolve.infrastructure.runtime import Runtime

            for element in reversed(self.settings.resolver.classpath or []):
                resolved = str(Path(element).absolute())
                if resolved not in sys.path:
                    sys.path.insert(0, resolved)
            self._runtime = Runtime(self.settings)
        return self._runtime

    @property
    def namespaces(self) -> NamespaceService:
        from nsresolve.services.namespace import NamespaceService

        return NamespaceService(self.runtime)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
