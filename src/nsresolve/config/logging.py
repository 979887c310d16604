"""structlog configuration for nsresolve.

Both renderers write to stderr so namespace lists on stdout stay pipeable:
- console (default), colored only when stderr is a TTY
- JSON lines (``--log-json``)

Stdlib loggers (``logging.getLogger(__name__)``) and structlog loggers
share one handler, so scan events and import failures render alike.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

# Loggers that chatter at DEBUG while nsresolve is scanning or importing.
NOISY_LOGGERS = ("pluggy", "asyncio")


def log_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Level for the ``nsresolve`` logger; verbose wins over quiet."""
    if verbose:
        return logging.DEBUG
    return logging.ERROR if quiet else logging.WARNING


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Route nsresolve and foreign log records through structlog.

    Safe to call repeatedly: the root handler is replaced, not stacked.
    """
    shared = _processors()
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("nsresolve").setLevel(log_level(verbose=verbose, quiet=quiet))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_scan_context(project_root: Path, classpath: list[str] | None) -> None:
    """Attach the query's project root and classpath source to every event."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        project_root=str(project_root),
        classpath="explicit" if classpath else "sys.path",
    )
