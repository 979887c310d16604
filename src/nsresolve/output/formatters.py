"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich text) or machines (--json).
Namespace lists print one name per line so output pipes cleanly into
other tools; everything else prints as key-value pairs.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from nsresolve.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from nsresolve.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Rendering switches taken from the global CLI flags."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _render_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return escape(_json.dumps(value, separators=(",", ":")))
    return escape(str(value))


def _render_data(console: Console, data: dict[str, Any]) -> None:
    names = data.get("namespaces")
    for key, value in data.items():
        if key == "namespaces":
            continue
        if key == "kind":
            console.print(f"  [ns.key]{key}:[/] [ns.kind.{value}]{_render_value(value)}[/]")
        elif key == "path":
            console.print(f"  [ns.key]{key}:[/] [ns.path]{_render_value(value)}[/]")
        else:
            console.print(f"  [ns.key]{key}:[/] {_render_value(value)}")
    if names is not None:
        for name in names:
            console.print(f"[ns.name]{escape(name)}[/]")


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output switches; takes precedence over *json_output*.
        json_output: Shorthand for ``OutputSettings(json_output=True)``.
    """
    settings = settings or OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=2)

    if not result.ok:
        error_msg = result.error.message if result.error else "Unknown error"
        code = f" [{result.error.code}]" if result.error else ""
        return f"ERROR: {result.op}{code} - {error_msg}"

    if settings.quiet:
        names = result.data.get("namespaces")
        return "\n".join(names) if names is not None else f"OK: {result.op}"

    console = create_console(no_color=True)
    console.print(f"[ns.ok]OK:[/] [ns.op]{result.op}[/]")
    _render_data(console, result.data)
    if settings.verbose and result.meta:
        console.print(f"  [ns.key]meta:[/] {_render_value(result.meta)}")
    return get_output(console).rstrip("\n")
