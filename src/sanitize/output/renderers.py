"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from sanitize.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from sanitize.services.result import ServiceResult


def render_result(result: ServiceResult) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        _status_line(console, result)
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="san.ok"), Text(f"  {result.op}", style="san.op"))


def _render_error(result: ServiceResult, console: Console) -> None:
    error = result.error
    code = error.code if error else "UNKNOWN"
    message = error.message if error else "Unknown error"
    console.print(
        Text("ERROR", style="san.error"),
        Text(f"  {result.op}", style="san.op"),
        Text(f"  [{code}] {message}"),
    )
    if error and error.detail:
        for key, value in error.detail.items():
            console.print(Text(f"  {key}: ", style="san.key"), Text(_compact(value)))


def _compact(value: object) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


# ── Per-op renderers ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="san.key"), Text(_compact(value)))


def _render_rules(result: ServiceResult, console: Console) -> None:
    for name in result.data.get("rules", []):
        console.print(Text(f"  {name}", style="san.rule"))


def _render_parse(result: ServiceResult, console: Console) -> None:
    if result.data.get("skipped"):
        console.print(Text("  field skipped (no rules)", style="san.key"))
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("rule")
    table.add_column("arg")
    for index, rule in enumerate(result.data.get("rules", []), start=1):
        table.add_row(
            str(index),
            Text(rule["name"], style="san.rule"),
            Text(rule["arg"], style="san.arg"),
        )
    console.print(table)
    console.print(Text(f"  dive: {str(result.data.get('dive', False)).lower()}", style="san.key"))
    for warning in result.warnings:
        console.print(Text(f"  WARNING: {warning}", style="san.warning"))


def _render_apply(result: ServiceResult, console: Console) -> None:
    console.print(json.dumps(result.data.get("record", {}), indent=2), markup=False)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "rules": _render_rules,
    "parse": _render_parse,
    "apply": _render_apply,
}
