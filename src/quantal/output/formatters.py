"""Rich/JSON output for ServiceResult.

Machines get ``--json`` (the serialized ServiceResult). Humans get a
status line plus an operation-specific body, dispatched on ``result.op``;
unknown ops fall back to key-value pairs.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.table import Table
from rich.text import Text

from quantal.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from quantal.services.result import ServiceResult


class OutputSettings(BaseModel):
    """How a result should be rendered."""

    model_config = {"frozen": True}

    json_output: bool = False
    verbose: bool = False
    width: int | None = None


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(width=settings.width)
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        _status_line(console, result)
        renderer(result, console)
        if settings.verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=settings.verbose)
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="q.ok"), Text(f"  {result.op}", style="q.op"), sep="")


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    console.print(Text(f"  {key}: ", style="q.key"), Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        console.print(Text(f"    {key}: {value}"))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = Text(f" [{err.code}]", style="q.code") if err else Text("")
    console.print(
        Text("ERROR", style="q.error"),
        Text(f"  {result.op}", style="q.op"),
        code,
        Text(": "),
        Text(msg),
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(Text(f"    {key}: {value}"))


def _render_quantity(result: ServiceResult, console: Console) -> None:
    """``value unit`` on one line, then the system."""
    data = result.data
    line = Text("  ")
    line.append(str(data["value"]), style="q.value")
    if data["unit"]:
        line.append(" ")
        line.append(str(data["unit"]), style="q.unit")
    console.print(line)
    _field(console, "system", data["system"])


def _render_comparison(result: ServiceResult, console: Console) -> None:
    comparison = result.data["comparison"]
    relation = {-1: "less than", 0: "equal to", 1: "greater than"}.get(comparison, str(comparison))
    _field(console, "comparison", comparison, style="q.value")
    _field(console, "first is", relation)


def _render_units(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Symbol", style="q.symbol", no_wrap=True)
    table.add_column("Name")
    table.add_column("Property")
    table.add_column("Definition")
    table.add_column("Metric", justify="center")
    for unit in result.data["units"]:
        table.add_row(
            Text(unit["symbol"]),
            Text(unit["name"]),
            Text(unit["property"]),
            Text(unit["definition"]),
            "yes" if unit["metric"] else "",
        )
    console.print(table)
    _field(console, "count", result.data["count"])


def _render_generic(result: ServiceResult, console: Console) -> None:
    """Fallback renderer: all data as key-value pairs."""
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "canonicalize": _render_quantity,
    "multiply": _render_quantity,
    "divide": _render_quantity,
    "add": _render_quantity,
    "subtract": _render_quantity,
    "convert_to": _render_quantity,
    "compare": _render_comparison,
    "list_units": _render_units,
}
