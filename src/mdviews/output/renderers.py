"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from mdviews.output.console import create_console, get_output
from mdviews.output.formatters import NO_RESULTS, format_value, to_markdown_table

if TYPE_CHECKING:
    from rich.console import Console

    from mdviews.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal, which is
    the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# ── Record tables ─────────────────────────────────────────────────────


def _cell(name: str, value: Any) -> Text:
    text = format_value(value)
    if name == "title":
        return Text(text, style="mdv.title")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Text(text, style="mdv.number")
    return Text(text)


def _record_table(
    items: list[dict[str, Any]],
    columns: list[str],
    *,
    title: str | None = None,
    numbered: bool = False,
) -> Table:
    table = Table(title=title, show_header=True, show_lines=False, pad_edge=False, expand=False)
    if numbered:
        table.add_column("#", justify="right", style="dim")
    for name in columns:
        table.add_column(name)

    for index, item in enumerate(items, start=1):
        row = [_cell(name, item.get(name)) for name in columns]
        if numbered:
            row.insert(0, Text(str(index)))
        table.add_row(*row)
    return table


def _render_records(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    items: list[dict[str, Any]] = data.get("items", [])
    columns: list[str] = data.get("columns", [])
    numbered = bool(data.get("numbered"))

    if data.get("display") == "markdown":
        for line in to_markdown_table(items, columns, numbered=numbered):
            console.print(line, markup=False, highlight=False, soft_wrap=True)
    elif not items:
        console.print(NO_RESULTS, markup=False)
    else:
        console.print(_record_table(items, columns, title=data.get("title"), numbered=numbered))

    if verbose:
        summary = Text(f"  {data.get('count', len(items))} result(s) from ", style="mdv.key")
        summary.append(str(data.get("source", "")), style="mdv.path")
        console.print(summary)


# ── View listing ──────────────────────────────────────────────────────


def _render_view_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No views configured.")
        return
    console.print("Available views:")
    for item in items:
        line = Text("  ")
        line.append(item["name"], style="mdv.view")
        if item.get("description"):
            line.append(f" - {item['description']}")
        console.print(line)


# ── Fallbacks ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="mdv.error")
    op = Text(f"  {result.op}", style="mdv.op")
    console.print(label, op, Text(" — "), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Status line plus all data as key-value pairs."""
    console.print(Text("OK", style="mdv.ok"), Text(f"  {result.op}", style="mdv.op"))
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        console.print(Text(f"  {key}: ", style="mdv.key"), Text(str(value)))


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "query": _render_records,
    "run_view": _render_records,
    "list_views": _render_view_list,
}
