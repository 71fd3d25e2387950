"""Plain-text helpers and the top-level ``format_result`` dispatcher.

``to_markdown_table`` produces a pipe table padded by display width, so rows
containing emoji or wide characters still line up.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.cells import cell_len

if TYPE_CHECKING:
    from mdviews.services.result import ServiceResult

NO_RESULTS = "No results found."


class OutputSettings(BaseModel):
    """Output switches taken from the global CLI flags."""

    model_config = {"frozen": True}

    json_output: bool = False
    verbose: bool = False


def format_value(value: Any) -> str:
    """Render one field value for display.

    None is blank, booleans are ``yes``/``no``, lists are comma-joined.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, list):
        return ", ".join(format_value(item) for item in value)
    return str(value)


def _pad(text: str, width: int) -> str:
    return text + " " * (width - cell_len(text))


def to_markdown_table(
    rows: list[dict[str, Any]],
    fields: list[str],
    *,
    numbered: bool = False,
) -> list[str]:
    """Render *rows* as markdown table lines, one column per field."""
    if not rows:
        return [NO_RESULTS]

    cells = [[format_value(row.get(name)) for name in fields] for row in rows]
    widths = [cell_len(name) for name in fields]
    for line in cells:
        widths = [max(w, cell_len(text)) for w, text in zip(widths, line)]

    header = [_pad(name, w) for name, w in zip(fields, widths)]
    separator = ["-" * w for w in widths]
    body = [[_pad(text, w) for text, w in zip(line, widths)] for line in cells]

    if numbered:
        num_width = len(str(len(rows)))
        header.insert(0, _pad("#", num_width))
        separator.insert(0, "-" * num_width)
        for index, line in enumerate(body, start=1):
            line.insert(0, _pad(str(index), num_width))

    lines = ["| " + " | ".join(header) + " |", "|-" + "-|-".join(separator) + "-|"]
    lines.extend("| " + " | ".join(line) + " |" for line in body)
    return lines


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult as JSON or via the Rich renderers."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    from mdviews.output.renderers import render_result

    return render_result(result, verbose=settings.verbose)
