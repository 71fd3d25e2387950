"""Command: ad-hoc query over a directory of markdown notes."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import click

from mdviews.commands._base import MdvCommand
from mdviews.config.models import DisplayMode
from mdviews.domain.conditions import Condition, Literal, Operator, OperatorKind
from mdviews.domain.frontmatter import parse_scalar
from mdviews.domain.query import QuerySpec, SortOrder, SortSpec
from mdviews.services.views import ViewService

if TYPE_CHECKING:
    from mdviews.commands._context import AppContext

_NAMED_RE = re.compile(r"^([A-Za-z0-9_]+):([a-z_]+)(?::(.*))?$")
_SYMBOLIC_RE = re.compile(r"^([A-Za-z0-9_]+)\s*(!=|<>|>=|<=|==|=|>|<)\s*(.*)$")

_NO_TARGET = (OperatorKind.EXISTS, OperatorKind.NOT_EXISTS)


def parse_where_expr(expr: str) -> tuple[str, Condition]:
    """Parse one ``--where`` expression into ``(field, condition)``.

    Accepted forms::

        type=book              literal match (``killed=false`` matches unset too)
        rating>=4              symbolic operator: != <> > >= < <= ==
        tags:contains:scifi    named operator with a value
        type:in:book,audiobook comma-separated list for ``in``
        rating:exists          named operator without a value

    Raises ValueError for anything else.
    """
    named = _NAMED_RE.match(expr)
    if named:
        field, op_name, raw = named.groups()
        kind = OperatorKind.parse(op_name)
        if kind in _NO_TARGET:
            return field, Operator(kind)
        if raw is None:
            msg = f"Operator '{op_name}' needs a value: {expr!r}"
            raise ValueError(msg)
        if kind == OperatorKind.IN:
            items = (part.strip() for part in raw.split(","))
            return field, Operator(kind, [parse_scalar(item) for item in items if item])
        return field, Operator(kind, parse_scalar(raw))

    symbolic = _SYMBOLIC_RE.match(expr)
    if symbolic:
        field, symbol, raw = symbolic.groups()
        if symbol == "=":
            return field, Literal(parse_scalar(raw))
        return field, Operator(OperatorKind.parse(symbol), parse_scalar(raw))

    msg = f"Cannot parse condition {expr!r}; expected FIELD=VALUE or FIELD:OP[:VALUE]"
    raise ValueError(msg)


def _where_callback(
    _ctx: click.Context, _param: click.Parameter, value: tuple[str, ...]
) -> dict[str, Condition]:
    where: dict[str, Condition] = {}
    for expr in value:
        try:
            field, condition = parse_where_expr(expr)
        except ValueError as exc:
            raise click.BadParameter(str(exc)) from exc
        where[field] = condition
    return where


def _split_fields(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [name.strip() for name in value.split(",") if name.strip()]


@click.command(
    cls=MdvCommand,
    examples="""\
  mdviews query ~/notes/books
  mdviews query books --where type=book --sort start --order desc
  mdviews query books -w "rating>=4" -w killed=false --limit 10
  mdviews query books -w tags:contains:scifi --fields title,rating,tags
  mdviews query books -w type:in:book,audiobook --display markdown --numbered
  mdviews --json query books -w start:exists""",
)
@click.argument("directory", required=False)
@click.option(
    "-w",
    "--where",
    multiple=True,
    callback=_where_callback,
    help="Condition FIELD=VALUE, FIELD>=VALUE or FIELD:OP[:VALUE]. Repeatable.",
)
@click.option("--sort", "sort_field", default=None, help="Field to sort by.")
@click.option(
    "--order",
    type=click.Choice([o.value for o in SortOrder]),
    default=None,
    help="Sort direction (default: asc, or the configured default).",
)
@click.option("--limit", type=int, default=None, help="Max results.")
@click.option("--fields", default=None, help="Comma-separated fields to select.")
@click.option(
    "--display",
    type=click.Choice([m.value for m in DisplayMode]),
    default=None,
    help="Output as a Rich table or a markdown table.",
)
@click.option("--numbered", is_flag=True, help="Number the result rows.")
@click.pass_obj
def query(
    app: AppContext,
    directory: str | None,
    where: dict[str, Condition],
    sort_field: str | None,
    order: str | None,
    limit: int | None,
    fields: str | None,
    display: str | None,
    numbered: bool,
) -> None:
    """Query the frontmatter of markdown files in DIRECTORY.

    DIRECTORY defaults to the configured home, else the current directory.
    """
    defaults = app.settings.query
    if sort_field:
        sort = SortSpec(field=sort_field, order=SortOrder(order or SortOrder.ASC))
    else:
        sort = SortSpec(field=defaults.sort.field, order=SortOrder(order or defaults.sort.order))

    spec = QuerySpec(
        where=where,
        sort=sort,
        limit=limit,
        fields=_split_fields(fields) or defaults.fields,
    )
    result = ViewService(app.settings).query(
        directory,
        spec,
        display=DisplayMode(display) if display else None,
        numbered=numbered,
    )
    app.emit(result)
