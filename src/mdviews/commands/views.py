"""Command group: named views configured in mdviews.toml."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdviews.commands._base import MdvGroup
from mdviews.config.models import DisplayMode
from mdviews.services.views import ViewService

if TYPE_CHECKING:
    from mdviews.commands._context import AppContext

_VIEWS_EXAMPLES = """\
  mdviews views list
  mdviews views run reading
  mdviews views run reading --display markdown
  mdviews --json views run reading"""


@click.group(cls=MdvGroup, examples=_VIEWS_EXAMPLES)
def views() -> None:
    """List and run the views defined under [views.<name>]."""


@views.command(name="list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List configured views with their descriptions."""
    app.emit(ViewService(app.settings).list_views())


@views.command(
    examples="""\
  mdviews views run reading
  mdviews views run backlog --display markdown"""
)
@click.argument("name")
@click.option(
    "--display",
    type=click.Choice([m.value for m in DisplayMode]),
    default=None,
    help="Override the view's display mode.",
)
@click.pass_obj
def run(app: AppContext, name: str, display: str | None) -> None:
    """Run the view NAME."""
    result = ViewService(app.settings).run_view(
        name, display=DisplayMode(display) if display else None
    )
    app.emit(result)
