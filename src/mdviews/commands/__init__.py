"""Subcommand modules for mdviews.

Provides register_commands(), which uses deferred imports to keep
``mdviews --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``views`` group and the standalone ``query`` command."""
    from mdviews.commands.query import query
    from mdviews.commands.views import views

    cli.add_command(query)
    cli.add_command(views)
