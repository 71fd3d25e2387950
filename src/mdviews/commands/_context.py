"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Configures logging and centralizes result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdviews.config.logging import configure_logging
from mdviews.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from mdviews.config.settings import MdvSettings
    from mdviews.services.result import ServiceResult


class AppContext:
    """Settings plus output routing, shared by every subcommand."""

    def __init__(self, settings: MdvSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult and exit non-zero on failure.

        * Success: output to stdout; warnings to stderr unless in JSON mode
          (where they are part of the payload).
        * Failure: output to stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
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
