"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. The engine is built lazily so ``--help`` and
``--version`` never trigger plugin discovery.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sanitize.output.formatters import format_result

if TYPE_CHECKING:
    from sanitize.config.settings import SanitizeSettings
    from sanitize.engine import Sanitizer
    from sanitize.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: SanitizeSettings) -> None:
        self.settings = settings
        self._sanitizer: Sanitizer | None = None

        from sanitize.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def sanitizer(self) -> Sanitizer:
        """Engine configured from settings (created on first access)."""
        if self._sanitizer is None:
            from sanitize.engine import Sanitizer

            self._sanitizer = Sanitizer.from_settings(self.settings)
        return self._sanitizer

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
