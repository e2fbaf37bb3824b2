"""Command: list registered rule names."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sanitize.commands._base import SanitizeCommand

if TYPE_CHECKING:
    from sanitize.commands._context import AppContext


@click.command(
    cls=SanitizeCommand,
    examples="""\
  sanitize rules
  sanitize --json rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List every rule name the engine can apply (built-ins and plugins)."""
    from sanitize.services.rules import RuleService

    app.emit(RuleService(app.sanitizer).list_rules())
