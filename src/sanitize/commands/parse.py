"""Command: show how a rule string is parsed."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sanitize.commands._base import SanitizeCommand

if TYPE_CHECKING:
    from sanitize.commands._context import AppContext


@click.command(
    cls=SanitizeCommand,
    examples="""\
  sanitize parse "trim_space,capitalize"
  sanitize parse "dive,trim_space,lower"
  sanitize --json parse dive""",
)
@click.argument("rule_string")
@click.pass_obj
def parse(app: AppContext, rule_string: str) -> None:
    """Parse RULE_STRING and show its rules in execution order."""
    from sanitize.services.rules import RuleService

    app.emit(RuleService(app.sanitizer).parse(rule_string))
