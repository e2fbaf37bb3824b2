"""Command: sanitize a JSON record against a dataclass or pydantic model."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from sanitize.commands._base import SanitizeCommand

if TYPE_CHECKING:
    from sanitize.commands._context import AppContext


@click.command(
    cls=SanitizeCommand,
    examples="""\
  sanitize apply myapp.models:User user.json
  cat user.json | sanitize --json apply myapp.models:User""",
)
@click.argument("target")
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.pass_obj
def apply(app: AppContext, target: str, input_file: TextIO) -> None:
    """Load JSON from INPUT_FILE (default stdin) as TARGET, sanitize, and print it.

    TARGET is a ``module:Class`` reference to a dataclass or pydantic model.
    """
    from sanitize.services.rules import RuleService

    app.emit(RuleService(app.sanitizer).apply_json(target, input_file.read()))
