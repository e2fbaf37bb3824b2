"""Subcommand modules for sanitize.

Provides register_commands() which uses deferred imports to keep
``sanitize --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from sanitize.commands.apply import apply
    from sanitize.commands.parse import parse
    from sanitize.commands.rules import rules

    cli.add_command(rules)
    cli.add_command(parse)
    cli.add_command(apply)
