"""Root CLI group for sanitize with global flags and command registration."""

from __future__ import annotations

import click

from sanitize import __version__
from sanitize.commands import register_commands
from sanitize.commands._context import AppContext
from sanitize.config.settings import SanitizeSettings
from sanitize.domain.errors import ConfigError


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="sanitize")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging of every rule applied.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Config file (sanitize.toml, or pyproject.toml with [tool.sanitize]).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """sanitize — apply tagged field rules to records."""
    try:
        settings = SanitizeSettings.resolve(
            config=config_path,
            json_output=json_output,
            verbose=verbose,
            log_json=log_json,
        )
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
