"""Root CLI group for littag with global flags and command registration."""

from __future__ import annotations

import click

from littag import __version__
from littag.commands import register_commands
from littag.commands._context import AppContext
from littag.config.settings import LittagSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="littag")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing spans.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--redact-values", is_flag=True, help="Mask candidate values in logs.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    redact_values: bool,
    config_path: str | None,
) -> None:
    """littag — compose constraint tags on literal values."""
    ctx.ensure_object(dict)
    flags = {
        "json_output": json_output,
        "verbose": verbose,
        "log_json": log_json,
        "redact_values": redact_values,
    }
    # Unset flags must not shadow LITTAG_* env vars or the TOML file.
    settings = LittagSettings.from_cli(
        config_path=config_path,
        **{k: v for k, v in flags.items() if v},
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
