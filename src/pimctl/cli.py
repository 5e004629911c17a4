"""Root CLI group for pimctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from pimctl import __version__
from pimctl.commands import register_commands
from pimctl.commands._context import AppContext
from pimctl.config.models import SourceOverrides
from pimctl.config.settings import PimSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pimctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--config-dir", default=None, help="Config directory for this call.")
@click.option("--profile", default=None, help="Profile name (profiles/<name>.json).")
@click.option(
    "--workspace",
    "workspace_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Agent workspace; uses <workspace>/apple-pim/ if it has a config.json.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_dir: str | None,
    profile: str | None,
    workspace_dir: Path | None,
) -> None:
    """pimctl — access control for calendar, reminder, contact, and mail agents."""
    settings = PimSettings.from_cli(
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(
        settings,
        overrides=SourceOverrides(config_dir=config_dir, profile=profile),
        workspace_dir=workspace_dir,
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
