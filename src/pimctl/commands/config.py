"""Command group: inspect and initialize the access configuration."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from pimctl.commands._base import DOMAIN_TYPE, PimGroup

if TYPE_CHECKING:
    from pimctl.commands._context import AppContext


@click.group(
    cls=PimGroup,
    examples="""\
  pimctl config show
  pimctl --profile travel config show
  pimctl config check calendars "✈️ Travel"
  pimctl config init --discovered discovered.json --write""",
)
def config() -> None:
    """Show, initialize, and query the access configuration."""


@config.command(
    examples="""\
  pimctl config show
  pimctl --json config show
  pimctl --config-dir ~/agents/assistant --profile work config show""",
)
@click.pass_obj
def show(app: AppContext) -> None:
    """Display the resolved configuration (base + profile)."""
    app.emit(app.service.show())


@config.command(
    examples="""\
  pimctl config init --discovered discovered.json
  native-helper config init | pimctl config init --discovered - --write""",
)
@click.option(
    "--discovered",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="JSON from the native discovery step ('-' for stdin).",
)
@click.option("--write", is_flag=True, help="Write a default config.json if none exists.")
@click.pass_obj
def init(app: AppContext, discovered: Any, write: bool) -> None:
    """List available calendars and reminder lists for configuration setup."""
    payload: dict[str, Any] = {}
    if discovered is not None:
        try:
            payload = json.load(discovered)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--discovered") from exc
        if not isinstance(payload, dict):
            raise click.BadParameter("expected a JSON object", param_hint="--discovered")
    app.emit(app.service.init(payload, write=write))


@config.command(
    examples="""\
  pimctl config check calendars Work
  pimctl config check calendars Work --id 5A1F-22C0
  pimctl -q config check reminders Groceries""",
)
@click.argument("domain", type=DOMAIN_TYPE)
@click.argument("name")
@click.option("--id", "item_id", default=None, help="Stable identifier of the item.")
@click.pass_obj
def check(app: AppContext, domain: str, name: str, item_id: str | None) -> None:
    """Check whether an item is accessible under the resolved configuration."""
    app.emit(app.service.check(domain, name, item_id))
