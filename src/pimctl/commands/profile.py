"""Command group: list and edit named profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pimctl.commands._base import DOMAIN_TYPE, FILTER_MODE_TYPE, PimGroup
from pimctl.config.models import FilterMode

if TYPE_CHECKING:
    from pimctl.commands._context import AppContext


@click.group(cls=PimGroup)
def profile() -> None:
    """Named partial overrides layered over the base configuration."""


@profile.command(
    "list",
    examples="""\
  pimctl profile list
  pimctl --config-dir ./workspace/apple-pim profile list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List profiles in the resolved config directory."""
    app.emit(app.service.list_profiles())


@profile.command(
    "set",
    examples="""\
  pimctl profile set travel calendars --mode allowlist --item Travel --item Personal
  pimctl profile set kids contacts --disable
  pimctl profile set work mail --disable""",
)
@click.argument("name")
@click.argument("domain", type=DOMAIN_TYPE)
@click.option(
    "--mode",
    type=FILTER_MODE_TYPE,
    default=FilterMode.ALL.value,
    help="Filter mode for the section.",
)
@click.option("--item", "items", multiple=True, help="Name or identifier (repeatable).")
@click.option("--disable", is_flag=True, help="Hide the whole domain in this profile.")
@click.pass_obj
def set_cmd(
    app: AppContext,
    name: str,
    domain: str,
    mode: str,
    items: tuple[str, ...],
    disable: bool,
) -> None:
    """Replace one section of profile NAME (created if missing)."""
    app.emit(app.service.save_profile(name, domain, mode=mode, items=items, enabled=not disable))
