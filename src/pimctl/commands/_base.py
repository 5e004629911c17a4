"""Click building blocks shared by the pimctl command groups.

``PimCommand`` and ``PimGroup`` accept an ``examples`` string printed by an
eager ``--examples`` flag.  A group that declares no examples of its own
prints those of its subcommands instead, so ``pimctl profile --examples``
lists every profile recipe in one place.
"""

from __future__ import annotations

from typing import Any

import click

from pimctl.config.models import FilterMode
from pimctl.domain.access import Domain

DOMAIN_TYPE = click.Choice([d.value for d in Domain])
FILTER_MODE_TYPE = click.Choice([m.value for m in FilterMode])


def collect_examples(command: click.Command) -> str | None:
    """Examples declared on *command*, falling back to its subcommands'."""
    own = getattr(command, "examples", None)
    if own or not isinstance(command, click.Group):
        return own
    found = [collect_examples(sub) for _, sub in sorted(command.commands.items())]
    return "\n".join(text for text in found if text) or None


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    text = collect_examples(ctx.command)
    if text:
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(text)
    else:
        click.echo(f"No examples for '{ctx.command_path}'.")
    ctx.exit(0)


def _examples_option() -> click.Option:
    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_show_examples,
        help="Show usage examples.",
    )


class PimCommand(click.Command):
    """Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option())


class PimGroup(click.Group):
    """Group whose subcommands are :class:`PimCommand` by default.

    The ``--examples`` flag is always present on a group, since it can
    fall back to the subcommands' examples.
    """

    command_class = PimCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.params.append(_examples_option())
