"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from pimctl.config.models import Configuration
from pimctl.output.console import create_console, get_output
from pimctl.output.formatters import format_init, format_show

if TYPE_CHECKING:
    from rich.console import Console

    from pimctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "check_access":
        return "allowed" if result.data.get("allowed") else "denied"
    if result.op == "list_profiles":
        return "\n".join(result.data.get("items", []))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text.assemble(("OK", "pim.ok"), (f"  {result.op}", "pim.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    style = "pim.path" if key.endswith(("path", "_dir")) else ""
    console.print(Text.assemble((f"  {key}: ", "pim.key"), (str(value), style)), soft_wrap=True)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


def _render_block(console: Console, text: str) -> None:
    console.print(Text(text), soft_wrap=True)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "pim.error"), (f"  {result.op}", "pim.op"), f": {msg}"),
        soft_wrap=True,
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Config renderers ──────────────────────────────────────────────────


def _render_config_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    config = Configuration.model_validate(data["config"])
    _render_block(
        console,
        format_show(
            config,
            data["config_path"],
            data["profiles_dir"],
            data.get("active_profile"),
        ),
    )
    if verbose:
        _render_meta(console, result)


def _render_config_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _render_block(
        console,
        format_init(
            data["config_path"],
            data["profiles_dir"],
            data.get("available_calendars"),
            data.get("available_reminder_lists"),
            data.get("default_calendar"),
            data.get("default_reminder_list"),
        ),
    )
    if data.get("written"):
        console.print()
        console.print(Text("Wrote default configuration.", style="pim.ok"))


def _render_check_access(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    if data.get("allowed"):
        verdict = Text("allowed", style="pim.allowed")
    else:
        verdict = Text("denied", style="pim.denied")
    subject = Text(f"{data.get('domain')}: {data.get('name')}  ")
    console.print(Text.assemble(subject, verdict), soft_wrap=True)
    if not data.get("enabled", True):
        console.print(Text("  domain is disabled", style="pim.warning"))
    elif data.get("mode"):
        _field(console, "mode", data["mode"])
    if verbose:
        _render_meta(console, result)


def _render_profiles(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    active = result.data.get("active_profile")
    if not items:
        console.print(Text(f"No profiles in {result.data.get('profiles_dir')}", style="dim"))
        return
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Profile")
    table.add_column("Active")
    for name in items:
        table.add_row(Text(name), "*" if name == active else "")
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "config_show": _render_config_show,
    "config_init": _render_config_init,
    "check_access": _render_check_access,
    "list_profiles": _render_profiles,
}
