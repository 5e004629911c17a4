"""Plain-text formatters for config commands, plus the result dispatcher.

``format_show`` and ``format_init`` are pure: same input, same text, no
filesystem access.  Home-directory prefixes are shown as ``~``.

The CLI renders ServiceResult for humans (Rich) or machines (--json);
:func:`format_result` picks the mode.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from pimctl.config.models import Configuration, DomainAccess, FilterMode, MailAccess

if TYPE_CHECKING:
    from pimctl.services.result import ServiceResult

HEADER = "Apple PIM Configuration"
_LABEL_WIDTH = 16
_TITLE_WIDTH = 24


def tilde_contract(path: Path | str, home: Path | str | None = None) -> str:
    """Replace a leading home directory with ``~``."""
    text = str(path)
    home_text = str(home if home is not None else Path.home()).rstrip("/\\")
    if not home_text:
        return text
    if text == home_text:
        return "~"
    for sep in ("/", "\\"):
        if text.startswith(home_text + sep):
            return "~" + text[len(home_text) :]
    return text


def _label(name: str) -> str:
    return f"{name}:".ljust(_LABEL_WIDTH)


def _domain_filter_line(name: str, access: DomainAccess) -> str:
    if not access.enabled:
        return f"{_label(name)}disabled"
    line = f"{_label(name)}enabled   mode: {access.mode.value}"
    if access.mode is not FilterMode.ALL and access.items:
        line += f"   items: {', '.join(access.items)}"
    return line


def _mail_line(access: MailAccess) -> str:
    return f"{_label('Mail')}{'enabled' if access.enabled else 'disabled'}"


def format_show(
    config: Configuration,
    config_path: Path | str,
    profiles_dir: Path | str,
    active_profile: str | None,
    *,
    home: Path | str | None = None,
) -> str:
    """Format ``config show`` output.

    Order: header, active profile, one line per domain, defaults (only
    when set), then the config path and profiles directory.
    """
    lines = [
        HEADER,
        "=" * len(HEADER),
        "",
        f"Active profile: {active_profile or '(none)'}",
        "",
        _domain_filter_line("Calendars", config.calendars),
        _domain_filter_line("Reminders", config.reminders),
        _domain_filter_line("Contacts", config.contacts),
        _mail_line(config.mail),
    ]

    default_calendar = config.default_target("calendars")
    default_list = config.default_target("reminders")
    if default_calendar or default_list:
        lines.append("")
        if default_calendar:
            lines.append(f"Default calendar:      {default_calendar}")
        if default_list:
            lines.append(f"Default reminder list: {default_list}")

    lines.append("")
    lines.append(f"Config path:    {tilde_contract(config_path, home)}")
    lines.append(f"Profiles dir:   {tilde_contract(profiles_dir, home)}")
    return "\n".join(lines)


def _detail(*parts: Any) -> str:
    return ", ".join(str(p) for p in parts if p)


def format_init(
    config_path: Path | str,
    profiles_dir: Path | str,
    calendars: Sequence[Mapping[str, Any]] | None,
    reminder_lists: Sequence[Mapping[str, Any]] | None,
    default_calendar: str | None,
    default_reminder_list: str | None,
    *,
    home: Path | str | None = None,
) -> str:
    """Format ``config init`` output: what can be configured, and where."""
    lines: list[str] = []

    if calendars:
        lines.extend(["Available Calendars", "-------------------"])
        for cal in calendars:
            title = str(cal.get("title") or "Unknown")
            detail = _detail(cal.get("type"), cal.get("source"))
            lines.append(f"  {title.ljust(_TITLE_WIDTH)}({detail})")
        lines.append("")

    if reminder_lists:
        lines.extend(["Available Reminder Lists", "------------------------"])
        for reminder_list in reminder_lists:
            title = str(reminder_list.get("title") or "Unknown")
            detail = _detail(reminder_list.get("source"))
            lines.append(f"  {title.ljust(_TITLE_WIDTH)}({detail})")
        lines.append("")

    if default_calendar or default_reminder_list:
        lines.append("Defaults:")
        if default_calendar:
            lines.append(f"  Calendar:       {default_calendar}")
        if default_reminder_list:
            lines.append(f"  Reminder list:  {default_reminder_list}")
        lines.append("")

    lines.append(f"Config path:  {tilde_contract(config_path, home)}")
    lines.append(f"Profiles dir: {tilde_contract(profiles_dir, home)}")
    return "\n".join(lines)


# --- ServiceResult dispatch ---


class OutputSettings(BaseModel):
    """Output mode flags taken from the CLI settings."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; defaults to human-readable rendering.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    from pimctl.output.renderers import render_quiet, render_result

    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
