"""Pydantic configuration models with code-baked defaults.

Sparse JSON contract: defaults baked here, config.json only contains
restrictions.  A missing file means every domain is enabled with mode
``all`` — access is opt-out.

Field names are the on-disk wire contract (snake_case).
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class FilterMode(StrEnum):
    """Policy applied to a domain's item list."""

    ALL = "all"
    ALLOWLIST = "allowlist"
    BLOCKLIST = "blocklist"


# --- config.json sections ---


class DomainAccess(BaseModel):
    """Filter section for calendars, reminders, or contacts.

    ``items`` holds display names or stable identifiers.  It is ignored in
    ``all`` mode; an empty allowlist permits nothing.
    """

    model_config = {"frozen": True}

    enabled: bool = True
    mode: FilterMode = FilterMode.ALL
    items: list[str] = Field(default_factory=list)
    default_target: str | None = None


class MailAccess(BaseModel):
    """[mail] section — access only, no item filtering."""

    model_config = {"frozen": True}

    enabled: bool = True


class Configuration(BaseModel):
    """Base configuration composing all domain sections.

    ``default_calendar`` and ``default_reminder_list`` are the flat copies
    of the per-domain defaults kept for older config files.
    """

    model_config = {"frozen": True}

    calendars: DomainAccess = Field(default_factory=DomainAccess)
    reminders: DomainAccess = Field(default_factory=DomainAccess)
    contacts: DomainAccess = Field(default_factory=DomainAccess)
    mail: MailAccess = Field(default_factory=MailAccess)
    default_calendar: str | None = None
    default_reminder_list: str | None = None

    def default_target(self, domain: str) -> str | None:
        """Return the default calendar/list for *domain*, if one is configured.

        The top-level field wins over the section's ``default_target``.
        """
        if domain == "calendars":
            return self.default_calendar or self.calendars.default_target
        if domain == "reminders":
            return self.default_reminder_list or self.reminders.default_target
        if domain == "contacts":
            return self.contacts.default_target
        return None


# The merge result has exactly the base shape.
ResolvedConfiguration = Configuration


class ProfileOverride(BaseModel):
    """Named partial override layered over the base configuration.

    A field absent from the profile JSON inherits from the base.  Presence
    is tracked through ``model_fields_set``, so a profile that sets
    ``default_calendar`` to ``null`` clears the base default while one that
    omits the key leaves it alone.
    """

    model_config = {"frozen": True}

    calendars: DomainAccess | None = None
    reminders: DomainAccess | None = None
    contacts: DomainAccess | None = None
    mail: MailAccess | None = None
    default_calendar: str | None = None
    default_reminder_list: str | None = None


# --- Resolution inputs ---


class SourceOverrides(BaseModel):
    """Candidate ``config_dir`` / ``profile`` from one override source.

    Used for both per-call tool parameters and the host/plugin default.
    Empty strings count as unset.
    """

    model_config = {"frozen": True}

    config_dir: str | None = None
    profile: str | None = None
