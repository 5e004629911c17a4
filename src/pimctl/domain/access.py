"""Domain-level access guards used before reading or writing an item.

Combines the ``enabled`` switch with the item filter, and resolves the
target calendar/list for create operations: explicit name, then the
configured default, then ``None`` (the caller uses the system default).
"""

from __future__ import annotations

from enum import StrEnum

from pimctl.config.errors import AccessDeniedError, DomainDisabledError
from pimctl.config.models import Configuration, DomainAccess, MailAccess
from pimctl.domain.filters import is_allowed


class Domain(StrEnum):
    """Governed categories of personal data."""

    CALENDARS = "calendars"
    REMINDERS = "reminders"
    CONTACTS = "contacts"
    MAIL = "mail"


FILTERABLE_DOMAINS: tuple[Domain, ...] = (Domain.CALENDARS, Domain.REMINDERS, Domain.CONTACTS)


def domain_access(config: Configuration, domain: Domain | str) -> DomainAccess | MailAccess:
    """Return the resolved section for *domain*."""
    return getattr(config, Domain(domain).value)


def is_enabled(config: Configuration, domain: Domain | str) -> bool:
    return domain_access(config, domain).enabled


def ensure_enabled(config: Configuration, domain: Domain | str) -> None:
    """Raise :class:`DomainDisabledError` if *domain* is switched off."""
    if not is_enabled(config, domain):
        raise DomainDisabledError(Domain(domain).value)


def ensure_allowed(
    config: Configuration,
    domain: Domain | str,
    name: str,
    item_id: str | None = None,
) -> None:
    """Raise unless *name*/*item_id* is visible under *config*.

    Mail has no item filter, so only the enabled switch applies there.
    """
    ensure_enabled(config, domain)
    section = domain_access(config, domain)
    if isinstance(section, DomainAccess) and not is_allowed(name, item_id, access=section):
        raise AccessDeniedError(Domain(domain).value, name)


def resolve_target(
    config: Configuration,
    domain: Domain | str,
    explicit: str | None = None,
) -> str | None:
    """Pick the calendar/list a create operation should write to.

    Returns ``None`` when neither an explicit nor a configured default
    exists.  Any returned name has passed :func:`ensure_allowed`.
    """
    ensure_enabled(config, domain)
    target = explicit or config.default_target(Domain(domain).value)
    if target is None:
        return None
    ensure_allowed(config, domain, target)
    return target
