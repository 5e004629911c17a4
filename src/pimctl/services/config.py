"""ConfigService — show, initialize, and query the access configuration.

Every method resolves configuration fresh from disk; nothing is cached
between calls, so edits apply on the next operation.  Configuration errors
become failed ServiceResults carrying the error's code.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pimctl.config.discovery import ConfigSources
from pimctl.config.errors import ConfigError
from pimctl.config.loader import (
    config_exists,
    list_profiles,
    load_configuration,
    load_profile,
)
from pimctl.config.models import Configuration, DomainAccess, FilterMode, ProfileOverride
from pimctl.config.writer import write_config, write_profile
from pimctl.domain.access import Domain, domain_access
from pimctl.domain.filters import is_allowed
from pimctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class ConfigService:
    """Operations over one resolved configuration location.

    Usage::

        sources = resolve_sources(call, workspace, host, os.environ)
        result = ConfigService(sources).check("calendars", "Work")
    """

    def __init__(self, sources: ConfigSources) -> None:
        self._sources = sources

    @property
    def sources(self) -> ConfigSources:
        return self._sources

    def _missing_base_warnings(self) -> list[str]:
        if config_exists(self._sources.config_dir):
            return []
        return [f"No configuration file at {self._sources.config_path}; using defaults"]

    def _meta(self) -> dict[str, Any]:
        return {
            "config_dir_origin": self._sources.config_dir_origin,
            "profile_origin": self._sources.profile_origin,
        }

    def load(self) -> Configuration:
        """Resolved configuration (base + active profile). Raises ConfigError."""
        return load_configuration(self._sources.config_dir, self._sources.profile)

    def show(self) -> ServiceResult:
        """Resolved configuration with the paths it came from."""
        op = "config_show"
        try:
            config = self.load()
        except ConfigError as exc:
            return ServiceResult.failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "config": config.model_dump(mode="json"),
                "config_path": str(self._sources.config_path),
                "profiles_dir": str(self._sources.profiles_dir),
                "active_profile": self._sources.profile,
                "config_exists": config_exists(self._sources.config_dir),
            },
            warnings=self._missing_base_warnings(),
            meta=self._meta(),
        )

    def check(self, domain: Domain | str, name: str, item_id: str | None = None) -> ServiceResult:
        """Report whether *name* / *item_id* is accessible in *domain*."""
        op = "check_access"
        try:
            config = self.load()
        except ConfigError as exc:
            return ServiceResult.failure(op, exc)

        section = domain_access(config, domain)
        data: dict[str, Any] = {
            "domain": Domain(domain).value,
            "name": name,
            "id": item_id,
            "enabled": section.enabled,
        }
        if isinstance(section, DomainAccess):
            data["mode"] = section.mode.value
            data["allowed"] = section.enabled and is_allowed(name, item_id, access=section)
        else:
            data["mode"] = None
            data["allowed"] = section.enabled

        logger.debug("Access check %s/%s -> %s", data["domain"], name, data["allowed"])
        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=self._missing_base_warnings(),
            meta=self._meta(),
        )

    def init(self, discovered: Mapping[str, Any], *, write: bool = False) -> ServiceResult:
        """List discovered calendars/lists; optionally seed ``config.json``.

        *discovered* is the payload produced by the native helper's
        discovery step: ``available_calendars``, ``available_reminder_lists``,
        ``default_calendar`` and ``default_reminder_list``.  An existing
        config file is never overwritten.
        """
        op = "config_init"
        calendars: Sequence[Mapping[str, Any]] = discovered.get("available_calendars") or []
        lists: Sequence[Mapping[str, Any]] = discovered.get("available_reminder_lists") or []
        default_calendar = discovered.get("default_calendar") or None
        default_list = discovered.get("default_reminder_list") or None

        warnings: list[str] = []
        written = False
        if write:
            if config_exists(self._sources.config_dir):
                warnings.append(
                    f"Configuration already exists at {self._sources.config_path}; not overwritten"
                )
            else:
                try:
                    write_config(
                        self._sources.config_dir,
                        Configuration(
                            default_calendar=default_calendar,
                            default_reminder_list=default_list,
                        ),
                    )
                except ConfigError as exc:
                    return ServiceResult.failure(op, exc)
                written = True
                logger.info("Wrote default configuration to %s", self._sources.config_path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "config_path": str(self._sources.config_path),
                "profiles_dir": str(self._sources.profiles_dir),
                "available_calendars": list(calendars),
                "available_reminder_lists": list(lists),
                "default_calendar": default_calendar,
                "default_reminder_list": default_list,
                "written": written,
            },
            warnings=warnings,
        )

    def list_profiles(self) -> ServiceResult:
        """Names of the profiles in the resolved config directory."""
        names = list_profiles(self._sources.config_dir)
        return ServiceResult(
            ok=True,
            op="list_profiles",
            data={
                "profiles_dir": str(self._sources.profiles_dir),
                "items": names,
                "count": len(names),
                "active_profile": self._sources.profile,
            },
        )

    def save_profile(
        self,
        name: str,
        domain: Domain | str,
        *,
        mode: FilterMode | str = FilterMode.ALL,
        items: Sequence[str] = (),
        enabled: bool = True,
    ) -> ServiceResult:
        """Create or update one section of profile *name*.

        The section is replaced as a whole; other sections already in the
        profile file are kept.
        """
        op = "save_profile"
        key = Domain(domain).value
        try:
            existing = load_profile(self._sources.config_dir, name)
        except ConfigError as exc:
            return ServiceResult.failure(op, exc)

        update: dict[str, Any] = {}
        if existing is not None:
            update = {field: getattr(existing, field) for field in existing.model_fields_set}
        if key == Domain.MAIL:
            update[key] = {"enabled": enabled}
        else:
            update[key] = {"enabled": enabled, "mode": FilterMode(mode), "items": list(items)}
        profile = ProfileOverride.model_validate(update)

        try:
            path = write_profile(self._sources.config_dir, name, profile)
        except ConfigError as exc:
            return ServiceResult.failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "domain": key, "path": str(path)},
        )
