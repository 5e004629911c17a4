"""Base config and profile loading, validation, and merging.

File locations (relative to the resolved config directory):
- Base config: ``config.json``
- Profiles:    ``profiles/{name}.json``

Failure policy: a missing base file is defined behavior (all-access
defaults).  Everything else (unreadable files, malformed JSON, invalid
profile names, a requested profile with no file) raises a
:class:`~pimctl.config.errors.ConfigError` and is never replaced by defaults.
Profile names are validated before any file is touched; after that, base
errors are raised before any profile lookup is attempted.
"""

from __future__ import annotations

import logging
import unicodedata
from pathlib import Path, PurePosixPath
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from pimctl.config.discovery import CONFIG_FILENAME, PROFILES_DIRNAME
from pimctl.config.errors import (
    ConfigIOError,
    ConfigParseError,
    InvalidProfileNameError,
    ProfileNotFoundError,
)
from pimctl.config.models import Configuration, DomainAccess, ProfileOverride

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_SECTIONS = ("calendars", "reminders", "contacts", "mail")
_DEFAULT_FIELDS = ("default_calendar", "default_reminder_list")
_SECTION_DEFAULTS = (("calendars", "default_calendar"), ("reminders", "default_reminder_list"))


def config_path(config_dir: Path) -> Path:
    return config_dir / CONFIG_FILENAME


def profiles_dir(config_dir: Path) -> Path:
    return config_dir / PROFILES_DIRNAME


def config_exists(config_dir: Path) -> bool:
    """Whether a base config file is present (False means defaults apply)."""
    return config_path(config_dir).is_file()


def _read_model(path: Path, model: type[M]) -> M | None:
    """Read and validate one JSON file; None only if it does not exist.

    The file is read in a single call so a concurrent writer is observed
    either entirely before or entirely after its replace.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        raise ConfigIOError(path, str(exc)) from exc

    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        detail = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigParseError(path, detail) from exc


def load_base(config_dir: Path) -> Configuration:
    """Load ``config.json``, or the all-access default if it is missing."""
    path = config_path(config_dir)
    config = _read_model(path, Configuration)
    if config is None:
        logger.info("No configuration file at %s; using defaults", path)
        return Configuration()
    return config


def validate_profile_name(name: str) -> None:
    """Reject names that are empty, hidden, unprintable, or could leave ``profiles/``."""
    if not name:
        raise InvalidProfileNameError(name, "name cannot be empty")
    if "/" in name or "\\" in name or ".." in name:
        raise InvalidProfileNameError(name, "name cannot contain '/', '\\', or '..'")
    if name.startswith("."):
        raise InvalidProfileNameError(name, "name cannot start with '.'")
    if any(unicodedata.category(char) == "Cc" for char in name):
        raise InvalidProfileNameError(name, "name cannot contain control characters")


def profile_path(config_dir: Path, name: str) -> Path:
    """Path for a named profile.

    Only the final path component of *name* is used, so even a name that
    skipped :func:`validate_profile_name` stays inside ``profiles/``.
    """
    safe_name = PurePosixPath(name.replace("\\", "/")).name
    return profiles_dir(config_dir) / f"{safe_name}.json"


def load_profile(config_dir: Path, name: str) -> ProfileOverride | None:
    """Load a named profile; None if its file does not exist."""
    validate_profile_name(name)
    return _read_model(profile_path(config_dir, name), ProfileOverride)


def list_profiles(config_dir: Path) -> list[str]:
    """Sorted names of the profiles available in *config_dir*."""
    directory = profiles_dir(config_dir)
    if not directory.is_dir():
        return []
    names: list[str] = []
    for path in directory.glob("*.json"):
        try:
            validate_profile_name(path.stem)
        except InvalidProfileNameError:
            continue
        names.append(path.stem)
    return sorted(names)


def merge(base: Configuration, profile: ProfileOverride | None) -> Configuration:
    """Layer *profile* over *base*.

    Each section the profile sets replaces the base section entirely; no
    field-level union happens within a section.  Defaults are replaced
    independently.  A replaced section that names its own ``default_target``
    also updates the matching flat default.  A None or empty profile
    returns *base* unchanged.
    """
    if profile is None:
        return base

    present = profile.model_fields_set
    update: dict[str, object] = {}
    for section in _SECTIONS:
        value = getattr(profile, section)
        if section in present and value is not None:
            update[section] = value
    for field in _DEFAULT_FIELDS:
        if field in present:
            update[field] = getattr(profile, field)

    # The flat default mirrors the section that replaced it, unless the
    # profile sets the flat field itself.
    for section, field in _SECTION_DEFAULTS:
        replaced = update.get(section)
        if isinstance(replaced, DomainAccess) and replaced.default_target and field not in present:
            update[field] = replaced.default_target

    if not update:
        return base
    return base.model_copy(update=update)


def load_configuration(config_dir: Path, profile: str | None = None) -> Configuration:
    """Load the base config and apply *profile* if one is requested.

    Raises:
        ConfigParseError / ConfigIOError: The base or profile file is bad.
        InvalidProfileNameError: *profile* fails validation (no I/O done).
        ProfileNotFoundError: *profile* was requested but has no file.
    """
    if profile:
        validate_profile_name(profile)

    base = load_base(config_dir)
    if not profile:
        return base

    override = _read_model(profile_path(config_dir, profile), ProfileOverride)
    if override is None:
        raise ProfileNotFoundError(profile, profiles_dir(config_dir))

    logger.debug("Applying profile %s from %s", profile, profile_path(config_dir, profile))
    return merge(base, override)
