"""Config directory and profile discovery.

Priority chain (per value, first non-empty wins):
  1. Per-call parameter   — tool argument or ``--config-dir`` / ``--profile``
  2. Workspace convention — ``{workspace}/apple-pim/config.json`` (dir only)
  3. Host/plugin default  — gateway-level configured value
  4. Environment          — ``APPLE_PIM_CONFIG_DIR`` / ``APPLE_PIM_PROFILE``
  5. Built-in default     — ``~/.config/apple-pim``, no profile

The environment is passed in as a mapping and never mutated, so one
process can resolve for several isolated agents at the same time.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pimctl.config.models import SourceOverrides

logger = logging.getLogger(__name__)

APP_NAME = "apple-pim"
CONFIG_FILENAME = "config.json"
PROFILES_DIRNAME = "profiles"
CONFIG_DIR_ENV_VAR = "APPLE_PIM_CONFIG_DIR"
PROFILE_ENV_VAR = "APPLE_PIM_PROFILE"


@dataclass(frozen=True)
class ConfigSources:
    """Resolved location of the active configuration.

    Attributes:
        config_dir: Directory holding ``config.json`` and ``profiles/``.
        profile: Active profile name, or None for the base config only.
        config_dir_origin: Which source won for ``config_dir``.
        profile_origin: Which source won for ``profile`` (None if absent).
    """

    config_dir: Path
    profile: str | None = None
    config_dir_origin: str = "default"
    profile_origin: str | None = None

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    @property
    def profiles_dir(self) -> Path:
        return self.config_dir / PROFILES_DIRNAME


def default_config_dir(home: Path | None = None) -> Path:
    """Built-in config directory (``~/.config/apple-pim``)."""
    return (home or Path.home()) / ".config" / APP_NAME


def expand_home(value: str, home: Path | None = None) -> Path:
    """Expand a leading ``~`` to *home* (default: the current user's home)."""
    if value != "~" and not value.startswith(("~/", "~\\")):
        return Path(value)
    base = home or Path.home()
    rest = value[2:]
    return base / rest if rest else base


def find_workspace_config_dir(workspace_dir: Path | str | None) -> Path | None:
    """Return ``{workspace}/apple-pim`` if it holds a ``config.json``."""
    if not workspace_dir:
        return None
    candidate = Path(workspace_dir) / APP_NAME
    if (candidate / CONFIG_FILENAME).is_file():
        return candidate
    return None


def _first(*candidates: tuple[str, str | None]) -> tuple[str, str] | None:
    for origin, value in candidates:
        if value:
            return origin, value
    return None


def resolve_sources(
    call: SourceOverrides | None,
    workspace_dir: Path | str | None,
    host: SourceOverrides | None,
    env: Mapping[str, str],
    *,
    home: Path | None = None,
) -> ConfigSources:
    """Resolve ``(config_dir, profile)`` for one operation.

    Args:
        call: Explicit per-call overrides.
        workspace_dir: Agent workspace checked for the ``apple-pim/`` convention.
        host: Host/plugin-level defaults.
        env: Environment mapping (usually ``os.environ``); read only.
        home: Home directory used for ``~`` expansion and the built-in default.
    """
    call = call or SourceOverrides()
    host = host or SourceOverrides()

    workspace_config = find_workspace_config_dir(workspace_dir)
    chosen_dir = _first(
        ("call", call.config_dir),
        ("workspace", str(workspace_config) if workspace_config else None),
        ("host", host.config_dir),
        ("env", env.get(CONFIG_DIR_ENV_VAR)),
    )
    if chosen_dir is None:
        dir_origin, config_dir = "default", default_config_dir(home)
    else:
        dir_origin, config_dir = chosen_dir[0], expand_home(chosen_dir[1], home)

    chosen_profile = _first(
        ("call", call.profile),
        ("host", host.profile),
        ("env", env.get(PROFILE_ENV_VAR)),
    )
    profile_origin, profile = chosen_profile if chosen_profile else (None, None)

    logger.debug(
        "Resolved config_dir=%s (%s), profile=%s (%s)",
        config_dir,
        dir_origin,
        profile,
        profile_origin,
    )
    return ConfigSources(
        config_dir=config_dir,
        profile=profile,
        config_dir_origin=dir_origin,
        profile_origin=profile_origin,
    )
