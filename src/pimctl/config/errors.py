"""Typed configuration and access errors.

Every error carries a stable :class:`ErrorCode` that the service layer
copies into ``ServiceError.code``, and a flat ``details()`` mapping for
machine consumers.  None of these are retried, and none are masked by
falling back to defaults.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import ClassVar


class ErrorCode(StrEnum):
    """Machine-readable failure codes shared by errors and results."""

    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_PARSE_ERROR = "CONFIG_PARSE_ERROR"
    CONFIG_IO_ERROR = "CONFIG_IO_ERROR"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    INVALID_PROFILE_NAME = "INVALID_PROFILE_NAME"
    DOMAIN_DISABLED = "DOMAIN_DISABLED"
    ACCESS_DENIED = "ACCESS_DENIED"


class ConfigError(Exception):
    """Base class for all configuration failures."""

    code: ClassVar[ErrorCode] = ErrorCode.CONFIG_ERROR

    def details(self) -> dict[str, str]:
        return {}


class ConfigParseError(ConfigError):
    """File exists but is not valid JSON or does not match the schema."""

    code = ErrorCode.CONFIG_PARSE_ERROR

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Malformed config at {path}: {detail}")

    def details(self) -> dict[str, str]:
        return {"path": str(self.path), "reason": self.detail}


class ConfigIOError(ConfigError):
    """File could not be read or written."""

    code = ErrorCode.CONFIG_IO_ERROR

    def __init__(self, path: Path, detail: str, *, action: str = "read") -> None:
        self.path = path
        self.detail = detail
        self.action = action
        super().__init__(f"Cannot {action} config at {path}: {detail}")

    def details(self) -> dict[str, str]:
        return {"path": str(self.path), "action": self.action, "reason": self.detail}


class ProfileNotFoundError(ConfigError):
    """An explicitly requested profile has no file."""

    code = ErrorCode.PROFILE_NOT_FOUND

    def __init__(self, name: str, profiles_dir: Path) -> None:
        self.name = name
        self.profiles_dir = profiles_dir
        super().__init__(
            f"Profile '{name}' not found in {profiles_dir}. "
            "Refusing to fall back to the base config."
        )

    def details(self) -> dict[str, str]:
        return {"profile": self.name, "profiles_dir": str(self.profiles_dir)}


class InvalidProfileNameError(ConfigError):
    """Profile name would not be a safe file name."""

    code = ErrorCode.INVALID_PROFILE_NAME

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid profile name {name!r}: {reason}")

    def details(self) -> dict[str, str]:
        return {"profile": self.name, "reason": self.reason}


class DomainDisabledError(ConfigError):
    """The whole domain is switched off in the resolved configuration."""

    code = ErrorCode.DOMAIN_DISABLED

    def __init__(self, domain: str) -> None:
        self.domain = domain
        super().__init__(
            f"Access to {domain} is disabled. Run 'pimctl config show' to review access."
        )

    def details(self) -> dict[str, str]:
        return {"domain": self.domain}


class AccessDeniedError(ConfigError):
    """A named calendar, list, or group is filtered out."""

    code = ErrorCode.ACCESS_DENIED

    def __init__(self, domain: str, name: str) -> None:
        self.domain = domain
        self.name = name
        super().__init__(
            f"'{name}' is not in your allowed {domain}. Update the config to grant access."
        )

    def details(self) -> dict[str, str]:
        return {"domain": self.domain, "name": self.name}
