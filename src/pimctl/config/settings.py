"""CLI output settings — flags and env vars in one frozen object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``PIMCTL_*`` prefix
  3. Code defaults

Where the configuration lives (``--config-dir`` / ``--profile``) is not a
setting: it is resolved per operation by :mod:`pimctl.config.discovery`.
"""

from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings


class PimSettings(BaseSettings):
    """Global CLI flags for pimctl.

    Stored on the :class:`~pimctl.commands._context.AppContext` created by
    the root CLI group.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PIMCTL_",
    }

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> PimSettings:
        """Construct settings, letting env vars fill flags left unset.

        Click passes ``False`` for absent boolean flags, which would
        otherwise shadow ``PIMCTL_*`` values; only truthy flags are kept.
        """
        return cls(**{key: value for key, value in cli_flags.items() if value})
