"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Resolves where the configuration lives and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

import click

from pimctl.config.discovery import ConfigSources, resolve_sources
from pimctl.config.logging import bind_sources, configure_logging
from pimctl.config.models import SourceOverrides
from pimctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pimctl.config.settings import PimSettings
    from pimctl.services.config import ConfigService
    from pimctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    ``--config-dir`` / ``--profile`` act as per-call overrides and
    ``--workspace`` enables the workspace convention.  The process
    environment is captured once and handed to the resolver explicitly.
    """

    def __init__(
        self,
        settings: PimSettings,
        *,
        overrides: SourceOverrides | None = None,
        workspace_dir: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.settings = settings
        self.overrides = overrides or SourceOverrides()
        self.workspace_dir = workspace_dir
        self._env = dict(os.environ if env is None else env)
        self._sources: ConfigSources | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def sources(self) -> ConfigSources:
        """Resolved config directory and profile (computed on first use)."""
        if self._sources is None:
            self._sources = resolve_sources(
                self.overrides,
                self.workspace_dir,
                None,
                self._env,
            )
            bind_sources(self._sources)
        return self._sources

    @property
    def service(self) -> ConfigService:
        from pimctl.services.config import ConfigService

        return ConfigService(self.sources)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
