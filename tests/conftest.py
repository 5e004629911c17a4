"""Shared pytest fixtures and test helpers for pimctl tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Empty config directory (no config.json, no profiles)."""
    directory = tmp_path / "apple-pim"
    directory.mkdir()
    return directory


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own config environment out of tests."""
    for var in (
        "APPLE_PIM_CONFIG_DIR",
        "APPLE_PIM_PROFILE",
        "PIMCTL_JSON_OUTPUT",
        "PIMCTL_QUIET",
        "PIMCTL_VERBOSE",
        "PIMCTL_LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def write_base(config_dir: Path):
    """Write ``config.json`` in the test config directory."""

    def _write(data: Any) -> Path:
        return write_json(config_dir / "config.json", data)

    return _write


@pytest.fixture
def write_profile_file(config_dir: Path):
    """Write ``profiles/<name>.json`` in the test config directory."""

    def _write(name: str, data: Any) -> Path:
        return write_json(config_dir / "profiles" / f"{name}.json", data)

    return _write
