"""Tests for the ``config`` command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pimctl.cli import cli


def _run(runner: CliRunner, config_dir: Path, *args: str, **kwargs):
    return runner.invoke(cli, ["--config-dir", str(config_dir), *args], **kwargs)


class TestShow:
    def test_defaults_with_warning(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(cli_runner, config_dir, "config", "show")
        assert result.exit_code == 0
        assert "Apple PIM Configuration" in result.stdout
        assert "Active profile: (none)" in result.stdout
        assert "Calendars:      enabled   mode: all" in result.stdout
        assert "using defaults" in result.stderr

    def test_profile(
        self, cli_runner: CliRunner, config_dir: Path, write_base, write_profile_file
    ) -> None:
        write_base({"calendars": {"mode": "allowlist", "items": ["A", "B", "C"]}})
        write_profile_file("narrow", {"calendars": {"mode": "allowlist", "items": ["B"]}})
        result = _run(cli_runner, config_dir, "--profile", "narrow", "config", "show")
        assert result.exit_code == 0
        assert "Active profile: narrow" in result.stdout
        assert "items: B" in result.stdout
        assert "A, B, C" not in result.stdout

    def test_profile_from_env(
        self, cli_runner: CliRunner, config_dir: Path, write_profile_file
    ) -> None:
        write_profile_file("kids", {"mail": {"enabled": False}})
        result = _run(cli_runner, config_dir, "config", "show", env={"APPLE_PIM_PROFILE": "kids"})
        assert "Mail:           disabled" in result.stdout

    def test_missing_profile_exits_1(
        self, cli_runner: CliRunner, config_dir: Path, write_base
    ) -> None:
        write_base({})
        result = _run(cli_runner, config_dir, "--profile", "travel", "config", "show")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Profile 'travel' not found" in result.stderr

    def test_malformed_exits_1(self, cli_runner: CliRunner, config_dir: Path) -> None:
        (config_dir / "config.json").write_text("{")
        result = _run(cli_runner, config_dir, "config", "show")
        assert result.exit_code == 1
        assert "Malformed config" in result.stderr

    def test_json(self, cli_runner: CliRunner, config_dir: Path, write_base) -> None:
        write_base({"contacts": {"enabled": False}})
        result = _run(cli_runner, config_dir, "--json", "config", "show")
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["data"]["config"]["contacts"]["enabled"] is False
        assert payload["meta"]["config_dir_origin"] == "call"

    def test_json_error(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(cli_runner, config_dir, "--json", "--profile", "nope", "config", "show")
        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "PROFILE_NOT_FOUND"


class TestCheck:
    @pytest.fixture(autouse=True)
    def _base(self, write_base) -> None:
        write_base(
            {
                "calendars": {"mode": "blocklist", "items": ["Holidays", "Birthdays"]},
                "reminders": {"mode": "allowlist", "items": ["Travel"]},
            }
        )

    def test_allowed(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(cli_runner, config_dir, "config", "check", "calendars", "Personal")
        assert result.exit_code == 0
        assert "calendars: Personal" in result.stdout
        assert "allowed" in result.stdout

    def test_decorated_name(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(cli_runner, config_dir, "-q", "config", "check", "reminders", "✈️ Travel")
        assert result.stdout.strip() == "allowed"

    def test_blocked(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(cli_runner, config_dir, "-q", "config", "check", "calendars", "holidays")
        assert result.exit_code == 0
        assert result.stdout.strip() == "denied"

    def test_by_id(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(
            cli_runner, config_dir, "--json", "config", "check", "reminders", "X", "--id", "travel"
        )
        assert json.loads(result.stdout)["data"]["allowed"] is True

    def test_unknown_domain(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(cli_runner, config_dir, "config", "check", "notes", "X")
        assert result.exit_code == 2


class TestInit:
    def _discovered(self, tmp_path: Path) -> Path:
        path = tmp_path / "discovered.json"
        path.write_text(
            json.dumps(
                {
                    "available_calendars": [
                        {"title": "Work", "type": "calDAV", "source": "iCloud"}
                    ],
                    "available_reminder_lists": [{"title": "Inbox", "source": "iCloud"}],
                    "default_calendar": "Work",
                    "default_reminder_list": "Inbox",
                }
            )
        )
        return path

    def test_lists(self, cli_runner: CliRunner, config_dir: Path, tmp_path: Path) -> None:
        path = self._discovered(tmp_path)
        result = _run(cli_runner, config_dir, "config", "init", "--discovered", str(path))
        assert result.exit_code == 0
        assert "Available Calendars" in result.stdout
        assert "(calDAV, iCloud)" in result.stdout
        assert "  Reminder list:  Inbox" in result.stdout
        assert not (config_dir / "config.json").exists()

    def test_write(self, cli_runner: CliRunner, config_dir: Path, tmp_path: Path) -> None:
        path = self._discovered(tmp_path)
        result = _run(
            cli_runner, config_dir, "config", "init", "--discovered", str(path), "--write"
        )
        assert result.exit_code == 0
        assert "Wrote default configuration." in result.stdout
        assert json.loads((config_dir / "config.json").read_text())["default_calendar"] == "Work"

    def test_stdin(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(
            cli_runner,
            config_dir,
            "config",
            "init",
            "--discovered",
            "-",
            input='{"default_calendar": "Home"}',
        )
        assert result.exit_code == 0
        assert "  Calendar:       Home" in result.stdout

    def test_no_discovery(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(cli_runner, config_dir, "config", "init")
        assert result.exit_code == 0
        assert "Config path:" in result.stdout

    def test_bad_json(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(cli_runner, config_dir, "config", "init", "--discovered", "-", input="[1")
        assert result.exit_code == 2
        assert "not valid JSON" in result.stderr

    def test_non_object(self, cli_runner: CliRunner, config_dir: Path) -> None:
        result = _run(cli_runner, config_dir, "config", "init", "--discovered", "-", input="[]")
        assert result.exit_code == 2
        assert "expected a JSON object" in result.stderr


class TestExamples:
    @pytest.mark.parametrize(
        "args",
        [
            ["config", "--examples"],
            ["config", "show", "--examples"],
            ["config", "check", "--examples"],
            ["profile", "set", "--examples"],
        ],
    )
    def test_examples(self, cli_runner: CliRunner, args: list[str]) -> None:
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        assert "Examples for" in result.output
        assert "pimctl" in result.output

    def test_group_collects_subcommand_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["profile", "--examples"])
        assert result.exit_code == 0
        assert "profile':" in result.output.splitlines()[0]
        assert "pimctl profile list" in result.output
        assert "pimctl profile set travel calendars" in result.output
        assert result.output.index("profile list") < result.output.index("profile set")
