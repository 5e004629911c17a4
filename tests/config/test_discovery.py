"""Tests for config directory and profile resolution."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from pimctl.config.discovery import (
    APP_NAME,
    CONFIG_DIR_ENV_VAR,
    PROFILE_ENV_VAR,
    ConfigSources,
    default_config_dir,
    expand_home,
    find_workspace_config_dir,
    resolve_sources,
)
from pimctl.config.models import SourceOverrides


@pytest.fixture
def home(tmp_path: Path) -> Path:
    directory = tmp_path / "home"
    directory.mkdir()
    return directory


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Workspace that follows the ``apple-pim/config.json`` convention."""
    directory = tmp_path / "workspace"
    (directory / APP_NAME).mkdir(parents=True)
    (directory / APP_NAME / "config.json").write_text("{}")
    return directory


class TestFindWorkspaceConfigDir:
    def test_convention_found(self, workspace: Path) -> None:
        assert find_workspace_config_dir(workspace) == workspace / APP_NAME

    def test_dir_without_config_ignored(self, tmp_path: Path) -> None:
        (tmp_path / APP_NAME).mkdir()
        assert find_workspace_config_dir(tmp_path) is None

    def test_none(self) -> None:
        assert find_workspace_config_dir(None) is None


class TestExpandHome:
    def test_tilde_prefix(self, home: Path) -> None:
        assert expand_home("~/agents/a", home) == home / "agents" / "a"

    def test_bare_tilde(self, home: Path) -> None:
        assert expand_home("~", home) == home

    def test_absolute_untouched(self, home: Path) -> None:
        assert expand_home("/etc/apple-pim", home) == Path("/etc/apple-pim")

    def test_other_user_untouched(self, home: Path) -> None:
        assert expand_home("~bob/x", home) == Path("~bob/x")


class TestResolveConfigDir:
    def test_default(self, home: Path) -> None:
        sources = resolve_sources(None, None, None, {}, home=home)
        assert sources.config_dir == home / ".config" / APP_NAME
        assert sources.config_dir == default_config_dir(home)
        assert sources.config_dir_origin == "default"
        assert sources.profile is None
        assert sources.profile_origin is None

    def test_env(self, home: Path) -> None:
        env = {CONFIG_DIR_ENV_VAR: "~/env-config"}
        sources = resolve_sources(None, None, None, env, home=home)
        assert sources.config_dir == home / "env-config"
        assert sources.config_dir_origin == "env"

    def test_host_beats_env(self, home: Path) -> None:
        host = SourceOverrides(config_dir="/host/config")
        env = {CONFIG_DIR_ENV_VAR: "/env/config"}
        sources = resolve_sources(None, None, host, env, home=home)
        assert sources.config_dir == Path("/host/config")
        assert sources.config_dir_origin == "host"

    def test_workspace_beats_host(self, home: Path, workspace: Path) -> None:
        host = SourceOverrides(config_dir="/host/config")
        sources = resolve_sources(None, workspace, host, {}, home=home)
        assert sources.config_dir == workspace / APP_NAME
        assert sources.config_dir_origin == "workspace"

    def test_call_beats_workspace(self, home: Path, workspace: Path) -> None:
        call = SourceOverrides(config_dir="~/call")
        sources = resolve_sources(call, workspace, None, {}, home=home)
        assert sources.config_dir == home / "call"
        assert sources.config_dir_origin == "call"

    def test_workspace_without_convention_falls_through(self, home: Path, tmp_path: Path) -> None:
        env = {CONFIG_DIR_ENV_VAR: "/env/config"}
        sources = resolve_sources(None, tmp_path, None, env, home=home)
        assert sources.config_dir == Path("/env/config")

    def test_empty_strings_are_unset(self, home: Path) -> None:
        call = SourceOverrides(config_dir="", profile="")
        env = {CONFIG_DIR_ENV_VAR: "", PROFILE_ENV_VAR: ""}
        sources = resolve_sources(call, None, None, env, home=home)
        assert sources.config_dir_origin == "default"
        assert sources.profile is None


class TestResolveProfile:
    def test_env(self, home: Path) -> None:
        sources = resolve_sources(None, None, None, {PROFILE_ENV_VAR: "work"}, home=home)
        assert sources.profile == "work"
        assert sources.profile_origin == "env"

    def test_priority(self, home: Path, workspace: Path) -> None:
        env = {PROFILE_ENV_VAR: "env"}
        host = SourceOverrides(profile="host")
        assert resolve_sources(None, workspace, host, env, home=home).profile == "host"
        call = SourceOverrides(profile="call")
        assert resolve_sources(call, workspace, host, env, home=home).profile == "call"

    def test_independent_of_config_dir(self, home: Path) -> None:
        """The profile can come from env while the dir comes from the call."""
        call = SourceOverrides(config_dir="/call/dir")
        sources = resolve_sources(call, None, None, {PROFILE_ENV_VAR: "travel"}, home=home)
        assert sources.config_dir_origin == "call"
        assert sources.profile_origin == "env"


class TestIsolation:
    def test_env_mapping_not_mutated(self, home: Path) -> None:
        env = {PROFILE_ENV_VAR: "work"}
        call = SourceOverrides(config_dir="/a", profile="travel")
        resolve_sources(call, None, None, env, home=home)
        assert env == {PROFILE_ENV_VAR: "work"}

    def test_process_env_untouched(self, home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_DIR_ENV_VAR, raising=False)
        import os

        resolve_sources(SourceOverrides(config_dir="/a"), None, None, {}, home=home)
        assert CONFIG_DIR_ENV_VAR not in os.environ

    def test_concurrent_resolutions(self, home: Path) -> None:
        def resolve(index: int) -> ConfigSources:
            env = {CONFIG_DIR_ENV_VAR: f"/agents/{index}", PROFILE_ENV_VAR: f"agent-{index}"}
            return resolve_sources(None, None, None, env, home=home)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(resolve, range(50)))

        for index, sources in enumerate(results):
            assert sources.config_dir == Path(f"/agents/{index}")
            assert sources.profile == f"agent-{index}"


class TestConfigSources:
    def test_paths(self, tmp_path: Path) -> None:
        sources = ConfigSources(config_dir=tmp_path)
        assert sources.config_path == tmp_path / "config.json"
        assert sources.profiles_dir == tmp_path / "profiles"
