"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from perf_mcp.client import DEFAULT_BASE_URL
from perf_mcp.config.loader import _deep_merge, _env_overrides, load_config
from perf_mcp.config.schema import PerfConfig
from perf_mcp.core.errors import ConfigError


class TestDefaults:
    def test_defaults(self) -> None:
        config = load_config()
        assert config == PerfConfig()
        assert config.api_key is None
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout is None
        assert config.logging.level == "INFO"


class TestEnvironment:
    def test_api_key_and_base_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PERF_API_KEY", "pk_live_abc")
        monkeypatch.setenv("PERF_BASE_URL", "http://localhost:9000/")

        config = load_config()

        assert config.api_key == "pk_live_abc"
        assert config.base_url == "http://localhost:9000/"

    def test_timeout_and_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PERF_TIMEOUT", "12.5")
        monkeypatch.setenv("PERF_LOG_LEVEL", "debug")

        config = load_config()

        assert config.timeout == 12.5
        assert config.logging.level == "DEBUG"

    @pytest.mark.parametrize("level", ["verbose", "", "10"])
    def test_unknown_log_level(self, tmp_path: Path, level: str) -> None:
        path = tmp_path / "explicit.toml"
        path.write_text(f'[logging]\nlevel = "{level}"\n')

        with pytest.raises(ConfigError, match="Unknown log level"):
            load_config(path=path)

    def test_unknown_log_level_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PERF_LOG_LEVEL", "verbose")

        with pytest.raises(ConfigError, match="validation failed"):
            load_config()

    def test_empty_env_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PERF_API_KEY", "")
        assert _env_overrides() == {}
        assert load_config().api_key is None

    def test_env_beats_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        path = tmp_path / "explicit.toml"
        path.write_text('api_key = "from-file"\n')
        monkeypatch.setenv("PERF_API_KEY", "from-env")

        assert load_config(path=path).api_key == "from-env"


class TestFiles:
    def test_project_file(self, tmp_path: Path) -> None:
        (tmp_path / "perf-mcp.toml").write_text(
            'base_url = "http://project"\n[logging]\nlevel = "warning"\n'
        )

        config = load_config()

        assert config.base_url == "http://project"
        assert config.logging.level == "WARNING"

    def test_user_file_overridden_by_project(self, tmp_path: Path) -> None:
        user_dir = tmp_path / "xdg" / "perf-mcp"
        user_dir.mkdir(parents=True)
        (user_dir / "config.toml").write_text('base_url = "http://user"\ntimeout = 5\n')
        (tmp_path / "perf-mcp.toml").write_text('base_url = "http://project"\n')

        config = load_config()

        assert config.base_url == "http://project"
        assert config.timeout == 5.0

    def test_env_config_path_missing(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("PERF_MCP_CONFIG", str(tmp_path / "nope.toml"))
        with pytest.raises(ConfigError, match="PERF_MCP_CONFIG"):
            load_config()

    def test_explicit_path_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(path=tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("this is = = not toml")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path=path)

    def test_validation_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text('timeout = "soon"\n')
        with pytest.raises(ConfigError, match="validation failed"):
            load_config(path=path)

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PERF_API_KEY", "from-env")
        config = load_config(overrides={"api_key": "override"})
        assert config.api_key == "override"


class TestDeepMerge:
    def test_nested(self) -> None:
        base = {"logging": {"level": "INFO", "file": "a.log"}, "timeout": 1}
        merged = _deep_merge(base, {"logging": {"level": "DEBUG"}})
        assert merged == {"logging": {"level": "DEBUG", "file": "a.log"}, "timeout": 1}
        assert base["logging"]["level"] == "INFO"
