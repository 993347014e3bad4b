"""Tests for specview.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from specview.config import (
    ENV_EXPAND_RESPONSES,
    ENV_REQUIRED_PROPS_FIRST,
    _atomic_write,
    get_config_dir,
    get_data_dir,
    load_global_config,
    load_project_config,
    resolve_config,
    save_global_config,
)
from specview.exceptions import ConfigError
from specview.models import GlobalConfig, OutputConfig, ViewOptions


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specview.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "specview"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, isolated_config: Path) -> None:
        assert get_config_dir() == isolated_config / "config" / "specview"

    def test_data_dir_xdg_custom(self, isolated_config: Path) -> None:
        result = get_data_dir()
        assert result == isolated_config / "data" / "specview"
        assert result.is_dir()

    def test_fallback_on_macos(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specview.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".specview"
        assert get_data_dir() == tmp_path / ".specview"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "file.json"
        _atomic_write(target, '{"a": 1}')
        assert target.read_text(encoding="utf-8") == '{"a": 1}'

    def test_replaces_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        target.write_text("old")
        _atomic_write(target, "new")
        assert target.read_text() == "new"

    def test_cleans_up_temp_on_failure(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        with patch("specview.config.os.replace", side_effect=OSError("boom")):
            with pytest.raises(OSError, match="boom"):
                _atomic_write(target, "data")
        assert not target.exists()
        assert [p for p in os.listdir(tmp_path) if p.endswith(".tmp")] == []


# ---------------------------------------------------------------------------
# Global and project config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_defaults_when_missing(self, isolated_config: Path) -> None:
        config = load_global_config()
        assert config == GlobalConfig()
        assert config.options.required_props_first is False
        assert config.options.expand_responses == []

    def test_save_and_load(self, isolated_config: Path) -> None:
        config = GlobalConfig(
            options=ViewOptions(required_props_first=True, expand_responses="200,201"),
            output=OutputConfig(format="json"),
        )
        save_global_config(config)
        assert load_global_config() == config

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        (get_config_dir() / "config.json").write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_invalid_value_raises(self, isolated_config: Path) -> None:
        _write_json(get_config_dir() / "config.json", {"options": {"required_props_first": "maybe"}})
        with pytest.raises(ConfigError):
            load_global_config()


class TestProjectConfig:
    def test_missing_returns_none(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loads_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "specview.json", {"options": {"expand_responses": "all"}})
        assert load_project_config() == {"options": {"expand_responses": "all"}}

    def test_non_object_raises(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "specview.json", ["not", "an", "object"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_config() == GlobalConfig()

    def test_global_layer(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(options=ViewOptions(required_props_first=True)))
        assert resolve_config().options.required_props_first is True

    def test_project_overrides_global(self, isolated_config: Path) -> None:
        save_global_config(
            GlobalConfig(options=ViewOptions(required_props_first=True, expand_responses="200"))
        )
        _write_json(isolated_config / "specview.json", {"options": {"required_props_first": False}})

        config = resolve_config()
        assert config.options.required_props_first is False
        assert config.options.expand_responses == ["200"]

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "specview.json", {"options": {"required_props_first": False}})
        monkeypatch.setenv(ENV_REQUIRED_PROPS_FIRST, "yes")
        monkeypatch.setenv(ENV_EXPAND_RESPONSES, "all")

        config = resolve_config()
        assert config.options.required_props_first is True
        assert config.options.expand_responses == "all"

    def test_cli_overrides_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_REQUIRED_PROPS_FIRST, "true")
        monkeypatch.setenv(ENV_EXPAND_RESPONSES, "all")

        config = resolve_config(
            cli_required_first=False, cli_expand_responses="404", cli_format="plain"
        )
        assert config.options.required_props_first is False
        assert config.options.expand_responses == ["404"]
        assert config.output.format == "plain"

    def test_invalid_env_bool(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_REQUIRED_PROPS_FIRST, "sometimes")
        with pytest.raises(ConfigError, match=ENV_REQUIRED_PROPS_FIRST):
            resolve_config()

    def test_invalid_project_value(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "specview.json", {"options": {"expand_responses": 5}})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
