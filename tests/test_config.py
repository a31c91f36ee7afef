"""Tests for builder configuration resolution."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from specfields.config import load_config_file, resolve_config
from specfields.exceptions import ConfigError
from specfields.exit_codes import EXIT_GENERIC_FAILURE
from specfields.models import BuilderConfig


def _write_config(directory: Path, data, name: str = "specfields.json") -> Path:
    path = directory / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadConfigFile:
    def test_no_project_file(self, isolated_config: Path) -> None:
        assert load_config_file() == {}

    def test_project_file(self, isolated_config: Path) -> None:
        _write_config(isolated_config, {"skip_deprecated": True})
        assert load_config_file() == {"skip_deprecated": True}

    def test_explicit_path(self, isolated_config: Path) -> None:
        path = _write_config(isolated_config, {"default_tag": "misc"}, name="custom.json")
        assert load_config_file(str(path)) == {"default_tag": "misc"}

    def test_explicit_path_missing(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config_file(str(isolated_config / "nope.json"))

    def test_invalid_json(self, isolated_config: Path) -> None:
        (isolated_config / "specfields.json").write_text("{broken", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config_file()

    def test_non_object(self, isolated_config: Path) -> None:
        _write_config(isolated_config, ["skip_deprecated"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_config_file()

    def test_error_exit_code(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(str(isolated_config / "nope.json"))
        assert exc_info.value.exit_code == EXIT_GENERIC_FAILURE


class TestResolveConfig:
    """Test precedence: CLI > env > file > defaults."""

    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_config() == BuilderConfig()
        assert resolve_config().default_tag == "default"

    def test_file_layer(self, isolated_config: Path) -> None:
        _write_config(isolated_config, {"skip_deprecated": True, "default_tag": "misc"})
        config = resolve_config()
        assert config.skip_deprecated is True
        assert config.default_tag == "misc"

    def test_env_overrides_file(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_config(isolated_config, {"skip_deprecated": True, "default_tag": "misc"})
        monkeypatch.setenv("SPECFIELDS_SKIP_DEPRECATED", "no")
        monkeypatch.setenv("SPECFIELDS_DEFAULT_TAG", "general")
        config = resolve_config()
        assert config.skip_deprecated is False
        assert config.default_tag == "general"

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SPECFIELDS_SKIP_DEPRECATED", "1")
        assert resolve_config(cli_skip_deprecated=False).skip_deprecated is False

    def test_empty_env_tag_is_ignored(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SPECFIELDS_DEFAULT_TAG", "")
        assert resolve_config().default_tag == "default"

    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_truthy_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, raw: str
    ) -> None:
        monkeypatch.setenv("SPECFIELDS_SKIP_DEPRECATED", raw)
        assert resolve_config().skip_deprecated is True

    def test_bad_env_flag(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECFIELDS_SKIP_DEPRECATED", "maybe")
        with pytest.raises(ConfigError, match="SPECFIELDS_SKIP_DEPRECATED"):
            resolve_config()

    def test_invalid_value_in_file(self, isolated_config: Path) -> None:
        _write_config(isolated_config, {"skip_deprecated": "sometimes"})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()

    def test_explicit_config_path(self, isolated_config: Path) -> None:
        _write_config(isolated_config, {"default_tag": "project"})
        other = _write_config(isolated_config, {"default_tag": "explicit"}, name="other.json")
        assert resolve_config(cli_config_path=str(other)).default_tag == "explicit"

    def test_overrides_from_file(self, isolated_config: Path) -> None:
        _write_config(
            isolated_config,
            {"overrides": [{"find": {"name": "limit"}, "replace": {"default": 50}}]},
        )
        [override] = resolve_config().overrides
        assert override.find == {"name": "limit"}
        assert override.replace == {"default": 50}

    def test_override_without_replace(self, isolated_config: Path) -> None:
        _write_config(isolated_config, {"overrides": [{"find": {"name": "limit"}}]})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
