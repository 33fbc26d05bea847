"""Tests for config file loading and CLI precedence."""

import argparse
import logging

import pytest

from cli_config import LocatorSettings, build_settings, load_config_file
from resolution.errors import ConfigError


def cli(**kwargs):
    defaults = {
        "CONFIG": None,
        "DOTNET": None,
        "HOSTFXR": None,
        "ROLL_FORWARD": None,
        "ENVIRONMENT": None,
        "LOG_LEVEL": None,
    }
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


class TestLoadConfigFile:
    """Test load_config_file function."""

    def test_no_path(self):
        assert load_config_file(None) == {}

    def test_yaml(self, tmp_path):
        path = tmp_path / "locator.yml"
        path.write_text("dotnet: /opt/dotnet/dotnet\nroll_forward: LatestMinor\n", encoding="utf-8")

        assert load_config_file(str(path)) == {
            "dotnet": "/opt/dotnet/dotnet",
            "roll_forward": "LatestMinor",
        }

    def test_json(self, tmp_path):
        path = tmp_path / "locator.json"
        path.write_text('{"hostfxr": "/x/libhostfxr.so"}', encoding="utf-8")

        assert load_config_file(str(path)) == {"hostfxr": "/x/libhostfxr.so"}

    def test_empty_yaml_is_empty_config(self, tmp_path):
        path = tmp_path / "locator.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config_file(str(path)) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config_file(str(tmp_path / "missing.yml"))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "locator.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config_file(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "locator.yml"
        path.write_text("dotnet: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config_file(str(path))

    def test_non_string_value(self, tmp_path):
        path = tmp_path / "locator.yml"
        path.write_text("roll_forward: 3\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config_file(str(path))

    def test_unknown_keys_warn(self, tmp_path, caplog):
        path = tmp_path / "locator.yml"
        path.write_text("colour: blue\ndotnet: /d/dotnet\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            config = load_config_file(str(path))

        assert config == {"dotnet": "/d/dotnet"}
        assert "colour" in caplog.text


class TestBuildSettings:
    """Test build_settings precedence."""

    def test_defaults(self):
        assert build_settings(cli()) == LocatorSettings()

    def test_cli_beats_config(self, tmp_path):
        path = tmp_path / "locator.yml"
        path.write_text("roll_forward: Disable\ndotnet: /cfg/dotnet\n", encoding="utf-8")

        settings = build_settings(cli(CONFIG=str(path), ROLL_FORWARD="LatestPatch"))

        assert settings.roll_forward == "LatestPatch"
        assert settings.dotnet == "/cfg/dotnet"

    def test_log_level_is_normalised(self, tmp_path):
        path = tmp_path / "locator.yml"
        path.write_text("log_level: debug\n", encoding="utf-8")

        assert build_settings(cli(CONFIG=str(path))).log_level == "DEBUG"

    def test_invalid_log_level(self, tmp_path):
        path = tmp_path / "locator.yml"
        path.write_text("log_level: chatty\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            build_settings(cli(CONFIG=str(path)))
