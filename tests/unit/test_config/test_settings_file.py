"""
Unit tests for settings file location, loading and validation.
"""

import tomllib

import pytest

from taskmon.config import (
    Settings,
    load_settings_data,
    load_toml_file,
    resolve_config_path,
    validate_settings,
)
from taskmon.validation import ValidationError


@pytest.mark.unit
class TestSettingsFileLoading:
    """Test cases for finding and parsing the settings file."""

    def test_load_toml_file(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text('[healthchecks]\nbase_url = "https://hc.example.com"\n')

        assert load_toml_file(path) == {"healthchecks": {"base_url": "https://hc.example.com"}}

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_toml_file(temp_dir / "missing.toml")

    def test_malformed_file(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("[healthchecks\n")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml_file(path)

    def test_explicit_path_wins(self, temp_dir):
        explicit = temp_dir / "a.toml"
        env = {"TASK_MON_CONFIG": str(temp_dir / "b.toml")}

        assert resolve_config_path(str(explicit), env) == explicit
        assert resolve_config_path(None, env) == temp_dir / "b.toml"

    def test_default_location_only_when_present(self, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))

        assert resolve_config_path(None, {}) is None
        assert load_settings_data(None, {}) == {}

        default = temp_dir / ".config" / "task-mon" / "config.toml"
        default.parent.mkdir(parents=True)
        default.write_text('[healthchecks]\nping_key = "abc"\n')

        assert resolve_config_path(None, {}) == default
        assert load_settings_data(None, {}) == {"ping_key": "abc"}

    def test_explicit_missing_file_is_an_error(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_settings_data(str(temp_dir / "missing.toml"), {})

    def test_healthchecks_must_be_a_table(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text('healthchecks = "nope"\n')

        with pytest.raises(ValidationError):
            load_settings_data(str(path), {})

    def test_non_finite_timeout_rejected(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("[healthchecks]\ntimeout = nan\n")

        with pytest.raises(ValidationError):
            validate_settings(load_settings_data(str(path), {}))

    def test_file_without_section(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text('[other]\nkey = 1\n')

        assert load_settings_data(str(path), {}) == {}


@pytest.mark.unit
class TestValidateSettings:
    """Test cases for validate_settings()."""

    def test_empty(self):
        assert validate_settings({}) == Settings()

    def test_all_fields(self):
        settings = validate_settings({
            "base_url": "https://hc.example.com/",
            "ping_key": "key123",
            "user_agent": "backup-box",
            "timeout": 5,
        })

        assert settings == Settings(
            base_url="https://hc.example.com",
            ping_key="key123",
            user_agent="backup-box",
            timeout=5.0,
        )

    def test_unknown_key(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_settings({"base_ur": "https://hc.example.com"})

        assert "base_ur" in str(exc_info.value)

    @pytest.mark.parametrize(
        "data",
        [
            {"timeout": -1},
            {"timeout": True},
            {"timeout": 1000},
            {"timeout": float("nan")},
            {"timeout": float("inf")},
            {"base_url": "nope"},
            {"ping_key": ""},
            {"user_agent": 42},
        ],
    )
    def test_invalid_values(self, data):
        with pytest.raises(ValidationError):
            validate_settings(data)
