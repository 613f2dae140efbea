"""
Tests for settings loading and deep merge logic.

Uses real TOML files on disk (no mocking).
"""

import toml

from delauncher.utils.helpers import (
    _deep_merge,
    default_list_path,
    load_settings,
    settings_path,
)


class TestDeepMerge:
    """Test the _deep_merge function directly."""

    def test_override_replaces_flat_key(self):
        base = {"a": 1, "b": 2}
        override = {"b": 99}
        result = _deep_merge(base, override)
        assert result == {"a": 1, "b": 99}

    def test_override_adds_new_key(self):
        base = {"a": 1}
        override = {"b": 2}
        result = _deep_merge(base, override)
        assert result == {"a": 1, "b": 2}

    def test_nested_dicts_are_merged(self):
        base = {"section": {"a": 1, "b": 2}}
        override = {"section": {"b": 99, "c": 3}}
        result = _deep_merge(base, override)
        assert result == {"section": {"a": 1, "b": 99, "c": 3}}

    def test_base_is_not_mutated(self):
        base = {"a": {"x": 1}}
        override = {"a": {"x": 2}}
        _deep_merge(base, override)
        assert base["a"]["x"] == 1


class TestLoadSettings:
    """Test load_settings with real TOML files."""

    def test_returns_defaults_when_file_missing(self, tmp_path):
        settings = load_settings(tmp_path / "nonexistent.toml")
        assert settings["launcher"]["menu"] == ["dmenu"]
        assert settings["launcher"]["list_path"] == ""
        assert settings["refresh"]["roots"] == ["/"]
        assert settings["logging"]["level"] == "WARNING"

    def test_loaded_values_override_defaults(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text(toml.dumps({"launcher": {"menu": ["rofi", "-dmenu"]}}))

        settings = load_settings(path)
        assert settings["launcher"]["menu"] == ["rofi", "-dmenu"]
        assert settings["launcher"]["list_path"] == ""
        assert settings["refresh"]["roots"] == ["/"]

    def test_invalid_file_falls_back_to_defaults(self, tmp_path, log_messages):
        path = tmp_path / "settings.toml"
        path.write_text("[launcher\nmenu = ")

        settings = load_settings(path)
        assert settings["launcher"]["menu"] == ["dmenu"]
        assert any("could not load settings" in m for m in log_messages)

    def test_del_config_overrides_location(self, isolated_settings):
        assert settings_path() == isolated_settings

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DEL_CONFIG", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert settings_path() == tmp_path / "del" / "settings.toml"


class TestDefaultListPath:

    def test_under_home(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/someone")
        assert default_list_path() == "/home/someone/.del"

    def test_home_with_trailing_slash(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/someone/")
        assert default_list_path() == "/home/someone/.del"

    def test_home_unset(self, monkeypatch):
        monkeypatch.delenv("HOME", raising=False)
        assert default_list_path() is None
