import json
import os

import pytest

from ai_commit.preferences import (
    AUTO_COMMIT_KEY,
    AUTO_PUSH_KEY,
    JsonPreferenceStore,
    MemoryPreferenceStore,
    UserPreferences,
    config_home,
    preferences_file_path,
)


def test_defaults_are_off(tmp_path):
    prefs = UserPreferences(JsonPreferenceStore(tmp_path / "prefs.json"))
    assert prefs.auto_commit_enabled() is False
    assert prefs.auto_push_enabled() is False


def test_flags_are_independent_and_persist(tmp_path):
    path = tmp_path / "prefs.json"
    UserPreferences(JsonPreferenceStore(path)).set_auto_push(True)

    # A fresh store over the same file sees the saved value
    reloaded = UserPreferences(JsonPreferenceStore(path))
    assert reloaded.auto_push_enabled() is True
    assert reloaded.auto_commit_enabled() is False
    assert json.loads(path.read_text()) == {AUTO_PUSH_KEY: True}


def test_reset_restores_defaults(tmp_path):
    prefs = UserPreferences(JsonPreferenceStore(tmp_path / "prefs.json"))
    prefs.set_auto_commit(True)
    prefs.set_auto_push(True)

    prefs.reset()

    assert prefs.auto_commit_enabled() is False
    assert prefs.auto_push_enabled() is False


def test_corrupt_file_reads_as_defaults(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json")
    store = JsonPreferenceStore(path)
    assert store.get_bool(AUTO_COMMIT_KEY, False) is False

    store.set_bool(AUTO_COMMIT_KEY, True)
    assert store.get_bool(AUTO_COMMIT_KEY) is True


def test_interrupted_save_keeps_previous_file(tmp_path, monkeypatch):
    path = tmp_path / "prefs.json"
    store = JsonPreferenceStore(path)
    store.set_bool(AUTO_COMMIT_KEY, True)

    def interrupted_replace(src, dst):
        raise KeyboardInterrupt()

    monkeypatch.setattr(os, "replace", interrupted_replace)
    with pytest.raises(KeyboardInterrupt):
        store.set_bool(AUTO_PUSH_KEY, True)
    monkeypatch.undo()

    assert json.loads(path.read_text()) == {AUTO_COMMIT_KEY: True}
    assert [p.name for p in tmp_path.iterdir()] == ["prefs.json"]


def test_non_boolean_values_fall_back_to_default(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({AUTO_COMMIT_KEY: "yes"}))
    assert JsonPreferenceStore(path).get_bool(AUTO_COMMIT_KEY, False) is False


def test_default_location_honours_override(tmp_path, monkeypatch):
    monkeypatch.setenv("AI_COMMIT_CONFIG_HOME", str(tmp_path / "cfg"))
    assert preferences_file_path() == tmp_path / "cfg" / "preferences.json"
    assert JsonPreferenceStore().path == tmp_path / "cfg" / "preferences.json"


def test_config_home_falls_back_to_xdg(tmp_path):
    env = {"XDG_CONFIG_HOME": str(tmp_path)}
    assert config_home(env) == tmp_path / "ai-commit"


def test_memory_store_round_trip():
    store = MemoryPreferenceStore()
    prefs = UserPreferences(store)
    prefs.set_auto_commit(True)
    assert prefs.auto_commit_enabled() is True
    prefs.reset()
    assert prefs.auto_commit_enabled() is False


def test_display_settings_lists_both_flags():
    prefs = UserPreferences(MemoryPreferenceStore({AUTO_COMMIT_KEY: True}))
    text = prefs.display_settings()
    assert "Auto-commit: enabled" in text
    assert "Auto-push:   disabled" in text
    assert "Regenerate the AI message" in text
