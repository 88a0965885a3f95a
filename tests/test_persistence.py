import json

import pytest

from imageflasher.errors import PreferenceError, SettingsError
from imageflasher.preferences import AlertPreference, MemoryPreferenceStore, PreferenceStore
from imageflasher.settings import SettingsStore


# ---- settings ----

def test_settings_defaults_without_file(tmp_path):
    s = SettingsStore(tmp_path / "settings.json")
    s.load()
    assert s.get_sync("errorReporting") is True
    assert s.get("featuredProjectEndpoint") is None


def test_settings_file_overrides_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"featuredProjectEndpoint": "https://example.com/efp"}))
    s = SettingsStore(path)
    s.load()
    assert s.get_sync("featuredProjectEndpoint") == "https://example.com/efp"
    assert s.get("disableExternalLinks") is False


def test_malformed_settings_load_keeps_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    s = SettingsStore(path)
    s.load()
    assert s.get_sync("errorReporting") is True
    with pytest.raises(SettingsError):
        s.get("featuredProjectEndpoint")


def test_settings_must_be_an_object(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]")
    with pytest.raises(SettingsError):
        SettingsStore(path).get("errorReporting")


def test_set_writes_through(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    s = SettingsStore(path)
    s.load()
    s.set("errorReporting", False)

    reloaded = SettingsStore(path)
    reloaded.load()
    assert reloaded.get_sync("errorReporting") is False


# ---- preferences ----

def test_alert_preference_defaults_true():
    assert AlertPreference(MemoryPreferenceStore()).read_bool() is True


def test_only_false_hides_alert():
    store = MemoryPreferenceStore({"analytics_alert_visible": "garbage"})
    assert AlertPreference(store).read_bool() is True


def test_alert_preference_survives_restart(tmp_path):
    path = tmp_path / "preferences.ini"
    assert AlertPreference(PreferenceStore(path)).write_bool(False) is True

    assert AlertPreference(PreferenceStore(path)).read_bool() is False


def test_unreadable_preference_falls_back_to_visible():
    class Broken:
        def get_item(self, key):
            raise PreferenceError("unreadable", key)

    assert AlertPreference(Broken()).read_bool() is True


def test_failed_write_is_reported_not_raised():
    class ReadOnly(MemoryPreferenceStore):
        def set_item(self, key, value):
            raise PreferenceError("read-only", key)

    assert AlertPreference(ReadOnly()).write_bool(False) is False


def test_fresh_read_does_not_drop_concurrent_set(tmp_path, monkeypatch):
    s = SettingsStore(tmp_path / "settings.json")
    s.load()
    read_file = s._read_file

    def read_then_set():
        data = read_file()
        # UI thread writes while the worker is between read and return
        s.set("errorReporting", False)
        return data

    monkeypatch.setattr(s, "_read_file", read_then_set)

    assert s.get("errorReporting") is True
    assert s.get_sync("errorReporting") is False
    assert s.get("errorReporting") is False
