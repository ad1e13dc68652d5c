import json
import os

import pytest

from theme_switcher.adapters.settings_store import JsonSettingsStore
from theme_switcher.core.config_model import (
    DARK_PROFILE,
    END_HOUR,
    FIRST_RUN,
    LIGHT_PROFILE,
    NAMESPACE,
    SHOW_NOTIFICATIONS,
    START_HOUR,
)


def _write_external(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    # Make sure the change is visible even on coarse mtime filesystems
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))


@pytest.mark.parametrize(
    "key,value",
    [
        (LIGHT_PROFILE, "Solarized Light"),
        (DARK_PROFILE, "Solarized Dark"),
        (START_HOUR, 8),
        (END_HOUR, 20),
        (SHOW_NOTIFICATIONS, False),
        (FIRST_RUN, False),
    ],
)
def test_set_then_get(tmp_path, key, value):
    store = JsonSettingsStore(tmp_path / "settings.json")

    assert store.set(key, value) is True
    assert store.get(key) == value
    assert JsonSettingsStore(tmp_path / "settings.json").get(key) == value


def test_first_write_creates_the_config_directory(tmp_path):
    path = tmp_path / "config" / "theme-switcher" / "settings.json"
    store = JsonSettingsStore(path)

    assert store.set(START_HOUR, 8)
    assert json.loads(path.read_text(encoding="utf-8")) == {NAMESPACE: {START_HOUR: 8}}


def test_defaults_when_absent(tmp_path):
    store = JsonSettingsStore(tmp_path / "missing" / "settings.json")

    assert store.get(LIGHT_PROFILE) is None
    assert store.get(SHOW_NOTIFICATIONS) is True
    assert store.get(FIRST_RUN) is True
    assert store.get(SHOW_NOTIFICATIONS, False) is False


def test_other_namespaces_are_preserved(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"other_tool": {"volume": 3}}), encoding="utf-8")
    store = JsonSettingsStore(path)

    store.set(START_HOUR, 7)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"other_tool": {"volume": 3}, NAMESPACE: {START_HOUR: 7}}


def test_set_notifies_only_on_change(tmp_path):
    store = JsonSettingsStore(tmp_path / "settings.json")
    calls = []
    unsubscribe = store.on_changed(lambda: calls.append("changed"))

    store.set(END_HOUR, 18)
    store.set(END_HOUR, 18)
    assert calls == ["changed"]

    unsubscribe()
    store.set(END_HOUR, 19)
    assert calls == ["changed"]


def test_external_edit_in_namespace_fires(tmp_path):
    path = tmp_path / "settings.json"
    store = JsonSettingsStore(path)
    store.set(LIGHT_PROFILE, "Adwaita")
    calls = []
    store.on_changed(lambda: calls.append("changed"))

    assert store.check_for_changes() is False

    _write_external(path, {NAMESPACE: {LIGHT_PROFILE: "Yaru"}})
    assert store.check_for_changes() is True
    assert store.get(LIGHT_PROFILE) == "Yaru"
    assert calls == ["changed"]


def test_external_edit_in_other_namespace_is_ignored(tmp_path):
    path = tmp_path / "settings.json"
    store = JsonSettingsStore(path)
    store.set(LIGHT_PROFILE, "Adwaita")
    calls = []
    store.on_changed(lambda: calls.append("changed"))

    _write_external(path, {NAMESPACE: {LIGHT_PROFILE: "Adwaita"}, "editor": {"font": "mono"}})
    assert store.check_for_changes() is False
    assert calls == []


def test_external_clear_is_reported(tmp_path):
    path = tmp_path / "settings.json"
    store = JsonSettingsStore(path)
    store.set(DARK_PROFILE, "Adwaita-dark")

    path.unlink()
    assert store.check_for_changes() is True
    assert store.get(DARK_PROFILE) is None


def test_corrupt_file_is_treated_as_empty(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    store = JsonSettingsStore(path)

    assert store.get(LIGHT_PROFILE) is None
    assert "Cannot read settings file" in caplog.text
    assert store.set(LIGHT_PROFILE, "Adwaita") is True
    assert json.loads(path.read_text(encoding="utf-8")) == {NAMESPACE: {LIGHT_PROFILE: "Adwaita"}}


def test_write_failure_returns_false(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonSettingsStore(blocker / "settings.json")

    assert store.set(START_HOUR, 9) is False
    assert store.get(START_HOUR) is None
