from __future__ import annotations

import json
from pathlib import Path

from snap.settings_manager import SettingsManager


def test_defaults_when_file_missing(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))

    assert sm.data == {}
    assert sm.theme == "dark"
    assert sm.reveal_on_success is True
    assert sm.status_reset_ms == 3000


def test_set_persists_and_reloads(tmp_path: Path) -> None:
    settings_path = tmp_path / "nested" / "settings.json"
    sm = SettingsManager(str(settings_path))

    sm.set("theme", "light")
    sm.set("reveal_on_success", False)

    assert json.loads(settings_path.read_text(encoding="utf-8")) == {"theme": "light", "reveal_on_success": False}
    again = SettingsManager(str(settings_path))
    assert again.theme == "light"
    assert again.reveal_on_success is False
    assert again.has("theme")
    assert not again.has("status_reset_ms")


def test_corrupt_file_falls_back_to_defaults(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{not json", encoding="utf-8")

    sm = SettingsManager(str(settings_path))

    assert sm.data == {}
    assert sm.theme == "dark"


def test_invalid_values_are_coerced(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"theme": "neon", "status_reset_ms": "soon"}), encoding="utf-8")

    sm = SettingsManager(str(settings_path))

    assert sm.theme == "dark"
    assert sm.status_reset_ms == 3000


def test_processing_mode_is_not_a_setting() -> None:
    assert not any("mode" in key for key in SettingsManager.DEFAULTS)


def test_non_object_file_and_negative_delay(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("[1, 2]", encoding="utf-8")
    assert SettingsManager(str(settings_path)).data == {}

    settings_path.write_text(json.dumps({"status_reset_ms": -5, "reveal_on_success": 0}), encoding="utf-8")
    sm = SettingsManager(str(settings_path))
    assert sm.status_reset_ms == 0
    assert sm.reveal_on_success is False


def test_save_leaves_no_temp_files(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))

    sm.set("theme", "light")
    sm.set("theme", "dark")

    assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]
