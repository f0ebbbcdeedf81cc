from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import WriteFailure
from .file_operations import write_output
from .logger import get_logger

_logger = get_logger("settings")

THEMES = ("dark", "light")


class SettingsManager:
    """JSON-backed user settings. Missing keys read from ``DEFAULTS``.

    The processing mode is session state and intentionally not stored here.
    """

    DEFAULTS: dict[str, Any] = {
        "theme": "dark",
        "reveal_on_success": True,
        "status_reset_ms": 3000,
    }

    def __init__(self, settings_path: str):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        path = Path(self.settings_path)
        self._settings = {}
        if not path.is_file():
            return
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            _logger.warning("settings load failed, using defaults: %s", e)
            return
        if not isinstance(data, dict):
            _logger.warning("settings file is not an object, using defaults: %s", path)
            return
        self._settings = data
        _logger.debug("settings loaded: %s", path)

    def save(self) -> None:
        path = Path(self.settings_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(self._settings, ensure_ascii=False, indent=2)
            write_output(payload.encode("utf-8"), path)
        except (OSError, WriteFailure) as e:
            _logger.error("settings save failed: %s", e)
            return
        _logger.debug("settings saved: %s", path)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        return default if default is not None else self.DEFAULTS.get(key)

    def has(self, key: str) -> bool:
        return key in self._settings

    def set(self, key: str, value: Any) -> None:
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    @property
    def theme(self) -> str:
        val = self.get("theme")
        return val if val in THEMES else self.DEFAULTS["theme"]

    @property
    def reveal_on_success(self) -> bool:
        return bool(self.get("reveal_on_success"))

    @property
    def status_reset_ms(self) -> int:
        val = self.get("status_reset_ms")
        # bool is an int subclass; true/false here is a typo, not a delay
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            _logger.warning("invalid status_reset_ms: %r", val)
            return int(self.DEFAULTS["status_reset_ms"])
        return max(0, int(val))
