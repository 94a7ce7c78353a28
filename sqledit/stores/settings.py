"""Settings store for editor preferences."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .base import JSONFileStore, get_config_dir

SETTINGS_FILE_NAME = "settings.json"


class SettingsStore(JSONFileStore):
    """Editor settings kept as one JSON object in ``settings.json``."""

    def __init__(self, file_path: Path | None = None) -> None:
        super().__init__(file_path if file_path is not None else get_config_dir() / SETTINGS_FILE_NAME)

    def load_all(self) -> dict[str, Any]:
        return self._read_object()

    def save_all(self, settings: dict[str, Any]) -> None:
        self._write_json(dict(settings))

    def get(self, key: str, default: Any = None) -> Any:
        return self.load_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Update one key, keeping every other stored setting."""
        settings = self.load_all()
        settings[key] = value
        self.save_all(settings)
