"""Configuration management for sqledit.

Editor settings live in ``settings.json`` inside the config directory
(``~/.sqledit`` unless ``SQLEDIT_CONFIG_DIR`` is set). Unknown keys are kept
on disk untouched; invalid values fall back to their defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_DIALECT = "sqlite"
DEFAULT_MAX_LOG_MESSAGES = 200


@dataclass
class EditorSettings:
    """User-tunable editor settings."""

    history_limit: int = DEFAULT_HISTORY_LIMIT
    default_dialect: str = DEFAULT_DIALECT
    use_system_clipboard: bool = True
    max_log_messages: int = DEFAULT_MAX_LOG_MESSAGES

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EditorSettings:
        """Build settings from a raw mapping, ignoring invalid values."""
        defaults = cls()
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = data.get(f.name)
            default = getattr(defaults, f.name)
            if isinstance(default, bool):
                values[f.name] = raw if isinstance(raw, bool) else default
            elif isinstance(default, int):
                valid = isinstance(raw, int) and not isinstance(raw, bool) and raw > 0
                values[f.name] = raw if valid else default
            else:
                values[f.name] = raw if isinstance(raw, str) and raw.strip() else default
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def load_settings(path: Path | None = None) -> EditorSettings:
    """Load editor settings from the settings file."""
    from .stores.settings import SettingsStore

    store = SettingsStore(path) if path is not None else SettingsStore()
    return EditorSettings.from_dict(store.load_all())


def save_settings(settings: EditorSettings, path: Path | None = None) -> None:
    """Save editor settings, preserving unrelated keys already on disk."""
    from .stores.settings import SettingsStore

    store = SettingsStore(path) if path is not None else SettingsStore()
    data = store.load_all()
    data.update(settings.to_dict())
    store.save_all(data)
