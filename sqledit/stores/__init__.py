"""Data persistence stores for sqledit.

- SettingsStore: manages editor settings
"""

from .settings import SettingsStore

__all__ = [
    "SettingsStore",
]
