"""Persisted UI preferences (currently only the analytics alert flag)."""

import logging
from pathlib import Path

from PySide6.QtCore import QSettings

from .errors import PreferenceError
from .resources import ANALYTICS_ALERT_VISIBILITY_KEY

logger = logging.getLogger(__name__)


class PreferenceStore:
    """String key/value store on a QSettings INI file."""

    def __init__(self, path: str | Path):
        self._settings = QSettings(str(path), QSettings.Format.IniFormat)

    def get_item(self, key: str) -> str | None:
        if self._settings.status() != QSettings.Status.NoError:
            raise PreferenceError(f"Preferences unreadable: {self._settings.status()}", key)
        value = self._settings.value(key)
        if value is None:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def set_item(self, key: str, value: str) -> None:
        self._settings.setValue(key, value)
        # Flush now so a crash right after cannot lose the write
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            raise PreferenceError(f"Cannot write preference: {self._settings.status()}", key)


class MemoryPreferenceStore:
    """Same interface as PreferenceStore, kept in a dict."""

    def __init__(self, items: dict[str, str] | None = None):
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class AlertPreference:
    """Boolean view over one preference key; missing or unreadable means True."""

    def __init__(self, store, key: str = ANALYTICS_ALERT_VISIBILITY_KEY):
        self._store = store
        self.key = key

    def read_bool(self) -> bool:
        try:
            return self._store.get_item(self.key) != "false"
        except PreferenceError as e:
            logger.warning("%s; showing alert", e)
            return True

    def write_bool(self, value: bool) -> bool:
        """Persist ``value``. Returns False when the write did not stick."""
        try:
            self._store.set_item(self.key, "true" if value else "false")
        except PreferenceError as e:
            logger.warning("%s", e)
            return False
        return True
