"""User settings stored as JSON and merged over built-in defaults."""

import json
import logging
from pathlib import Path
from typing import Any

from .errors import SettingsError
from .resources import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


class SettingsStore:
    """Settings backed by ``settings.json``.

    ``get_sync`` serves the in-memory copy loaded at startup and never
    fails. ``get`` is the slow path used from worker threads: the first call
    reads the file again and raises :class:`SettingsError` if it cannot.
    Only ``load`` and ``set`` touch the in-memory copy.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._values: dict[str, Any] = dict(DEFAULT_SETTINGS)
        self._refreshed = False

    def _read_file(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise SettingsError(f"Cannot read settings: {e}", str(self.path)) from e
        if not isinstance(data, dict):
            raise SettingsError("Settings file must hold a JSON object", str(self.path))
        return data

    def load(self) -> None:
        """Load the file into memory, keeping defaults on any error."""
        values = dict(DEFAULT_SETTINGS)
        try:
            values.update(self._read_file())
        except SettingsError as e:
            logger.warning("%s; using defaults", e)
        self._values = values

    def get(self, key: str) -> Any:
        # Runs on worker threads: the fresh read stays local so a concurrent
        # set() on the UI thread is never overwritten
        if not self._refreshed:
            values = dict(DEFAULT_SETTINGS)
            values.update(self._read_file())
            self._refreshed = True
            return values.get(key)
        return self._values.get(key)

    def get_sync(self, key: str) -> Any:
        return self._values.get(key)

    def get_all(self) -> dict[str, Any]:
        return dict(self._values)

    def set(self, key: str, value: Any) -> None:
        """Update one setting and write the whole file."""
        self._values[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._values, indent=2), encoding="utf-8")
        logger.debug("Setting %s = %r", key, value)
