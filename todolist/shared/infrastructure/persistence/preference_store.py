"""Key/value preference file.

Holds the single ``theme`` setting in a small YAML mapping. Writes go to a
temporary file that is fsynced and then atomically renamed over the old one,
so ``set`` is durable by the time it returns.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from todolist.shared.core.exceptions import StorageFault
from todolist.shared.core.service_registry import claim_resource, release_resource
from todolist.shared.domain.settings.theme import ThemePreference

logger = logging.getLogger(__name__)

THEME_KEY = "theme"


class PreferenceStore:
    """Persists the theme preference for the installation."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        claim_resource(self.path, owner=f"{type(self).__name__}@{id(self):x}")
        self._closed = False
        self._write_lock = threading.Lock()

    def get(self) -> ThemePreference:
        """Return the stored theme, or SYSTEM when nothing usable is stored."""
        return ThemePreference.parse(self._read().get(THEME_KEY))

    def set(self, value: ThemePreference) -> None:
        """Overwrite the stored theme.

        Raises:
            StorageFault: If the file could not be written
        """
        if self._closed:
            raise StorageFault(f"Preference store {self.path} is closed")
        value = ThemePreference(value)
        with self._write_lock:
            data = self._read()
            data[THEME_KEY] = value.value
            self._write(data)
        logger.info(f"Theme preference saved: {value.value}")

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            release_resource(self.path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning(f"Could not read preferences from {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed preferences file {self.path}")
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageFault(f"Could not write preferences to {self.path}: {e}") from e
