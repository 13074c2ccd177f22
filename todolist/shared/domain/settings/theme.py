"""Theme preference values."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# Older installs stored AUTO for "follow the OS"
_ALIASES = {"AUTO": "SYSTEM"}


class ThemePreference(str, Enum):
    LIGHT = "LIGHT"
    DARK = "DARK"
    SYSTEM = "SYSTEM"

    @classmethod
    def default(cls) -> "ThemePreference":
        return cls.SYSTEM

    @classmethod
    def parse(cls, raw: Any) -> "ThemePreference":
        """Parse a stored or user-typed value, failing closed to SYSTEM."""
        if isinstance(raw, cls):
            return raw
        if raw is None:
            return cls.default()
        name = str(raw).strip().upper()
        name = _ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            logger.warning(f"Unrecognised theme value {raw!r}, using {cls.default().value}")
            return cls.default()

    def is_dark(self, system_dark: bool) -> bool:
        """Resolve to a concrete dark/light choice."""
        if self is ThemePreference.DARK:
            return True
        if self is ThemePreference.LIGHT:
            return False
        return system_dark
