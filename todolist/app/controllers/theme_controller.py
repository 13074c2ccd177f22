"""Theme preference controller."""

from __future__ import annotations

import asyncio
import logging

from todolist.shared.core import events
from todolist.shared.core.event_bus import EventBus, EventPayload
from todolist.shared.core.exceptions import StorageFault
from todolist.shared.core.observable import Observable
from todolist.shared.domain.settings.theme import ThemePreference
from todolist.shared.infrastructure.persistence.preference_store import PreferenceStore

logger = logging.getLogger(__name__)


class ThemeController:
    """Keeps the in-memory theme in step with the preference store.

    Args:
        preferences: The process-wide preference store
        event_bus: Bus carrying theme-change intents
        system_dark: Whether the OS is in dark mode, used for SYSTEM
    """

    def __init__(self, preferences: PreferenceStore, event_bus: EventBus, system_dark: bool = False) -> None:
        self.preferences = preferences
        self.bus = event_bus
        self.system_dark = system_dark
        self.theme: Observable[ThemePreference] = Observable(preferences.get(), name="theme")
        self._started = False

    async def start(self) -> None:
        """Listen for theme-change intents on the bus."""
        if self._started:
            return
        await self.bus.subscribe(events.TOPIC_THEME_CHANGE, self._handle_theme_change)
        self._started = True

    async def close(self) -> None:
        if not self._started:
            return
        await self.bus.unsubscribe(events.TOPIC_THEME_CHANGE, self._handle_theme_change)
        self._started = False

    @property
    def current(self) -> ThemePreference:
        return self.theme.value

    def is_dark(self) -> bool:
        """Whether the dark palette applies, resolving SYSTEM from the OS setting."""
        return self.current.is_dark(self.system_dark)

    async def change_theme(self, value: ThemePreference) -> bool:
        """Persist ``value`` and publish it.

        Args:
            value: Theme chosen by the user

        Returns:
            False if the write failed; the previous theme stays active
        """
        try:
            await asyncio.to_thread(self.preferences.set, value)
        except StorageFault as e:
            logger.error(f"Could not save theme {value.value}: {e}")
            await self.bus.publish(
                events.TOPIC_LOGS_EVENT,
                events.create_log_event(f"Could not save theme {value.value}", "error"),
            )
            return False
        self.theme.emit(value)
        return True

    async def _handle_theme_change(self, payload: EventPayload) -> None:
        await self.change_theme(ThemePreference.parse(payload.get("theme")))
