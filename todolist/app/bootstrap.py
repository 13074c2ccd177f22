"""Composition root.

Builds exactly one task store and one preference store for the process and
hands them to the repository and controllers. Nothing else constructs a
store, so there is a single writer per durable file.
"""

from __future__ import annotations

import logging
from typing import Optional

from todolist.app.controllers.task_list_controller import TaskListController
from todolist.app.controllers.theme_controller import ThemeController
from todolist.app.state.app_state import AppState
from todolist.shared.core.configuration import SystemConfig
from todolist.shared.core.event_bus import EventBus
from todolist.shared.core.service_registry import register_cleanup_handler, unregister_cleanup_handler
from todolist.shared.domain.tasks.repository import TaskRepository
from todolist.shared.infrastructure.persistence.duckdb_task_store import DuckDBTaskStore
from todolist.shared.infrastructure.persistence.preference_store import PreferenceStore

logger = logging.getLogger(__name__)


class TodoApp:
    """Owns every long-lived object of a running application.

    Usage:
        async with TodoApp(config) as app:
            await app.state.on_add_task("Buy milk")
    """

    def __init__(self, config: Optional[SystemConfig] = None) -> None:
        self.config = config or SystemConfig()
        storage = self.config.storage

        self.bus = EventBus()
        self.task_store = DuckDBTaskStore(storage.database_path)
        self.preferences = PreferenceStore(storage.preferences_path)
        # Releases the file claim even if shutdown() never runs
        register_cleanup_handler(self.preferences.close)

        self.repository = TaskRepository(self.task_store)
        self.task_list = TaskListController(self.repository, self.bus)
        self.theme = ThemeController(self.preferences, self.bus, system_dark=self.config.ui.system_dark_mode)
        self.state = AppState(self.bus, self.task_list, self.theme, title=self.config.ui.title)
        self._started = False

    async def start(self) -> None:
        if self._started:
            return
        await self.task_store.start()
        await self.task_list.start()
        await self.theme.start()
        await self.state.initialize()
        self._started = True
        logger.info("Application started")

    async def shutdown(self) -> None:
        """Let in-flight writes finish, then release the stores."""
        drained = await self.bus.wait_until_idle()
        if not drained:
            logger.warning("Shutting down with intent handlers still running")
        await self.task_list.close()
        await self.theme.close()
        await self.task_store.close()
        self.preferences.close()
        unregister_cleanup_handler(self.preferences.close)
        self._started = False
        logger.info("Application stopped")

    async def __aenter__(self) -> "TodoApp":
        try:
            await self.start()
        except BaseException:
            await self.shutdown()
            raise
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.shutdown()
