"""Application Shell State.

The object the presentation layer talks to: it exposes the observable task
list and theme preference, and turns UI intents into EventBus events.
"""

from __future__ import annotations

import time
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from todolist.app.controllers.task_list_controller import TaskListController
from todolist.app.controllers.theme_controller import ThemeController
from todolist.shared.core import events
from todolist.shared.core.event_bus import EventBus, EventPayload
from todolist.shared.core.observable import Observable
from todolist.shared.domain.settings.theme import ThemePreference
from todolist.shared.domain.tasks.models import Task

MAX_LOG_ENTRIES = 200


class AppState:
    """Reactive state for the application shell.

    Task and theme observables are owned by their controllers and only
    re-exposed here; the shell adds status text and a bounded log feed.
    """

    def __init__(
        self,
        event_bus: EventBus,
        task_list: TaskListController,
        theme: ThemeController,
        title: str = "To Do List",
    ) -> None:
        self.bus = event_bus
        self.title = title
        self._theme = theme

        self.observable_tasks: Observable[List[Task]] = task_list.tasks
        self.observable_theme_preference: Observable[ThemePreference] = theme.theme

        self.is_ready: Observable[bool] = Observable(False, name="is_ready")
        self.status_text: Observable[str] = Observable("Initializing...", name="status_text")

        # Circular buffer; each entry is {message, level, ts}
        self._log_buffer: Deque[Dict[str, Any]] = deque(maxlen=MAX_LOG_ENTRIES)
        self.logs: Observable[List[Dict[str, Any]]] = Observable([], name="logs")

        self._started = False

    async def initialize(self) -> None:
        """Bind to EventBus events. Safe to call more than once."""
        if self._started:
            return

        await self.bus.subscribe(events.TOPIC_LOGS_EVENT, self._handle_log_event)
        await self.bus.subscribe(events.TOPIC_STATUS_TEXT, self._handle_status_text)

        self._started = True
        self.is_ready.emit(True)
        self.status_text.emit("Ready")

    @property
    def is_dark(self) -> bool:
        return self._theme.is_dark()

    # --- Intents ---

    async def on_add_task(self, description: str) -> None:
        await self.bus.publish(events.TOPIC_TASK_ADD, events.create_add_task_event(description))

    async def on_delete_task(self, task: Task) -> None:
        await self.bus.publish(
            events.TOPIC_TASK_DELETE,
            events.create_task_event(task.id, task.description, task.complete),
        )

    async def on_toggle_task(self, task: Task) -> None:
        await self.bus.publish(
            events.TOPIC_TASK_TOGGLE,
            events.create_task_event(task.id, task.description, task.complete),
        )

    async def on_theme_change(self, value: ThemePreference) -> None:
        await self.bus.publish(events.TOPIC_THEME_CHANGE, events.create_theme_change_event(value.value))

    async def push_status(self, text: str) -> None:
        await self.bus.publish(events.TOPIC_STATUS_TEXT, {"text": text})

    async def push_log(self, message: str, level: events.LogLevel = "info") -> None:
        await self.bus.publish(events.TOPIC_LOGS_EVENT, events.create_log_event(message, level))

    def find_task(self, task_id: int) -> Optional[Task]:
        for task in self.observable_tasks.value or []:
            if task.id == task_id:
                return task
        return None

    # --- Event Handlers ---

    async def _handle_log_event(self, payload: EventPayload) -> None:
        if not payload:
            return
        entry = {
            "message": str(payload.get("message", "")),
            "level": payload.get("level", "info"),
            "ts": time.time(),
        }
        self._log_buffer.append(entry)
        self.logs.emit(list(self._log_buffer))

    async def _handle_status_text(self, payload: EventPayload) -> None:
        text = payload.get("text")
        if text:
            self.status_text.emit(str(text))
