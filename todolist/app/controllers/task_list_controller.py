"""Task list controller.

Holds the live task collection the UI renders and turns user intents into
repository calls. Storage faults are reported and swallowed here so the UI
keeps showing the last consistent snapshot instead of crashing.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional

from todolist.shared.core import events
from todolist.shared.core.event_bus import EventBus, EventPayload
from todolist.shared.core.exceptions import StorageFault
from todolist.shared.core.observable import Observable
from todolist.shared.domain.tasks.models import Task
from todolist.shared.domain.tasks.repository import TaskRepository

logger = logging.getLogger(__name__)


class ControllerState(Enum):
    UNINITIALIZED = "uninitialized"  # no snapshot received from the store yet
    READY = "ready"


class TaskListController:
    """Mediates between the task repository and the presentation layer."""

    def __init__(self, repository: TaskRepository, event_bus: EventBus) -> None:
        """Create an unstarted controller.

        Args:
            repository: Task repository the intents are forwarded to
            event_bus: Bus carrying task intents and fault reports
        """
        self.repository = repository
        self.bus = event_bus
        self.tasks: Observable[List[Task]] = Observable([], name="task_list")
        self.state = ControllerState.UNINITIALIZED
        self._unsubscribe: Optional[Callable[[], None]] = None

    async def start(self) -> None:
        """Subscribe to the store snapshots and to task intents."""
        if self._unsubscribe is not None:
            return

        self._unsubscribe = self.repository.observe_all().subscribe(self._on_snapshot)
        await self.bus.subscribe(events.TOPIC_TASK_ADD, self._handle_add)
        await self.bus.subscribe(events.TOPIC_TASK_DELETE, self._handle_delete)
        await self.bus.subscribe(events.TOPIC_TASK_TOGGLE, self._handle_toggle)

    async def close(self) -> None:
        """Stop following the store. Writes already started still finish."""
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None
        await self.bus.unsubscribe(events.TOPIC_TASK_ADD, self._handle_add)
        await self.bus.unsubscribe(events.TOPIC_TASK_DELETE, self._handle_delete)
        await self.bus.unsubscribe(events.TOPIC_TASK_TOGGLE, self._handle_toggle)

    @property
    def is_ready(self) -> bool:
        return self.state is ControllerState.READY

    # --- Commands ---

    async def submit_new_task(self, description: str) -> Optional[Task]:
        """Add a task unless ``description`` is blank.

        Blank submissions are dropped without any error or store mutation.

        Args:
            description: Text typed by the user, stored verbatim

        Returns:
            The stored task, or None if it was dropped or the write failed
        """
        if not description or not description.strip():
            logger.debug("Dropped blank task submission")
            return None
        try:
            return await self.repository.add_task(description)
        except StorageFault as e:
            await self._report_fault("Could not save the new task", e)
            return None

    async def submit_delete(self, task: Task) -> None:
        """Delete ``task``. Deleting a task that is already gone is a no-op.

        Args:
            task: Task to delete, matched by id
        """
        try:
            await self.repository.delete_task(task)
        except StorageFault as e:
            await self._report_fault(f"Could not delete task {task.id}", e)

    async def submit_toggle(self, task: Task) -> Optional[Task]:
        """Flip the completion flag of ``task``.

        Args:
            task: Task as last rendered; its ``complete`` value is inverted

        Returns:
            The updated task, or None if it no longer exists or the write failed
        """
        try:
            return await self.repository.toggle_task(task)
        except StorageFault as e:
            await self._report_fault(f"Could not update task {task.id}", e)
            return None

    # --- Subscriptions ---

    def _on_snapshot(self, snapshot: List[Task]) -> None:
        if self.state is ControllerState.UNINITIALIZED:
            self.state = ControllerState.READY
            logger.info(f"Task list ready with {len(snapshot)} task(s)")
        self.tasks.emit(list(snapshot))

    async def _handle_add(self, payload: EventPayload) -> None:
        await self.submit_new_task(payload.get("description") or "")

    async def _handle_delete(self, payload: EventPayload) -> None:
        await self.submit_delete(Task.from_payload(payload["task"]))

    async def _handle_toggle(self, payload: EventPayload) -> None:
        await self.submit_toggle(Task.from_payload(payload["task"]))

    async def _report_fault(self, message: str, error: StorageFault) -> None:
        logger.error(f"{message}: {error}")
        await self.bus.publish(events.TOPIC_LOGS_EVENT, events.create_log_event(message, "error"))
