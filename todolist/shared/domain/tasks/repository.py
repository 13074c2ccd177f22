"""Repository seam between the task list controller and durable storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from todolist.shared.core.observable import Observable

from .models import Task


class TaskStore(ABC):
    """Interface every task store backend implements.

    Each mutation must emit a complete fresh snapshot on ``list_all()``
    once it has been applied, and nothing if it failed.
    """

    @abstractmethod
    async def create(self, description: str) -> Task:
        """Insert a task and return it with its assigned id."""

    @abstractmethod
    async def remove(self, task_id: int) -> None:
        """Delete a task. Deleting an unknown id is a no-op."""

    @abstractmethod
    async def set_complete(self, task_id: int, complete: bool) -> Optional[Task]:
        """Set the completion flag, returning None if the id is unknown."""

    @abstractmethod
    def list_all(self) -> Observable[List[Task]]:
        """Live view of every task, ordered by insertion."""


class TaskRepository:
    """Translates task list operations into store calls.

    Intentionally thin: no caching, retries or validation.
    """

    def __init__(self, store: TaskStore) -> None:
        self._store = store

    async def add_task(self, description: str) -> Task:
        """Store a new task.

        Args:
            description: Task text

        Returns:
            The task with its assigned id

        Raises:
            StorageFault: If the store could not write
        """
        return await self._store.create(description)

    async def delete_task(self, task: Task) -> None:
        """Remove ``task`` from the store; unknown ids are ignored.

        Raises:
            StorageFault: If the store could not write
        """
        await self._store.remove(task.id)

    async def toggle_task(self, task: Task) -> Optional[Task]:
        """Invert the completion flag of ``task``.

        Args:
            task: Task whose current ``complete`` value is flipped

        Returns:
            The updated task, or None if the id no longer exists

        Raises:
            StorageFault: If the store could not write
        """
        return await self._store.set_complete(task.id, not task.complete)

    def observe_all(self) -> Observable[List[Task]]:
        """Live snapshots of every task, ordered by id."""
        return self._store.list_all()
