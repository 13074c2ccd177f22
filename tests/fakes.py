from typing import Any, List, Optional, Sequence

import duckdb

from todolist.shared.core.exceptions import StorageFault
from todolist.shared.core.observable import Observable
from todolist.shared.domain.tasks.models import Task
from todolist.shared.domain.tasks.repository import TaskStore


class FailingTaskStore(TaskStore):
    """Store whose medium is gone: every write raises StorageFault."""

    def __init__(self, tasks: Optional[List[Task]] = None) -> None:
        self._tasks: Observable[List[Task]] = Observable(name="tasks")
        self._tasks.emit(list(tasks or []))
        self.calls = 0

    async def create(self, description: str) -> Task:
        self.calls += 1
        raise StorageFault("disk full")

    async def remove(self, task_id: int) -> None:
        self.calls += 1
        raise StorageFault("disk full")

    async def set_complete(self, task_id: int, complete: bool) -> Optional[Task]:
        self.calls += 1
        raise StorageFault("disk full")

    def list_all(self) -> Observable[List[Task]]:
        return self._tasks


class SnapshotFailingConnection:
    """Wraps a DuckDB connection and fails every full-table read."""

    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> Any:
        if sql.lstrip().upper().startswith("SELECT"):
            raise duckdb.IOException("read failed")
        if params is None:
            return self._conn.execute(sql)
        return self._conn.execute(sql, params)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._conn, name)
