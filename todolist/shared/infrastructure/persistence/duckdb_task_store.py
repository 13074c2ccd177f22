"""DuckDB Task Store.

Owns the ``tasks`` table. All database work happens on one dedicated writer
thread and every mutation is serialized by an asyncio lock; the snapshot
published after a mutation is read inside the same critical section, so
subscribers never see a partially applied change.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar, Union

import duckdb

from todolist.shared.core.exceptions import StorageFault
from todolist.shared.core.observable import Observable
from todolist.shared.core.service_registry import claim_resource, release_resource
from todolist.shared.domain.tasks.models import Task
from todolist.shared.domain.tasks.repository import TaskStore

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
SELECT_ALL_SQL = "SELECT id, description, complete FROM tasks ORDER BY id"

R = TypeVar("R")
Row = Optional[Tuple[Any, ...]]


class DuckDBTaskStore(TaskStore):
    """Durable task table backed by a DuckDB file."""

    def __init__(self, db_path: Optional[Union[str, Path]] = None) -> None:
        # No path means a throwaway in-memory database
        self.db_path = ":memory:" if db_path is None else str(db_path)
        self.conn: Optional[duckdb.DuckDBPyConnection] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = asyncio.Lock()
        self._tasks: Observable[List[Task]] = Observable(name="tasks")

    @property
    def is_open(self) -> bool:
        return self.conn is not None

    async def start(self) -> None:
        """Open the database, create the schema and emit the first snapshot."""
        if self.conn is not None:
            return

        claim_resource(self.db_path, owner=f"{type(self).__name__}@{id(self):x}")
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="task-store")
        try:
            snapshot = await self._run(self._open)
        except BaseException:
            self._executor.shutdown(wait=True)
            self._executor = None
            release_resource(self.db_path)
            raise

        logger.info(f"Task database initialized: {self.db_path} ({len(snapshot)} task(s))")
        self._tasks.emit(snapshot)

    async def close(self) -> None:
        if self._executor is None:
            return
        async with self._lock:
            await self._run(self._close)
            self._executor.shutdown(wait=True)
            self._executor = None
            release_resource(self.db_path)
        logger.info(f"Task database closed: {self.db_path}")

    # --- TaskStore ---

    async def create(self, description: str) -> Task:
        row = await self._mutate(
            "INSERT INTO tasks (description) VALUES (?) RETURNING id, description, complete",
            [description],
        )
        task = Task.from_row(row)
        logger.debug(f"Created task {task.id}")
        return task

    async def remove(self, task_id: int) -> None:
        row = await self._mutate("DELETE FROM tasks WHERE id = ? RETURNING id", [task_id])
        if row is None:
            logger.debug(f"Remove of unknown task {task_id} ignored")
        else:
            logger.debug(f"Removed task {task_id}")

    async def set_complete(self, task_id: int, complete: bool) -> Optional[Task]:
        row = await self._mutate(
            "UPDATE tasks SET complete = ? WHERE id = ? RETURNING id, description, complete",
            [complete, task_id],
        )
        if row is None:
            logger.debug(f"Completion change for unknown task {task_id} ignored")
            return None
        return Task.from_row(row)

    def list_all(self) -> Observable[List[Task]]:
        return self._tasks

    async def snapshot(self) -> List[Task]:
        """Read the current rows without mutating anything."""
        async with self._lock:
            return await self._run(self._select_all)

    # --- internals ---

    async def _mutate(self, sql: str, params: Sequence[Any]) -> Row:
        # Shielded so a cancelled caller cannot abort a write that already
        # reached the writer thread, nor skip the snapshot that follows it.
        return await asyncio.shield(self._apply(sql, params))

    async def _apply(self, sql: str, params: Sequence[Any]) -> Row:
        async with self._lock:
            row, snapshot = await self._run(self._write, sql, params)
            self._tasks.emit(snapshot)
        return row

    async def _run(self, fn: Callable[..., R], *args: Any) -> R:
        if self._executor is None:
            raise StorageFault(f"Task store {self.db_path} is not open")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, partial(fn, *args))

    def _require_conn(self) -> duckdb.DuckDBPyConnection:
        if self.conn is None:
            raise StorageFault(f"Task store {self.db_path} is not open")
        return self.conn

    def _open(self) -> List[Task]:
        try:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = duckdb.connect(self.db_path)
            self._create_schema(self.conn)
            return self._select_all()
        except (duckdb.Error, OSError, StorageFault) as e:
            if self.conn is not None:
                self.conn.close()
                self.conn = None
            if isinstance(e, StorageFault):
                raise
            raise StorageFault(f"Could not open task database {self.db_path}: {e}") from e

    def _create_schema(self, conn: duckdb.DuckDBPyConnection) -> None:
        # Sequence values are never handed out twice, even after deletes
        conn.execute("CREATE SEQUENCE IF NOT EXISTS task_id_seq START 1")
        conn.execute("""
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY DEFAULT nextval('task_id_seq'),
                description VARCHAR NOT NULL,
                complete BOOLEAN NOT NULL DEFAULT FALSE
            )
        """)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS schema_info (
                id INTEGER PRIMARY KEY DEFAULT 1,
                version INTEGER NOT NULL
            )
        """)
        conn.execute(
            "INSERT INTO schema_info (id, version) VALUES (1, ?) ON CONFLICT (id) DO NOTHING",
            [SCHEMA_VERSION],
        )
        version = conn.execute("SELECT version FROM schema_info WHERE id = 1").fetchone()[0]
        if version != SCHEMA_VERSION:
            raise StorageFault(
                f"Task database {self.db_path} has schema version {version}, expected {SCHEMA_VERSION}"
            )

    def _write(self, sql: str, params: Sequence[Any]) -> Tuple[Row, List[Task]]:
        conn = self._require_conn()
        try:
            conn.begin()
            row = conn.execute(sql, params).fetchone()
            # Read before commit so a failed read also rolls the write back
            rows = conn.execute(SELECT_ALL_SQL).fetchall()
            conn.commit()
        except duckdb.Error as e:
            try:
                conn.rollback()
            except duckdb.Error:
                logger.debug("Rollback after failed write also failed", exc_info=True)
            raise StorageFault(f"Task write failed: {e}") from e
        return row, [Task.from_row(r) for r in rows]

    def _select_all(self) -> List[Task]:
        conn = self._require_conn()
        try:
            rows = conn.execute(SELECT_ALL_SQL).fetchall()
        except duckdb.Error as e:
            raise StorageFault(f"Task read failed: {e}") from e
        return [Task.from_row(row) for row in rows]

    def _close(self) -> None:
        if self.conn is not None:
            try:
                self.conn.close()
            finally:
                self.conn = None
