import logging
from pathlib import Path

import pytest

from todolist.app.bootstrap import TodoApp
from todolist.shared.core.configuration import StorageConfig, SystemConfig
from todolist.shared.core.event_bus import EventBus
from todolist.shared.core.service_registry import clear_resources
from todolist.shared.infrastructure.persistence.duckdb_task_store import DuckDBTaskStore
from todolist.shared.infrastructure.persistence.preference_store import PreferenceStore

logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")


@pytest.fixture(autouse=True)
def _reset_resource_claims():
    yield
    clear_resources()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "task_db.duckdb"


@pytest.fixture
async def task_store(db_path: Path) -> DuckDBTaskStore:
    """
    Provide a started DuckDBTaskStore over a temporary file.
    """
    store = DuckDBTaskStore(db_path)
    await store.start()
    yield store
    await store.close()


@pytest.fixture
def preference_store(tmp_path: Path) -> PreferenceStore:
    store = PreferenceStore(tmp_path / "preferences.yaml")
    yield store
    store.close()


@pytest.fixture
def app_config(tmp_path: Path) -> SystemConfig:
    return SystemConfig(storage=StorageConfig(data_dir=str(tmp_path)))


@pytest.fixture
async def todo_app(app_config: SystemConfig) -> TodoApp:
    """
    Provide a started TodoApp whose files live under tmp_path.
    """
    app = TodoApp(app_config)
    await app.start()
    yield app
    await app.shutdown()
