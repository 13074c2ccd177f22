"""Persistence adapters (DuckDB, YAML)."""

from todolist.shared.infrastructure.persistence.duckdb_task_store import DuckDBTaskStore
from todolist.shared.infrastructure.persistence.preference_store import PreferenceStore

__all__ = ["DuckDBTaskStore", "PreferenceStore"]
