"""Task value type."""

from __future__ import annotations

from typing import Any, Dict, Sequence

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """One entry of the task list.

    ``id`` is assigned by the store and never supplied by callers creating a
    task. Instances are immutable; a changed row comes back as a new Task.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Store-assigned identifier")
    description: str = Field(description="Text of the task")
    complete: bool = Field(default=False, description="Whether the task is done")

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "Task":
        """Build a Task from an ``(id, description, complete)`` row."""
        task_id, description, complete = row
        return cls(id=task_id, description=description, complete=bool(complete))

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Task":
        return cls.model_validate(payload)
