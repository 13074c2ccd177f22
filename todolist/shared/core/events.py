"""Canonical event definitions for the task list."""

from __future__ import annotations

from typing import Literal

from .event_bus import EventPayload

# UI intents
TOPIC_TASK_ADD = "task.add"
TOPIC_TASK_DELETE = "task.delete"
TOPIC_TASK_TOGGLE = "task.toggle"
TOPIC_THEME_CHANGE = "theme.change"

# Cross-cutting
TOPIC_LOGS_EVENT = "logs.event"
TOPIC_STATUS_TEXT = "status.text"

LogLevel = Literal["debug", "info", "warning", "error"]


def create_add_task_event(description: str) -> EventPayload:
    """Create an add-task intent."""
    return {"description": description}


def create_task_event(task_id: int, description: str, complete: bool) -> EventPayload:
    """Create a delete / toggle intent carrying the full task."""
    return {
        "task": {
            "id": task_id,
            "description": description,
            "complete": complete,
        }
    }


def create_theme_change_event(theme: str) -> EventPayload:
    return {"theme": theme}


def create_log_event(message: str, level: LogLevel = "info") -> EventPayload:
    return {"message": message, "level": level}
