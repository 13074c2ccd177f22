"""
Shared Core Module
==================

Event bus, observable values, configuration and error types.
"""

from .event_bus import EventBus, EventPayload
from . import events
from .exceptions import ConfigurationError, StorageFault, TodoListError
from .observable import Observable
from .configuration import ConfigManager, SystemConfig, ValidationLevel

__all__ = [
    "EventBus",
    "EventPayload",
    "events",
    "Observable",
    "TodoListError",
    "StorageFault",
    "ConfigurationError",
    "ConfigManager",
    "SystemConfig",
    "ValidationLevel",
]
