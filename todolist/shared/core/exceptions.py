"""Exception types shared by the task list layers."""


class TodoListError(Exception):
    """Base exception for all task-list errors."""


class StorageFault(TodoListError):
    """The durable medium is unavailable or a read/write against it failed."""


class ConfigurationError(TodoListError):
    """Configuration could not be loaded or failed validation."""
