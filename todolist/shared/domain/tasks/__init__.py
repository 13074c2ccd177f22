"""Task domain: the Task value type and the repository seam over storage."""

from .models import Task
from .repository import TaskRepository, TaskStore

__all__ = ["Task", "TaskRepository", "TaskStore"]
