"""todolist package."""

from .shared.core.event_bus import EventBus
from .shared.domain.settings.theme import ThemePreference
from .shared.domain.tasks.models import Task

__version__ = "1.0.0"
__all__ = ["EventBus", "Task", "ThemePreference"]
