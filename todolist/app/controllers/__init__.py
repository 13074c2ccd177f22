from .task_list_controller import ControllerState, TaskListController
from .theme_controller import ThemeController

__all__ = ["ControllerState", "TaskListController", "ThemeController"]
