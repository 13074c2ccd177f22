"""Reactive state exposed to the presentation layer.

- AppState: observable tasks / theme plus the intent methods the UI calls
"""

from .app_state import AppState

__all__ = ["AppState"]
