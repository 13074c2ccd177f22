from .theme import ThemePreference

__all__ = ["ThemePreference"]
