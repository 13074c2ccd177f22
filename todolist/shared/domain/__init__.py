"""Domain models and services for tasks and user settings."""
