"""
Configuration Management for the task list

Settings are merged with precedence: environment → user file → packaged
defaults. Every layer is validated through the pydantic models below.
"""

import logging
import os
import yaml
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULTS_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class StorageConfig(BaseModel):
    """Where durable state lives"""
    model_config = ConfigDict(extra='forbid')

    data_dir: str = Field(default="data", description="Directory holding the database and preferences")
    database_file: str = Field(default="task_db.duckdb", description="Task database file name")
    preferences_file: str = Field(default="preferences.yaml", description="Preference file name")

    @property
    def database_path(self) -> Path:
        if self.database_file == ":memory:":
            return Path(":memory:")
        return Path(self.data_dir).expanduser() / self.database_file

    @property
    def preferences_path(self) -> Path:
        return Path(self.data_dir).expanduser() / self.preferences_file


class LoggingConfig(BaseModel):
    """Logging Configuration"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="INFO", description="File log level")
    console_level: str = Field(default="WARNING", description="Console log level")
    file_name: str = Field(default="todolist.log", description="Log file name under <data_dir>/logs")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024, description="Rotate after this many bytes")
    backup_count: int = Field(default=5, ge=0, le=50)

    @field_validator("level", "console_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return value


class UIConfig(BaseModel):
    """UI Configuration"""
    model_config = ConfigDict(extra='forbid')

    title: str = Field(default="To Do List", description="Heading shown above the list")
    # Stands in for the OS dark-mode query when the preference is SYSTEM
    system_dark_mode: bool = Field(default=False, description="Whether the OS is in dark mode")


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    schema_version: int = Field(default=1, description="Configuration schema version")


# Environment variable -> (section, key)
ENV_MAP = {
    'TODOLIST_DATA_DIR': ('storage', 'data_dir'),
    'TODOLIST_DATABASE_FILE': ('storage', 'database_file'),
    'LOG_LEVEL': ('logging', 'level'),
    'TODOLIST_SYSTEM_DARK': ('ui', 'system_dark_mode'),
}


class ConfigManager:
    """Loads and merges configuration layers"""

    def __init__(self, defaults_dir: Optional[Path] = None, user_config_path: Optional[Path] = None):
        self.defaults_dir = defaults_dir or DEFAULTS_DIR
        self.user_config_path = user_config_path
        self._system_config: Optional[SystemConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

    def _save_yaml_file(self, file_path: Path, data: Dict[str, Any]) -> bool:
        """Save configuration to YAML file"""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
            return True
        except OSError as e:
            logger.error(f"Failed to save {file_path}: {e}")
            return False

    def _load_system_defaults(self) -> SystemConfig:
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.defaults_dir / "defaults.yaml")
            try:
                self._system_config = SystemConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed: {e}")
                self._system_config = SystemConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.user_config_path) if self.user_config_path else {}
        return self._user_config

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → user → system"""
        merged = self._load_system_defaults().model_dump()
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key) in ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue
            if config_key == 'system_dark_mode':
                value = value.lower() in ('true', '1', 'yes', 'on')
            overrides.setdefault(section, {})[config_key] = value
        return overrides

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ConfigurationError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_user_config(self, config_updates: Dict[str, Any]) -> bool:
        """Merge ``config_updates`` into the user file"""
        if self.user_config_path is None:
            return False
        existing = self._load_yaml_file(self.user_config_path)
        self._deep_merge(existing, config_updates)
        success = self._save_yaml_file(self.user_config_path, existing)
        if success:
            self._user_config = None
        return success
