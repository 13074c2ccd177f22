# tests/test_configuration.py
"""
Tests for layered configuration loading.
"""

from pathlib import Path

import pytest
import yaml

from todolist.shared.core.configuration import ENV_MAP, ConfigManager, SystemConfig, ValidationLevel
from todolist.shared.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_MAP:
        monkeypatch.delenv(key, raising=False)


def _write_yaml(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_packaged_defaults() -> None:
    config = ConfigManager().get_config()

    assert config.storage.database_file == "task_db.duckdb"
    assert config.storage.preferences_file == "preferences.yaml"
    assert config.logging.level == "INFO"
    assert config.ui.system_dark_mode is False


def test_paths_are_joined_under_data_dir(tmp_path: Path) -> None:
    config = SystemConfig(storage={"data_dir": str(tmp_path)})

    assert config.storage.database_path == tmp_path / "task_db.duckdb"
    assert config.storage.preferences_path == tmp_path / "preferences.yaml"


def test_in_memory_database_path() -> None:
    config = SystemConfig(storage={"database_file": ":memory:"})
    assert str(config.storage.database_path) == ":memory:"


def test_user_file_overrides_defaults(tmp_path: Path) -> None:
    user = _write_yaml(tmp_path / "settings.yaml", {"ui": {"title": "Groceries"}, "logging": {"level": "debug"}})

    config = ConfigManager(user_config_path=user).get_config()

    assert config.ui.title == "Groceries"
    assert config.logging.level == "DEBUG"
    assert config.storage.database_file == "task_db.duckdb"


def test_environment_overrides_user_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    user = _write_yaml(tmp_path / "settings.yaml", {"storage": {"data_dir": "from-file"}})
    monkeypatch.setenv("TODOLIST_DATA_DIR", str(tmp_path / "from-env"))
    monkeypatch.setenv("TODOLIST_SYSTEM_DARK", "yes")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    config = ConfigManager(user_config_path=user).get_config()

    assert config.storage.data_dir == str(tmp_path / "from-env")
    assert config.ui.system_dark_mode is True
    assert config.logging.level == "WARNING"


def test_invalid_config_strict_raises(tmp_path: Path) -> None:
    user = _write_yaml(tmp_path / "settings.yaml", {"logging": {"level": "LOUD"}})

    with pytest.raises(ConfigurationError):
        ConfigManager(user_config_path=user).get_config(ValidationLevel.STRICT)


def test_unknown_key_lenient_falls_back(tmp_path: Path) -> None:
    user = _write_yaml(tmp_path / "settings.yaml", {"ui": {"font": "serif"}})

    config = ConfigManager(user_config_path=user).get_config(ValidationLevel.LENIENT)

    assert config == SystemConfig()


def test_broken_yaml_is_ignored(tmp_path: Path) -> None:
    user = tmp_path / "settings.yaml"
    user.write_text("ui: {title: [\n", encoding="utf-8")

    config = ConfigManager(user_config_path=user).get_config()

    assert config.ui.title == "To Do List"


def test_save_user_config_round_trip(tmp_path: Path) -> None:
    manager = ConfigManager(user_config_path=tmp_path / "nested" / "settings.yaml")
    assert manager.get_config().ui.system_dark_mode is False

    assert manager.save_user_config({"ui": {"system_dark_mode": True}})

    assert manager.get_config().ui.system_dark_mode is True


def test_save_without_user_file_is_refused() -> None:
    assert ConfigManager().save_user_config({"ui": {"title": "x"}}) is False
