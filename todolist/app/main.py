"""Task list - application entry point."""

from __future__ import annotations

import asyncio
import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from todolist.app.bootstrap import TodoApp
from todolist.app.ui.console import ConsoleView
from todolist.shared.core.configuration import ConfigManager, SystemConfig, ValidationLevel
from todolist.shared.core.exceptions import TodoListError

logger = logging.getLogger(__name__)


def configure_logging(config: SystemConfig) -> Path:
    """Configure the root logger.

    File handler: everything at the configured level, rotated.
    Console handler: WARNING and above only, so it does not fight the UI.

    Returns:
        Path of the log file
    """
    logs_dir = Path(config.storage.data_dir).expanduser() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = logs_dir / config.logging.file_name
    file_log_level = getattr(logging, config.logging.level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)
    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=config.logging.max_bytes,
        backupCount=config.logging.backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, config.logging.console_level, logging.WARNING))
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    # Third-party noise
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("markdown_it").setLevel(logging.WARNING)

    logger.info(f"Logging configured: file={log_file_path}, console={config.logging.console_level}+")
    return log_file_path


def load_config(env_file: Optional[Path] = None) -> SystemConfig:
    """Load ``.env`` and build the merged configuration."""
    load_dotenv(dotenv_path=env_file)
    user_config = os.getenv("TODOLIST_CONFIG")
    manager = ConfigManager(user_config_path=Path(user_config) if user_config else None)
    return manager.get_config(ValidationLevel.LENIENT)


async def run(config: SystemConfig) -> None:
    async with TodoApp(config) as app:
        await ConsoleView(app.state).run()


def main() -> int:
    config = load_config()
    configure_logging(config)
    try:
        asyncio.run(run(config))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except TodoListError as e:
        logger.error(f"Fatal: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
