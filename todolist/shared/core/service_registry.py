"""Process-wide registry of open durable resources and exit cleanup handlers."""

from __future__ import annotations

import atexit
import logging
import threading
from pathlib import Path
from typing import Callable, Dict, List, Union

from .exceptions import StorageFault

logger = logging.getLogger(__name__)

# Resolved path -> description of the owner holding it open
_claimed_resources: Dict[str, str] = {}
_claims_lock = threading.Lock()

_cleanup_registered = False
_cleanup_handlers: List[Callable[[], None]] = []


def _key(path: Union[str, Path]) -> str:
    if str(path) == ":memory:":
        return ""
    return str(Path(path).expanduser().resolve())


def claim_resource(path: Union[str, Path], owner: str) -> None:
    """Record that ``owner`` is the single writer for ``path``.

    Raises:
        StorageFault: If another live object already holds the same path
    """
    key = _key(path)
    if not key:
        return
    with _claims_lock:
        holder = _claimed_resources.get(key)
        if holder is not None:
            raise StorageFault(f"{key} is already open by {holder}")
        _claimed_resources[key] = owner
    logger.debug(f"Claimed {key} for {owner}")


def release_resource(path: Union[str, Path]) -> None:
    key = _key(path)
    with _claims_lock:
        if _claimed_resources.pop(key, None) is not None:
            logger.debug(f"Released {key}")


def clear_resources() -> None:
    """Forget every claim. Used by tests."""
    with _claims_lock:
        _claimed_resources.clear()


def register_cleanup_handler(handler: Callable[[], None]) -> None:
    """Register a cleanup handler to be called on application exit."""
    global _cleanup_registered
    _cleanup_handlers.append(handler)
    if not _cleanup_registered:
        atexit.register(_cleanup_all)
        _cleanup_registered = True
        logger.debug("Registered atexit cleanup handler")


def unregister_cleanup_handler(handler: Callable[[], None]) -> None:
    """Drop a handler whose resource was already released."""
    if handler in _cleanup_handlers:
        _cleanup_handlers.remove(handler)


def _cleanup_all() -> None:
    if not _cleanup_handlers:
        return
    logger.info("Running application cleanup...")
    for handler in _cleanup_handlers:
        try:
            handler()
        except Exception as e:
            logger.warning(f"Error in cleanup handler: {e}")
    _cleanup_handlers.clear()
    logger.info("Application cleanup completed")
