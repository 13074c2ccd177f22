"""Observable value holder used to push state snapshots to the UI.

Listeners are plain callables invoked synchronously on ``emit``. Consumers
that prefer to ``await`` changes can iterate ``updates()``, which gives each
consumer its own queue so a slow reader never drops values for the others.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")
Listener = Callable[[T], None]

logger = logging.getLogger(__name__)


class Observable(Generic[T]):
    """A value that notifies subscribers every time a new one is emitted."""

    def __init__(self, initial: Optional[T] = None, *, name: str = "observable") -> None:
        self.name = name
        self._value: Optional[T] = initial
        self._has_value = initial is not None
        self._listeners: List[Listener] = []
        self._queues: List[asyncio.Queue[T]] = []
        self._emissions = 0

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def has_value(self) -> bool:
        """True once a value was supplied, either at construction or by ``emit``."""
        return self._has_value

    @property
    def emissions(self) -> int:
        """Number of times ``emit`` has been called."""
        return self._emissions

    def subscribe(self, listener: Listener, replay: bool = True) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it.

        Args:
            listener: Called with every emitted value
            replay: Deliver the current value immediately if there is one

        Returns:
            An unsubscribe function; calling it twice is harmless
        """
        self._listeners.append(listener)
        if replay and self._has_value:
            self._notify(listener, self._value)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def emit(self, value: T) -> None:
        self._value = value
        self._has_value = True
        self._emissions += 1
        for listener in list(self._listeners):
            self._notify(listener, value)
        for queue in list(self._queues):
            queue.put_nowait(value)

    async def updates(self, replay: bool = False) -> AsyncIterator[T]:
        """Yield each emitted value as it arrives."""
        queue: asyncio.Queue[T] = asyncio.Queue()
        if replay and self._has_value:
            queue.put_nowait(self._value)
        self._queues.append(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._queues.remove(queue)

    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self, listener: Listener, value: Optional[T]) -> None:
        try:
            listener(value)
        except Exception:
            logger.exception(f"Listener {getattr(listener, '__name__', listener)!r} failed on '{self.name}'")
