"""
Observable State Primitives

StateContainer holds one immutable state snapshot with a single writer
(its synchronizer). Consumers read `value` or register a watcher; they
never write.

EventChannel carries one-off UI events (notifications, "saved") that must
be consumed exactly once, unlike state which is always re-readable.
"""

import asyncio
from typing import Callable, Generic, TypeVar

StateT = TypeVar("StateT")


class StateContainer(Generic[StateT]):
    """Single-writer holder of the current state snapshot."""

    def __init__(self, initial: StateT):
        self._value = initial
        self._watchers: list[Callable[[StateT], None]] = []

    @property
    def value(self) -> StateT:
        return self._value

    def watch(self, callback: Callable[[StateT], None]) -> Callable[[], None]:
        """
        Call `callback` with the current snapshot now and with every new one.

        Returns:
            A function that removes the watcher
        """
        self._watchers.append(callback)
        callback(self._value)

        def unwatch() -> None:
            if callback in self._watchers:
                self._watchers.remove(callback)

        return unwatch

    def publish(self, value: StateT) -> None:
        """Replace the snapshot. Only the owning synchronizer calls this."""
        if value == self._value:
            return
        self._value = value
        for callback in list(self._watchers):
            callback(value)


class EventChannel:
    """
    Queue of UI events for the presentation layer.

    Usage:
        async for event in synchronizer.events:
            ...
    """

    def __init__(self):
        self._queue: asyncio.Queue = asyncio.Queue()

    def emit(self, event) -> None:
        self._queue.put_nowait(event)

    async def get(self):
        """Wait for the next event."""
        return await self._queue.get()

    def drain(self) -> list:
        """Take every event already emitted, without waiting."""
        events = []
        while not self._queue.empty():
            events.append(self._queue.get_nowait())
        return events

    def __aiter__(self):
        return self

    async def __anext__(self):
        return await self._queue.get()
