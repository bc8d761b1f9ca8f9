"""
Synchronizer Base

A synchronizer owns the state of one screen. It is the only writer of
that state, turns intents into use case calls, and turns every failure
into a ShowNotification instead of an exception.

List subscriptions are kept in named slots ("bills", "members", ...).
Replacing a slot always cancels the old handle BEFORE the new sequence
is opened, with no await in between, so a snapshot from a superseded
query can never land after the new query was requested.
"""

from typing import AsyncIterator, Callable, Generic, Optional, TypeVar

import structlog
from pydantic import BaseModel

from spliteasy.models.events import ShowNotification
from spliteasy.state.observable import EventChannel, StateContainer
from spliteasy.state.subscription import LiveSubscription

StateT = TypeVar("StateT", bound=BaseModel)

logger = structlog.get_logger(__name__)


class Synchronizer(Generic[StateT]):
    """Single-writer owner of one screen's state."""

    def __init__(self, initial_state: StateT):
        self._state = StateContainer(initial_state)
        self.events = EventChannel()
        self._subscriptions: dict[str, LiveSubscription] = {}

    @property
    def state(self) -> StateT:
        return self._state.value

    def watch(self, callback: Callable[[StateT], None]) -> Callable[[], None]:
        return self._state.watch(callback)

    def subscription(self, slot: str) -> Optional[LiveSubscription]:
        """Current handle in a slot, or None while the slot is idle."""
        return self._subscriptions.get(slot)

    def _update(self, **changes) -> None:
        self._state.publish(self._state.value.model_copy(update=changes))

    def _notify(self, message: str) -> None:
        self.events.emit(ShowNotification(message=message))

    def _resubscribe(
        self,
        slot: str,
        open_stream: Callable[[], AsyncIterator],
        on_item: Callable,
    ) -> LiveSubscription:
        current = self._subscriptions.pop(slot, None)
        if current is not None:
            current.cancel()

        subscription = LiveSubscription(
            name=slot,
            stream=open_stream(),
            on_item=on_item,
            on_error=lambda error: self._on_stream_error(slot, error),
        )
        self._subscriptions[slot] = subscription
        subscription.start()
        return subscription

    def _on_stream_error(self, slot: str, error: Exception) -> None:
        # The state keeps the last snapshot that was applied.
        self._notify(f"Could not refresh {slot}. Please try again.")

    async def close(self) -> None:
        """Tear down the screen: cancel every live subscription."""
        subscriptions = list(self._subscriptions.values())
        self._subscriptions.clear()
        for subscription in subscriptions:
            subscription.cancel()
        for subscription in subscriptions:
            await subscription.wait_closed()
        logger.debug(
            "synchronizer_closed",
            synchronizer=type(self).__name__,
            subscriptions=len(subscriptions),
        )
