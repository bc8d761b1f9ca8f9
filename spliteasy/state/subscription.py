"""
Live Subscription Handle

Wraps one live sequence from the store in an asyncio task that feeds each
snapshot to a callback.

GUARANTEES:
- Once cancel() returns, the callback is never called again, even if the
  task already had the next snapshot in hand. The cancelled flag is checked
  before every delivery, and nothing else runs between the check and the
  callback.
- A failing sequence reports through on_error once, unless the handle was
  already cancelled.
- The underlying iterator is closed when the task ends, which releases the
  store's listener.
"""

import asyncio
from typing import AsyncIterator, Callable, Generic, Optional, TypeVar

import structlog

ItemT = TypeVar("ItemT")

logger = structlog.get_logger(__name__)


class LiveSubscription(Generic[ItemT]):
    """
    Task handle for one live query.

    Usage:
        subscription = LiveSubscription("bills", stream, on_item, on_error)
        subscription.start()
        ...
        subscription.cancel()
    """

    def __init__(
        self,
        name: str,
        stream: AsyncIterator[ItemT],
        on_item: Callable[[ItemT], None],
        on_error: Callable[[Exception], None],
    ):
        self.name = name
        self._stream = stream
        self._on_item = on_item
        self._on_error = on_error
        self._task: Optional[asyncio.Task] = None
        self._cancelled = False

    @property
    def active(self) -> bool:
        return (
            self._task is not None
            and not self._task.done()
            and not self._cancelled
        )

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        """Start consuming the sequence. Must be called inside a running loop."""
        if self._task is not None:
            raise RuntimeError(f"Subscription {self.name} already started")
        self._task = asyncio.get_running_loop().create_task(
            self._run(),
            name=f"subscription:{self.name}",
        )
        logger.debug("subscription_started", subscription=self.name)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        logger.debug("subscription_cancelled", subscription=self.name)

    async def wait_closed(self) -> None:
        """Wait until the task has finished (normally after cancel())."""
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def _run(self) -> None:
        try:
            async for item in self._stream:
                if self._cancelled:
                    break
                self._on_item(item)
        except Exception as e:
            if not self._cancelled:
                logger.warning(
                    "subscription_failed",
                    subscription=self.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                self._on_error(e)
        finally:
            aclose = getattr(self._stream, "aclose", None)
            if aclose is not None:
                await aclose()
