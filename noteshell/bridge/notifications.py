"""
Broadcast notification channel.

Background work reports its outcome here instead of returning a value.
Every live subscriber receives every notification; nothing is
acknowledged and nothing is buffered for subscribers that join later.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

# Event names understood by the host
CONTENT_EVENT = "content"
SAVE_STATE_EVENT = "save_state"
FILE_ERROR_EVENT = "file_error"


@dataclass(frozen=True)
class Notification:
    """A single broadcast event with its payload."""

    event: str
    payload: Any


class Subscription:
    """Queue-backed view of the channel for one consumer.

    Usage:
        async with channel.subscribe() as sub:
            notification = await sub.get()

        # or
        async for notification in channel.subscribe():
            ...
    """

    def __init__(self, channel: NotificationChannel):
        self._channel = channel
        self._queue: asyncio.Queue[Notification] = asyncio.Queue()
        self.closed = False

    def _deliver(self, notification: Notification) -> None:
        if not self.closed:
            self._queue.put_nowait(notification)

    async def get(self) -> Notification:
        """Wait for the next notification."""
        return await self._queue.get()

    def get_nowait(self) -> Notification:
        """Return a queued notification or raise asyncio.QueueEmpty."""
        return self._queue.get_nowait()

    def pending(self) -> int:
        """Number of notifications received but not yet consumed."""
        return self._queue.qsize()

    def close(self) -> None:
        """Stop receiving notifications."""
        if not self.closed:
            self.closed = True
            self._channel._unsubscribe(self)

    async def __aenter__(self) -> Subscription:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    def __aiter__(self) -> AsyncIterator[Notification]:
        return self

    async def __anext__(self) -> Notification:
        if self.closed and self._queue.empty():
            raise StopAsyncIteration
        return await self._queue.get()


class NotificationChannel:
    """Fire-and-forget broadcast to queue subscribers and callback listeners."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []
        self._listeners: list[Callable[[Notification], None]] = []

    def subscribe(self) -> Subscription:
        """Create a subscription that receives all later notifications."""
        subscription = Subscription(self)
        self._subscriptions.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass

    def add_listener(self, listener: Callable[[Notification], None]) -> None:
        """Register a callback invoked synchronously for each notification."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[Notification], None]) -> None:
        """Unregister a callback. Unknown callbacks are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions) + len(self._listeners)

    def emit(self, event: str, payload: Any) -> Notification:
        """Broadcast a notification to everyone currently listening.

        A failing callback is logged and does not stop delivery to others.
        """
        notification = Notification(event=event, payload=payload)

        for subscription in list(self._subscriptions):
            subscription._deliver(notification)

        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                logger.exception(f"Notification listener failed for event '{event}'")

        logger.debug(f"Emitted '{event}' to {self.subscriber_count} subscriber(s)")
        return notification
