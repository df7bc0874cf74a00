"""
Event dispatcher for routing webhook events to application listeners.

Listeners subscribe to one event class or to every event. Both sync and async
callables are accepted.
"""

import inspect
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import Any

from wasender.core.logging.logger import get_logger

from .webhook_events import WasenderWebhookEvent

Listener = Callable[[WasenderWebhookEvent], Awaitable[Any] | Any]


class WasenderEventDispatcher:
    """
    In-process event dispatcher for Wasender webhooks.

    Listeners are matched on the exact event class, so subscribing to
    WasenderWebhookEvent only receives events with unknown discriminators.
    Use subscribe_all() to receive everything.

    Example:
        dispatcher = WasenderEventDispatcher()

        @dispatcher.listen(MessagesUpserted)
        async def on_message(event: MessagesUpserted) -> None:
            ...
    """

    def __init__(self):
        self.logger = get_logger(__name__)
        self._listeners: dict[type[WasenderWebhookEvent], list[Listener]] = (
            defaultdict(list)
        )
        self._wildcard_listeners: list[Listener] = []

    def subscribe(
        self, event_cls: type[WasenderWebhookEvent], listener: Listener
    ) -> None:
        """Register a listener for one event class."""
        self._listeners[event_cls].append(listener)
        self.logger.debug(
            f"Listener {_listener_name(listener)} subscribed to {event_cls.__name__}"
        )

    def subscribe_all(self, listener: Listener) -> None:
        """Register a listener that receives every dispatched event."""
        self._wildcard_listeners.append(listener)
        self.logger.debug(f"Listener {_listener_name(listener)} subscribed to all events")

    def unsubscribe(
        self, event_cls: type[WasenderWebhookEvent], listener: Listener
    ) -> None:
        """Remove a listener; unknown listeners are ignored."""
        listeners = self._listeners.get(event_cls, [])
        if listener in listeners:
            listeners.remove(listener)

    def listen(
        self, event_cls: type[WasenderWebhookEvent]
    ) -> Callable[[Listener], Listener]:
        """Decorator form of subscribe()."""

        def decorator(listener: Listener) -> Listener:
            self.subscribe(event_cls, listener)
            return listener

        return decorator

    def listeners_for(self, event_cls: type[WasenderWebhookEvent]) -> list[Listener]:
        """Listeners that receive `event_cls`, class listeners first."""
        return [*self._listeners.get(event_cls, []), *self._wildcard_listeners]

    async def dispatch(self, event: WasenderWebhookEvent) -> int:
        """
        Dispatch an event to its listeners in registration order.

        Args:
            event: Typed webhook event

        Returns:
            Number of listeners invoked

        Raises:
            Exception: Whatever a listener raises; later listeners are not called
        """
        listeners = self.listeners_for(type(event))

        if not listeners:
            self.logger.debug(f"No listeners for {type(event).__name__}")
            return 0

        for listener in listeners:
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                self.logger.error(
                    f"Listener {_listener_name(listener)} failed for "
                    f"{event.event}: {e}",
                    exc_info=True,
                )
                raise

        self.logger.debug(
            f"Dispatched {type(event).__name__} to {len(listeners)} listener(s)"
        )
        return len(listeners)


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or listener.__class__.__name__
