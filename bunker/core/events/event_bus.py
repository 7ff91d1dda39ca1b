"""
Domain event bus connecting the volume core to its host (Mediator Pattern).
"""
import asyncio
import logging
from collections import defaultdict
from typing import Awaitable, Callable, Dict, List, Type

from bunker.core.events.domain_event import DomainEvent

# An event handler is an async function that takes a DomainEvent and returns None
EventHandler = Callable[[DomainEvent], Awaitable[None]]


class DomainEventBus:
    """
    Asynchronous publish/subscribe bus for volume events.

    Handlers for one event run concurrently. A handler that raises is logged
    and does not prevent the remaining handlers from running, so a broken
    subscriber in the host can never fail a mount or unmount.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: The domain event class to listen for.
            handler: Async callable invoked with each published instance.
        """
        async with self._lock:
            self._handlers[event_type].append(handler)
            logging.debug(f"Handler {handler.__name__} subscribed to {event_type.__name__}")

    async def unsubscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> bool:
        """Remove a handler. Returns False if it was not subscribed."""
        async with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler not in handlers:
                return False
            handlers.remove(handler)
            logging.debug(f"Handler {handler.__name__} unsubscribed from {event_type.__name__}")
            return True

    def handler_count(self, event_type: Type[DomainEvent]) -> int:
        return len(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish an event to every handler subscribed to its exact type.

        Args:
            event: The domain event instance to publish.
        """
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logging.debug(f"No handlers for event {event_type.__name__}")
            return

        logging.debug(f"Publishing {event_type.__name__} to {len(handlers)} handler(s)")

        tasks = [self._safe_execute(handler, event) for handler in handlers]
        await asyncio.gather(*tasks)

    async def _safe_execute(self, handler: EventHandler, event: DomainEvent) -> None:
        try:
            await handler(event)
        except Exception as e:
            logging.error(
                f"Unhandled exception in handler '{handler.__name__}' for event "
                f"'{type(event).__name__}': {e}",
                exc_info=True,
            )
