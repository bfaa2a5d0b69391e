"""Process-local publish/subscribe for preference events.

Delivery is synchronous on the publishing thread, in the order handlers
were registered. The profile write worker publishes from its own thread, so
the registry is guarded by a lock.
"""

from threading import Lock
from typing import Any, Callable, Dict, List

import structlog

from infrastructure.events.models import Event

logger = structlog.get_logger().bind(component="events.dispatcher")

EventHandler = Callable[[Event], Any]

EVENT_HANDLERS: Dict[str, List[EventHandler]] = {}
_registry_lock = Lock()


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


def register_event_handler(event_type: str):
    """Subscribe the decorated function to ``event_type``.

    The function is returned unchanged so it stays directly callable:

        @register_event_handler("preferences.changed")
        def audit_change(event: Event) -> None:
            ...
    """

    def decorator(handler: EventHandler) -> EventHandler:
        with _registry_lock:
            subscribers = EVENT_HANDLERS.setdefault(event_type, [])
            subscribers.append(handler)
            count = len(subscribers)
        logger.debug(
            "event_handler_registered",
            event_type=event_type,
            handler=_handler_name(handler),
            total_handlers=count,
        )
        return handler

    return decorator


def unregister_event_handler(event_type: str, handler: EventHandler) -> bool:
    """Drop ``handler`` from ``event_type``; False when it was not subscribed."""
    with _registry_lock:
        subscribers = EVENT_HANDLERS.get(event_type)
        if not subscribers or handler not in subscribers:
            return False
        subscribers.remove(handler)
        if not subscribers:
            del EVENT_HANDLERS[event_type]
    return True


def dispatch_event(event: Event) -> List[Any]:
    """Call every handler subscribed to ``event.event_type``.

    A handler that raises is logged and skipped so one broken listener
    cannot stop the others. Returns the values of the handlers that
    completed, in call order.
    """
    with _registry_lock:
        subscribers = list(EVENT_HANDLERS.get(event.event_type, ()))

    log = logger.bind(
        event_type=event.event_type, correlation_id=str(event.correlation_id)
    )
    log.debug("event_dispatched", handler_count=len(subscribers))

    results = []
    for handler in subscribers:
        try:
            results.append(handler(event))
        except Exception as e:
            log.error("event_handler_failed", handler=_handler_name(handler), error=str(e))
    return results


def get_registered_events() -> List[str]:
    with _registry_lock:
        return list(EVENT_HANDLERS)


def get_handlers_for_event(event_type: str) -> List[EventHandler]:
    with _registry_lock:
        return list(EVENT_HANDLERS.get(event_type, ()))


def clear_handlers() -> None:
    """Forget every subscription. Used by the test suite between cases."""
    with _registry_lock:
        EVENT_HANDLERS.clear()
