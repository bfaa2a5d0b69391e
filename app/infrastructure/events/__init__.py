"""Infrastructure event system - in-process event dispatcher.

Usage:

    from infrastructure.events import Event, register_event_handler, dispatch_event

    @register_event_handler("preferences.changed")
    def handle_preferences_changed(event: Event) -> None:
        ...

    dispatch_event(Event(event_type="preferences.changed", metadata={...}))
"""

from infrastructure.events.dispatcher import (
    clear_handlers,
    dispatch_event,
    get_handlers_for_event,
    get_registered_events,
    register_event_handler,
    unregister_event_handler,
)
from infrastructure.events.models import Event

__all__ = [
    "Event",
    "dispatch_event",
    "register_event_handler",
    "unregister_event_handler",
    "get_registered_events",
    "get_handlers_for_event",
    "clear_handlers",
]
