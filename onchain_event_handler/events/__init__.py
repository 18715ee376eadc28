"""Event catalog, batch context and routing."""

from onchain_event_handler.events.catalog import SECURITY_EVENTS, SafeEvent, classify, is_security_event
from onchain_event_handler.events.context import EventContext, build_event_context

__all__ = [
    "SECURITY_EVENTS",
    "EventContext",
    "SafeEvent",
    "build_event_context",
    "classify",
    "is_security_event",
]
