"""Event formatter registry, keyed by Safe event."""

from __future__ import annotations

from onchain_event_handler.events.catalog import SECURITY_EVENTS, SafeEvent
from onchain_event_handler.formatters.base import EventFormatter, FormatContext
from onchain_event_handler.formatters.execution import format_execution_event
from onchain_event_handler.formatters.module import format_module_event
from onchain_event_handler.formatters.owner import format_owner_event
from onchain_event_handler.formatters.security import (
    format_approve_hash_event,
    format_fallback_handler_event,
    format_guard_event,
    format_safe_setup_event,
    format_sign_msg_event,
    format_threshold_event,
)
from onchain_event_handler.formatters.transaction import (
    format_safe_module_transaction_event,
    format_safe_multisig_transaction_event,
    format_safe_received_event,
)

EVENT_FORMATTERS: dict[SafeEvent, EventFormatter] = {
    # Owner management
    SafeEvent.ADDED_OWNER: format_owner_event,
    SafeEvent.REMOVED_OWNER: format_owner_event,
    # Trust configuration
    SafeEvent.SAFE_SETUP: format_safe_setup_event,
    SafeEvent.CHANGED_THRESHOLD: format_threshold_event,
    SafeEvent.CHANGED_FALLBACK_HANDLER: format_fallback_handler_event,
    SafeEvent.CHANGED_GUARD: format_guard_event,
    SafeEvent.ENABLED_MODULE: format_module_event,
    SafeEvent.DISABLED_MODULE: format_module_event,
    # Execution
    SafeEvent.EXECUTION_SUCCESS: format_execution_event,
    SafeEvent.EXECUTION_FAILURE: format_execution_event,
    SafeEvent.EXECUTION_FROM_MODULE_SUCCESS: format_module_event,
    SafeEvent.EXECUTION_FROM_MODULE_FAILURE: format_module_event,
    # Approvals and messages
    SafeEvent.APPROVE_HASH: format_approve_hash_event,
    SafeEvent.SIGN_MSG: format_sign_msg_event,
    # Value movement
    SafeEvent.SAFE_RECEIVED: format_safe_received_event,
    SafeEvent.SAFE_MULTISIG_TRANSACTION: format_safe_multisig_transaction_event,
    SafeEvent.SAFE_MODULE_TRANSACTION: format_safe_module_transaction_event,
}

# Known events deliberately rendered with the standing fields only
UNFORMATTED_EVENTS: frozenset[SafeEvent] = frozenset()

_missing = set(SafeEvent) - set(EVENT_FORMATTERS) - UNFORMATTED_EVENTS
if _missing or SECURITY_EVENTS & UNFORMATTED_EVENTS:
    raise RuntimeError(
        f"Safe events without a formatter: {sorted(e.value for e in _missing | (SECURITY_EVENTS & UNFORMATTED_EVENTS))}"
    )


def get_event_formatter(name: str) -> EventFormatter | None:
    event = SafeEvent.parse(name)
    if event is None:
        return None
    return EVENT_FORMATTERS.get(event)


__all__ = [
    "EVENT_FORMATTERS",
    "UNFORMATTED_EVENTS",
    "EventFormatter",
    "FormatContext",
    "get_event_formatter",
]
