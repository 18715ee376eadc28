"""Known Safe contract events and their severity class."""

from __future__ import annotations

from enum import Enum

from onchain_event_handler.models import ChannelType


class SafeEvent(str, Enum):
    SAFE_SETUP = "SafeSetup"
    ADDED_OWNER = "AddedOwner"
    REMOVED_OWNER = "RemovedOwner"
    CHANGED_THRESHOLD = "ChangedThreshold"
    CHANGED_FALLBACK_HANDLER = "ChangedFallbackHandler"
    ENABLED_MODULE = "EnabledModule"
    DISABLED_MODULE = "DisabledModule"
    CHANGED_GUARD = "ChangedGuard"
    EXECUTION_SUCCESS = "ExecutionSuccess"
    EXECUTION_FAILURE = "ExecutionFailure"
    EXECUTION_FROM_MODULE_SUCCESS = "ExecutionFromModuleSuccess"
    EXECUTION_FROM_MODULE_FAILURE = "ExecutionFromModuleFailure"
    APPROVE_HASH = "ApproveHash"
    SIGN_MSG = "SignMsg"
    SAFE_RECEIVED = "SafeReceived"
    SAFE_MULTISIG_TRANSACTION = "SafeMultiSigTransaction"
    SAFE_MODULE_TRANSACTION = "SafeModuleTransaction"

    @classmethod
    def parse(cls, name: str) -> SafeEvent | None:
        try:
            return cls(name)
        except ValueError:
            return None


# Changes to the Safe's trust configuration
SECURITY_EVENTS: frozenset[SafeEvent] = frozenset({
    SafeEvent.SAFE_SETUP,
    SafeEvent.ADDED_OWNER,
    SafeEvent.REMOVED_OWNER,
    SafeEvent.CHANGED_THRESHOLD,
    SafeEvent.CHANGED_FALLBACK_HANDLER,
    SafeEvent.ENABLED_MODULE,
    SafeEvent.DISABLED_MODULE,
    SafeEvent.CHANGED_GUARD,
})


def is_security_event(name: str) -> bool:
    event = SafeEvent.parse(name)
    return event is not None and event in SECURITY_EVENTS


def classify(name: str) -> ChannelType:
    """Security events go to alerts; everything else, unknown names included, to events."""
    return ChannelType.ALERTS if is_security_event(name) else ChannelType.EVENTS
