"""Inbound QuickNode webhook handling."""

from onchain_event_handler.webhooks.handlers import validate_quicknode_request, verify_quicknode_signature
from onchain_event_handler.webhooks.payload import check_payload_size, validate_payload

__all__ = [
    "check_payload_size",
    "validate_payload",
    "validate_quicknode_request",
    "verify_quicknode_signature",
]
