"""Inbound payload size and structure checks."""

from __future__ import annotations

import json
from typing import Any

from onchain_event_handler.config import MAX_PAYLOAD_SIZE_BYTES
from onchain_event_handler.models import DecodedLogEvent, WebhookBatch
from onchain_event_handler.utils.logging import get_logger
from onchain_event_handler.webhooks.models import PayloadSizeCheck, PayloadValidation

log = get_logger(__name__)

INVALID_PAYLOAD_ERROR = {"error": "Invalid payload: result array is required"}


def check_payload_size(size: int, max_size: int = MAX_PAYLOAD_SIZE_BYTES) -> PayloadSizeCheck:
    return PayloadSizeCheck(valid=size <= max_size, size=size, max_size=max_size)


def validate_payload(body: bytes) -> PayloadValidation:
    """Parse the body and require a ``result`` array of decoded logs.

    Individual log entries missing address, name or transactionHash are
    dropped here; they never fail the batch.
    """
    try:
        data: Any = json.loads(body) if body else None
    except (ValueError, RecursionError):
        # covers JSONDecodeError, UnicodeDecodeError and the int digit limit
        data = None

    result = data.get("result") if isinstance(data, dict) else None
    if not isinstance(result, list):
        log.error(
            "invalid_webhook_payload",
            msg="missing or invalid result array",
            body=body[:2000].decode("utf-8", errors="replace"),
        )
        return PayloadValidation(False, 400, INVALID_PAYLOAD_ERROR)

    events: list[DecodedLogEvent] = []
    for index, raw in enumerate(result):
        event = DecodedLogEvent.from_dict(raw)
        if event is None:
            log.warning("malformed_log_dropped", index=index)
            continue
        events.append(event)

    network = data.get("network")
    batch = WebhookBatch(
        events=tuple(events),
        total=len(result),
        network=network if isinstance(network, str) and network else None,
    )
    return PayloadValidation(True, batch=batch)
