"""QuickNode webhook signature verification.

QuickNode signs each delivery with HMAC-SHA256(secret, nonce + timestamp + body),
hex encoded, and sends the inputs in the x-qn-* headers.
"""

from __future__ import annotations

import hashlib
import hmac
import re
import time
from collections.abc import Mapping

from onchain_event_handler.utils.logging import get_logger
from onchain_event_handler.webhooks.models import ValidationResult

log = get_logger(__name__)

NONCE_HEADER = "x-qn-nonce"
TIMESTAMP_HEADER = "x-qn-timestamp"
SIGNATURE_HEADER = "x-qn-signature"

# Replay window, either direction
MAX_TIMESTAMP_DIFF_MS = 5 * 60 * 1000

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def _is_even_hex(value: str) -> bool:
    return bool(_HEX_RE.fullmatch(value)) and len(value) % 2 == 0


def verify_quicknode_signature(
    secret: str, payload: str, nonce: str, timestamp: str, signature: str
) -> bool:
    """Validate a QuickNode signature and timestamp freshness.

    Returns False if any input is empty, so an unconfigured secret rejects
    every request.
    """
    if not secret or not nonce or not timestamp or not signature:
        return False

    try:
        timestamp_ms = int(timestamp) * 1000
    except ValueError:
        return False

    now_ms = time.time() * 1000
    diff = abs(now_ms - timestamp_ms)
    if diff > MAX_TIMESTAMP_DIFF_MS:
        log.warning(
            "timestamp_validation_failed",
            timestamp=timestamp,
            diff_ms=int(diff),
            max_diff_ms=MAX_TIMESTAMP_DIFF_MS,
        )
        return False

    expected = hmac.new(
        secret.encode(), (nonce + timestamp + payload).encode(), hashlib.sha256
    ).hexdigest()

    # compare_digest on bytes needs equal-length, well-formed input
    if not _is_even_hex(signature) or len(expected) != len(signature):
        return False
    return hmac.compare_digest(bytes.fromhex(expected), bytes.fromhex(signature))


def validate_quicknode_request(
    headers: Mapping[str, str], body: bytes, secret: str
) -> ValidationResult:
    """Check the signature headers of an inbound request against the raw body."""
    if not secret:
        log.error("signing_secret_missing", msg="QUICKNODE_SIGNING_SECRET is not configured")
        return ValidationResult(False, 500, "Server configuration error")

    nonce = headers.get(NONCE_HEADER, "")
    timestamp = headers.get(TIMESTAMP_HEADER, "")
    signature = headers.get(SIGNATURE_HEADER, "")

    if not nonce or not timestamp or not signature:
        log.warning(
            "signature_headers_missing",
            has_nonce=bool(nonce),
            has_timestamp=bool(timestamp),
            has_signature=bool(signature),
        )
        return ValidationResult(False, 401, "Unauthorized: Missing required headers")

    payload = body.decode("utf-8", errors="replace")
    if not verify_quicknode_signature(secret, payload, nonce, timestamp, signature):
        log.error(
            "invalid_webhook_signature",
            signature_length=len(signature),
            payload_length=len(payload),
        )
        return ValidationResult(False, 401, "Unauthorized: Invalid signature")

    return ValidationResult(True)
