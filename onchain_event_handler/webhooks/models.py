"""Validation result models for inbound webhooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from onchain_event_handler.models import WebhookBatch


@dataclass
class ValidationResult:
    valid: bool
    status: int = 200
    message: str = ""


@dataclass
class PayloadSizeCheck:
    valid: bool
    size: int
    max_size: int


@dataclass
class PayloadValidation:
    valid: bool
    status: int = 200
    error: dict[str, Any] = field(default_factory=dict)
    batch: WebhookBatch | None = None
