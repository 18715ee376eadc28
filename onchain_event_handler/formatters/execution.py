"""Formatters for execution events (ExecutionSuccess, ExecutionFailure)."""

from __future__ import annotations

from onchain_event_handler.formatters.base import FormatContext, format_amount, parse_int
from onchain_event_handler.models import DecodedLogEvent, EmbedField


async def format_execution_event(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    payment = parse_int(event.params.get("payment"))
    # zero-payment executions are the common case
    if payment is None or payment <= 0:
        return []
    return [EmbedField("Payment", format_amount(payment, ctx.chain))]
