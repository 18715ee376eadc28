"""Formatters for owner management events (AddedOwner, RemovedOwner)."""

from __future__ import annotations

from onchain_event_handler.formatters.base import FormatContext, text_field
from onchain_event_handler.models import DecodedLogEvent, EmbedField


async def format_owner_event(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    return text_field(event, "owner", "Owner")
