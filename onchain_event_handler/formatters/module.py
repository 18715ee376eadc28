"""Formatters for module events."""

from __future__ import annotations

from onchain_event_handler.formatters.base import FormatContext, text_field
from onchain_event_handler.models import DecodedLogEvent, EmbedField


async def format_module_event(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    """EnabledModule, DisabledModule and ExecutionFromModule{Success,Failure}."""
    return text_field(event, "module", "Module")
