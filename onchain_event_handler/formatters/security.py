"""Formatters for trust-configuration and approval events."""

from __future__ import annotations

from onchain_event_handler.formatters.base import FormatContext, parse_int, text_field
from onchain_event_handler.models import DecodedLogEvent, EmbedField


async def format_threshold_event(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    threshold = parse_int(event.params.get("threshold"))
    if threshold is None:
        return []
    return [EmbedField("New Threshold", str(threshold))]


async def format_fallback_handler_event(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    return text_field(event, "handler", "Fallback Handler")


async def format_guard_event(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    return text_field(event, "guard", "Guard")


async def format_safe_setup_event(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    fields = text_field(event, "initiator", "Initiator")

    owners = event.params.get("owners")
    if isinstance(owners, list):
        owner_list = [o for o in owners if isinstance(o, str) and o]
        if owner_list:
            fields.append(EmbedField("Owners", "\n".join(owner_list)))

    threshold = parse_int(event.params.get("threshold"))
    if threshold is not None:
        fields.append(EmbedField("Threshold", str(threshold)))

    fields.extend(text_field(event, "fallbackHandler", "Fallback Handler"))
    return fields


async def format_approve_hash_event(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    # Safe ABI names the parameter approvedHash; some decoders emit hash
    fields = text_field(event, "approvedHash", "Hash") or text_field(event, "hash", "Hash")
    fields.extend(text_field(event, "owner", "Owner"))
    return fields


async def format_sign_msg_event(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    return text_field(event, "msgHash", "Message Hash")
