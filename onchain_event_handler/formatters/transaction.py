"""Formatters for value-moving events (SafeReceived, SafeMultiSigTransaction, SafeModuleTransaction)."""

from __future__ import annotations

from onchain_event_handler.chain.signers import extract_signers
from onchain_event_handler.formatters.base import (
    FormatContext,
    address_link,
    format_amount,
    parse_int,
    text_field,
)
from onchain_event_handler.models import DecodedLogEvent, EmbedField
from onchain_event_handler.utils.logging import get_logger

log = get_logger(__name__)


async def format_safe_received_event(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    fields = text_field(event, "sender", "Sender")
    value = parse_int(event.params.get("value"))
    if value is not None:
        fields.append(EmbedField("Value", format_amount(value, ctx.chain)))
    return fields


def _recipient_and_value(event: DecodedLogEvent, ctx: FormatContext) -> list[EmbedField]:
    fields: list[EmbedField] = []
    to = event.get_str("to")
    if to:
        fields.append(EmbedField("To", f"[{to}]({ctx.chain.explorer.address(to)})"))
    value = parse_int(event.params.get("value"))
    if value is not None and value > 0:
        fields.append(EmbedField("Value", format_amount(value, ctx.chain)))
    return fields


async def format_safe_module_transaction_event(
    event: DecodedLogEvent, ctx: FormatContext
) -> list[EmbedField]:
    return text_field(event, "module", "Module") + _recipient_and_value(event, ctx)


async def format_safe_multisig_transaction_event(
    event: DecodedLogEvent, ctx: FormatContext
) -> list[EmbedField]:
    fields = _recipient_and_value(event, ctx)
    if ctx.reader is None:
        return fields

    signatures = event.get_str("signatures")
    if signatures:
        try:
            signers = extract_signers(signatures, ctx.safe_tx_hash, ctx.reader)
        except Exception:
            # Enrichment must never block the notification
            log.warning("signer_extraction_failed", transaction_hash=event.transaction_hash, exc_info=True)
            signers = []
        if signers:
            fields.append(EmbedField(
                "Signers",
                ", ".join(address_link(addr, ctx.chain) for addr in signers),
                inline=True,
            ))

    try:
        executor = await ctx.reader.get_transaction_sender(ctx.chain.name, event.transaction_hash)
    except Exception:
        log.warning("executor_lookup_failed", transaction_hash=event.transaction_hash, exc_info=True)
        executor = None
    if executor:
        fields.append(EmbedField("Executed by", address_link(executor, ctx.chain), inline=True))

    return fields
