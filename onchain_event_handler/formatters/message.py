"""Discord notification assembly."""

from __future__ import annotations

from onchain_event_handler.chain.base import ChainReader
from onchain_event_handler.chain.networks import get_chain_config, safe_ui_url
from onchain_event_handler.errors import ChainDetectionError
from onchain_event_handler.events.catalog import is_security_event
from onchain_event_handler.events.context import EventContext
from onchain_event_handler.formatters import FormatContext, get_event_formatter
from onchain_event_handler.models import DecodedLogEvent, EmbedField, NotificationMessage
from onchain_event_handler.registry import MultisigIdentity

ALERT_COLOR = 0xFF4757  # security events
EVENT_COLOR = 0x5F27CD  # operational events


def resolve_safe_tx_hash(event: DecodedLogEvent, context: EventContext) -> str:
    """Safe transaction hash used for the Safe UI link and signer recovery.

    Preference: the event's own ``txHash``, then the hash recorded from a
    sibling ExecutionSuccess, then the on-chain transaction hash.
    """
    return (
        event.get_str("txHash")
        or context.safe_tx_hash_for(event.transaction_hash)
        or event.transaction_hash
    )


async def format_notification(
    event: DecodedLogEvent,
    identity: MultisigIdentity,
    context: EventContext,
    reader: ChainReader | None = None,
) -> NotificationMessage:
    chain = get_chain_config(identity.chain)
    if chain is None:
        raise ChainDetectionError(
            f"Chain '{identity.chain}' of multisig '{identity.key}' has no configuration",
            address=event.address,
            block_hash=event.block_hash,
            transaction_hash=event.transaction_hash,
        )

    safe_tx_hash = resolve_safe_tx_hash(event, context)
    fields = [
        EmbedField(
            "Transaction Hash",
            f"[{event.transaction_hash}]({chain.explorer.tx(event.transaction_hash)})",
        ),
        EmbedField(
            "Safe UI Link",
            f"[Open TX in Safe UI]({safe_ui_url(chain, event.address, safe_tx_hash)})",
        ),
    ]

    formatter = get_event_formatter(event.name)
    if formatter is not None:
        fields.extend(await formatter(event, FormatContext(chain, safe_tx_hash, reader)))

    return NotificationMessage(
        title=f"{identity.name} [{chain.display_name}]",
        description=f"`{event.name}` event detected on {identity.name} on {chain.display_name}",
        color=ALERT_COLOR if is_security_event(event.name) else EVENT_COLOR,
        fields=tuple(fields),
    )
