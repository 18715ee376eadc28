"""Per-batch event processing: filter, classify, format, dispatch."""

from __future__ import annotations

import asyncio

from onchain_event_handler.chain.base import ChainReader
from onchain_event_handler.chain.networks import map_network_to_chain
from onchain_event_handler.discord import DiscordDispatcher
from onchain_event_handler.errors import ChainDetectionError
from onchain_event_handler.events.catalog import SafeEvent, classify
from onchain_event_handler.events.context import EventContext
from onchain_event_handler.events.router import Router
from onchain_event_handler.formatters.message import format_notification
from onchain_event_handler.models import DecodedLogEvent, ProcessedEvent, WebhookBatch
from onchain_event_handler.registry import MultisigRegistry
from onchain_event_handler.utils.logging import get_logger

log = get_logger(__name__)


class EventProcessor:
    """Runs every event of a batch concurrently and collects the successes."""

    def __init__(
        self,
        registry: MultisigRegistry,
        router: Router,
        dispatcher: DiscordDispatcher,
        reader: ChainReader | None = None,
    ) -> None:
        self._registry = registry
        self._router = router
        self._dispatcher = dispatcher
        self._reader = reader

    async def process_batch(
        self, batch: WebhookBatch, context: EventContext
    ) -> list[ProcessedEvent]:
        """Process all events; one event's failure never aborts its siblings.

        ChainDetectionError is the exception: it is re-raised once every task
        has settled, since it signals a configuration gap rather than a
        per-event fault.
        """
        chain: str | None = None
        if batch.network:
            chain = map_network_to_chain(batch.network)
            if chain is None:
                raise ChainDetectionError(f"Unsupported network '{batch.network}'")

        pending = [e for e in batch.events if not self._is_superseded(e, context)]
        results = await asyncio.gather(
            *(self._process_event(e, context, chain) for e in pending),
            return_exceptions=True,
        )

        processed: list[ProcessedEvent] = []
        chain_error: ChainDetectionError | None = None
        for event, result in zip(pending, results):
            if isinstance(result, ChainDetectionError):
                chain_error = chain_error or result
            elif isinstance(result, Exception):
                log.error(
                    "event_processing_failed",
                    event_name=event.name,
                    address=event.address,
                    transaction_hash=event.transaction_hash,
                    error=str(result),
                    error_type=type(result).__name__,
                    exc_info=result,
                )
            elif isinstance(result, BaseException):
                raise result
            elif result is not None:
                processed.append(result)

        if chain_error is not None:
            raise chain_error
        return processed

    def _is_superseded(self, event: DecodedLogEvent, context: EventContext) -> bool:
        if event.name == SafeEvent.EXECUTION_SUCCESS.value and context.is_coalesced(event.transaction_hash):
            log.info(
                "execution_success_coalesced",
                transaction_hash=event.transaction_hash,
                msg="SafeMultiSigTransaction in the same batch carries the notification",
            )
            return True
        return False

    async def _process_event(
        self, event: DecodedLogEvent, context: EventContext, chain: str | None
    ) -> ProcessedEvent | None:
        try:
            identity = self._registry.lookup(event.address, chain)
        except ChainDetectionError as e:
            raise ChainDetectionError(
                str(e),
                address=event.address,
                block_hash=event.block_hash,
                transaction_hash=event.transaction_hash,
            ) from e

        if identity is None:
            log.warning("unknown_multisig", address=event.address.lower(), chain=chain)
            return None

        channel = classify(event.name)
        webhook_url = self._router.webhook_url(identity, channel)
        if not webhook_url:
            log.error("webhook_url_missing", multisig=identity.key, channel=channel.value)
            return None

        message = await format_notification(event, identity, context, self._reader)
        await self._dispatcher.send(webhook_url, message)

        return ProcessedEvent(
            multisig_key=identity.key,
            event_name=event.name,
            channel_type=channel,
        )
