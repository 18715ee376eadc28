"""Tests for batch processing: coalescing, routing, partial failure."""

import json

import pytest

from conftest import ALERTS_URL, EVENTS_URL, SAFE_ADDRESS, FakeChainReader, RecordingDispatcher, make_event
from onchain_event_handler.config import WebhookPair
from onchain_event_handler.errors import ChainDetectionError
from onchain_event_handler.events.context import build_event_context
from onchain_event_handler.events.processor import EventProcessor
from onchain_event_handler.events.router import Router
from onchain_event_handler.models import ChannelType, WebhookBatch
from onchain_event_handler.registry import MultisigRegistry


def _processor(registry, dispatcher, reader=None):
    router = Router(WebhookPair(alerts=ALERTS_URL, events=EVENTS_URL))
    return EventProcessor(registry, router, dispatcher, reader or FakeChainReader())


async def _run(processor, events, network=None):
    batch = WebhookBatch(events=tuple(events), total=len(events), network=network)
    return await processor.process_batch(batch, build_event_context(batch.events))


class TestRouting:
    async def test_security_event_goes_to_alerts(self, registry):
        dispatcher = RecordingDispatcher()
        results = await _run(_processor(registry, dispatcher), [make_event("AddedOwner", owner="0xNEW")])

        assert [r.channel_type for r in results] == [ChannelType.ALERTS]
        assert results[0].multisig_key == "treasury"
        url, message = dispatcher.sent[0]
        assert url == ALERTS_URL
        assert "Treasury" in message.title

    async def test_operational_event_goes_to_events(self, registry):
        dispatcher = RecordingDispatcher()
        await _run(_processor(registry, dispatcher), [make_event("SafeReceived", sender="0x1", value="1")])
        assert dispatcher.sent[0][0] == EVENTS_URL

    async def test_address_match_is_case_insensitive(self, registry):
        dispatcher = RecordingDispatcher()
        results = await _run(_processor(registry, dispatcher), [make_event("AddedOwner", address=SAFE_ADDRESS.upper().replace("0X", "0x"))])
        assert len(results) == 1

    async def test_unknown_multisig_skipped(self, registry):
        dispatcher = RecordingDispatcher()
        results = await _run(_processor(registry, dispatcher), [make_event("AddedOwner", address="0xdead")])
        assert results == []
        assert dispatcher.sent == []

    async def test_missing_destination_skipped(self, registry):
        dispatcher = RecordingDispatcher()
        processor = EventProcessor(registry, Router(WebhookPair(alerts=ALERTS_URL)), dispatcher, FakeChainReader())
        results = await _run(processor, [make_event("SafeReceived"), make_event("AddedOwner", tx="0xt2")])
        assert [r.event_name for r in results] == ["AddedOwner"]


class TestCoalescing:
    async def test_execution_success_suppressed_by_multisig_transaction(self, registry):
        dispatcher = RecordingDispatcher()
        events = [
            make_event("ExecutionSuccess", tx="0xT1", txHash="0xsafe"),
            make_event("SafeMultiSigTransaction", tx="0xt1", to="0x" + "44" * 20, value="0"),
        ]
        results = await _run(_processor(registry, dispatcher), events)

        assert [r.event_name for r in results] == ["SafeMultiSigTransaction"]
        message = dispatcher.sent[0][1]
        # Safe hash from the suppressed sibling still feeds the Safe UI link
        assert message.field_value("Safe UI Link").endswith("_0xsafe)")

    async def test_lone_execution_success_kept(self, registry):
        dispatcher = RecordingDispatcher()
        results = await _run(_processor(registry, dispatcher), [make_event("ExecutionSuccess", txHash="0xsafe")])
        assert [r.event_name for r in results] == ["ExecutionSuccess"]


class TestPartialFailure:
    async def test_one_failure_does_not_abort_siblings(self, registry):
        dispatcher = RecordingDispatcher(fail_for={"0xt2"})
        events = [
            make_event("AddedOwner", tx="0xt1", owner="0xa"),
            make_event("AddedOwner", tx="0xt2", owner="0xb"),
            make_event("AddedOwner", tx="0xt3", owner="0xc"),
        ]
        results = await _run(_processor(registry, dispatcher), events)
        assert len(results) == 2
        assert len(dispatcher.sent) == 2


class TestChainSelection:
    @pytest.fixture
    def multichain_registry(self):
        return MultisigRegistry.from_json(json.dumps({
            "ops-celo": {"address": SAFE_ADDRESS, "name": "Ops Celo", "chain": "celo"},
            "ops-eth": {"address": SAFE_ADDRESS, "name": "Ops Eth", "chain": "ethereum"},
        }))

    async def test_network_hint_selects_chain(self, multichain_registry):
        dispatcher = RecordingDispatcher()
        results = await _run(
            _processor(multichain_registry, dispatcher),
            [make_event("AddedOwner")],
            network="ethereum-mainnet",
        )
        assert results[0].multisig_key == "ops-eth"
        assert dispatcher.sent[0][1].title == "Ops Eth [Ethereum]"

    async def test_ambiguous_address_raises(self, multichain_registry):
        dispatcher = RecordingDispatcher()
        with pytest.raises(ChainDetectionError) as exc:
            await _run(_processor(multichain_registry, dispatcher), [make_event("AddedOwner", tx="0xamb")])
        assert exc.value.details() == {
            "address": SAFE_ADDRESS,
            "blockHash": "0xblock1",
            "transactionHash": "0xamb",
        }

    async def test_unsupported_network_raises(self, registry):
        with pytest.raises(ChainDetectionError):
            await _run(_processor(registry, RecordingDispatcher()), [make_event("AddedOwner")], network="solana-mainnet")
