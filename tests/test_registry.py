"""Tests for the multisig registry, routing and settings."""

import json

import pytest

from onchain_event_handler.config import Settings, WebhookPair, load_settings
from onchain_event_handler.errors import ChainDetectionError, ConfigurationError
from onchain_event_handler.events.router import Router
from onchain_event_handler.models import ChannelType
from onchain_event_handler.registry import MultisigIdentity, MultisigRegistry

ADDR = "0xAbCdEf0000000000000000000000000000000001"


@pytest.fixture
def multichain_registry():
    return MultisigRegistry.from_json(json.dumps({
        "ops-celo": {"address": ADDR, "name": "Ops", "chain": "celo"},
        "ops-eth": {"address": ADDR, "name": "Ops", "chain": "Ethereum"},
        "reserve": {"address": "0x02", "name": "Reserve", "chain": "celo"},
    }))


class TestMultisigRegistry:
    def test_lookup_is_case_insensitive(self, multichain_registry):
        identity = multichain_registry.lookup("0x02")
        assert identity == MultisigIdentity(key="reserve", address="0x02", name="Reserve", chain="celo")
        assert multichain_registry.lookup("0X02".lower()) is identity

    def test_lookup_by_chain(self, multichain_registry):
        assert multichain_registry.lookup(ADDR.lower(), "celo").key == "ops-celo"
        assert multichain_registry.lookup(ADDR.upper().replace("0X", "0x"), "ETHEREUM").key == "ops-eth"

    def test_ambiguous_address_without_chain(self, multichain_registry):
        with pytest.raises(ChainDetectionError) as exc:
            multichain_registry.lookup(ADDR)
        assert exc.value.address == ADDR.lower()

    def test_unknown_address(self, multichain_registry):
        assert multichain_registry.lookup("0xdead") is None
        assert multichain_registry.lookup("0x02", "ethereum") is None

    def test_len(self, multichain_registry):
        assert len(multichain_registry) == 3

    def test_name_defaults_to_key(self):
        registry = MultisigRegistry.from_json('{"k": {"address": "0x1", "chain": "celo"}}')
        assert registry.lookup("0x1").name == "k"

    @pytest.mark.parametrize("raw", [
        "",
        "not json",
        "[]",
        '{"k": "0x1"}',
        '{"k": {"chain": "celo"}}',
        '{"k": {"address": "0x1"}}',
    ])
    def test_invalid_config_raises(self, raw):
        with pytest.raises(ConfigurationError):
            MultisigRegistry.from_json(raw)


class TestRouter:
    def test_default_pair(self):
        router = Router(WebhookPair(alerts="https://a", events="https://e"))
        identity = MultisigIdentity("k", "0x1", "K", "celo")
        assert router.webhook_url(identity, ChannelType.ALERTS) == "https://a"
        assert router.webhook_url(identity, ChannelType.EVENTS) == "https://e"

    def test_overrides_prefer_chain_specific(self):
        router = Router(
            WebhookPair(alerts="https://a", events="https://e"),
            {
                "k:celo": WebhookPair(alerts="https://k-celo-a"),
                "k": WebhookPair(alerts="https://k-a", events="https://k-e"),
            },
        )
        celo = MultisigIdentity("k", "0x1", "K", "celo")
        eth = MultisigIdentity("k", "0x1", "K", "ethereum")
        assert router.webhook_url(celo, ChannelType.ALERTS) == "https://k-celo-a"
        assert router.webhook_url(celo, ChannelType.EVENTS) == "https://k-e"
        assert router.webhook_url(eth, ChannelType.ALERTS) == "https://k-a"

    def test_missing_url(self):
        router = Router(WebhookPair(alerts="https://a"))
        assert router.webhook_url(MultisigIdentity("k", "0x1", "K", "celo"), ChannelType.EVENTS) is None


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.port == 8080
        assert settings.max_payload_bytes == 10 * 1024 * 1024
        assert settings.is_development is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DISCORD_WEBHOOK_ALERTS", "https://alerts")
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("DISCORD_WEBHOOK_OVERRIDES", '{"k": {"alerts": "https://k"}}')
        settings = Settings(_env_file=None)
        assert settings.discord_webhook_alerts == "https://alerts"
        assert settings.is_development is True
        assert settings.discord_webhook_overrides["k"].alerts == "https://k"

    def test_supported_chains(self):
        assert Settings(_env_file=None, supported_chains="").supported_chain_list() is None
        assert Settings(_env_file=None, supported_chains=" Celo, ethereum ,").supported_chain_list() == [
            "celo",
            "ethereum",
        ]

    def test_missing_required(self):
        settings = Settings(
            _env_file=None,
            discord_webhook_alerts="a",
            discord_webhook_events="",
            multisig_config="{}",
            quicknode_signing_secret="s",
        )
        assert settings.missing_required() == ["DISCORD_WEBHOOK_EVENTS"]

    def test_load_settings_yaml_overlay(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        config = tmp_path / "config.yaml"
        config.write_text("port: 9100\nsupported_chains: celo\n")
        settings = load_settings(config)
        assert settings.port == 9100
        assert settings.supported_chain_list() == ["celo"]

    def test_load_settings_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        settings = load_settings(tmp_path / "absent.yaml")
        assert settings.port == 9000
