"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_PAYLOAD_SIZE_BYTES = 10 * 1024 * 1024


class WebhookPair(BaseModel):
    """Discord webhook URLs for the two channel types."""
    alerts: str = ""
    events: str = ""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Destinations
    discord_webhook_alerts: str = ""
    discord_webhook_events: str = ""
    # keyed by multisig key or "key:chain"
    discord_webhook_overrides: dict[str, WebhookPair] = Field(default_factory=dict)

    # Raw JSON: {key: {address, name, chain}}
    multisig_config: str = ""
    quicknode_signing_secret: str = ""

    supported_chains: str = ""
    rpc_endpoints: dict[str, str] = Field(default_factory=dict)

    environment: str = "production"
    host: str = "0.0.0.0"
    port: int = 8080
    max_payload_bytes: int = MAX_PAYLOAD_SIZE_BYTES

    log_level: str = "INFO"
    log_json: bool = False

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"

    def supported_chain_list(self) -> list[str] | None:
        """Chains enabled for chain reads, or None when unrestricted."""
        chains = [c.strip().lower() for c in self.supported_chains.split(",") if c.strip()]
        return chains or None

    def missing_required(self) -> list[str]:
        required = {
            "DISCORD_WEBHOOK_ALERTS": self.discord_webhook_alerts,
            "DISCORD_WEBHOOK_EVENTS": self.discord_webhook_events,
            "MULTISIG_CONFIG": self.multisig_config,
            "QUICKNODE_SIGNING_SECRET": self.quicknode_signing_secret,
        }
        return [name for name, value in required.items() if not value]


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    if config_path is None:
        config_path = os.environ.get("ONCHAIN_CONFIG")

    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # Init arguments win over the environment, so YAML keys take precedence
    return Settings(**yaml_data)
