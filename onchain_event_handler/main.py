"""Entry point: loads settings, wires collaborators and serves the webhook endpoint."""

from __future__ import annotations

import asyncio
import signal
import sys

import click

from onchain_event_handler import __version__
from onchain_event_handler.config import Settings, load_settings
from onchain_event_handler.utils.logging import get_logger, setup_logging
from onchain_event_handler.webhooks.server import WebhookServer

log = get_logger(__name__)


async def run(settings: Settings) -> None:
    server = WebhookServer(settings)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        stop_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    log.info("onchain_event_handler_starting", version=__version__, environment=settings.environment)
    await server.start()

    try:
        if sys.platform == "win32":
            while not stop_event.is_set():
                await asyncio.sleep(1)
        else:
            await stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await server.stop()


@click.command()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--host", default=None, help="Bind address")
@click.option("--port", default=None, type=int, help="Listen port")
def cli(config_path: str | None, log_level: str | None, host: str | None, port: int | None) -> None:
    """Relay signed QuickNode Safe events to Discord."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    if host:
        settings.host = host
    if port is not None:
        settings.port = port
    setup_logging(
        level=settings.log_level,
        json_output=settings.log_json,
        secrets=[settings.quicknode_signing_secret],
        environment=settings.environment,
    )
    asyncio.run(run(settings))


if __name__ == "__main__":
    cli()
