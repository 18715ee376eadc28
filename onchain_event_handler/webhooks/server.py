"""Webhook HTTP server using aiohttp."""

from __future__ import annotations

from aiohttp import web

from onchain_event_handler.chain.base import ChainReader
from onchain_event_handler.chain.jsonrpc import JsonRpcChainReader
from onchain_event_handler.config import Settings
from onchain_event_handler.discord import DiscordDispatcher
from onchain_event_handler.errors import ChainDetectionError, ConfigurationError
from onchain_event_handler.events.context import build_event_context
from onchain_event_handler.events.processor import EventProcessor
from onchain_event_handler.events.router import Router
from onchain_event_handler.health import health_report
from onchain_event_handler.registry import MultisigRegistry
from onchain_event_handler.utils.logging import get_logger
from onchain_event_handler.webhooks.handlers import validate_quicknode_request
from onchain_event_handler.webhooks.models import PayloadSizeCheck
from onchain_event_handler.webhooks.payload import check_payload_size, validate_payload

log = get_logger(__name__)

# Headroom so oversized bodies reach our own 413 instead of aiohttp's
_READ_HEADROOM_BYTES = 1024 * 1024


class WebhookServer:
    """Receives QuickNode webhook batches and relays each event to Discord."""

    def __init__(
        self,
        settings: Settings,
        registry: MultisigRegistry | None = None,
        dispatcher: DiscordDispatcher | None = None,
        reader: ChainReader | None = None,
    ) -> None:
        self._settings = settings
        self._runner: web.AppRunner | None = None
        self._registry_error: str | None = None

        if registry is None:
            try:
                registry = MultisigRegistry.from_json(settings.multisig_config)
            except ConfigurationError as e:
                self._registry_error = str(e)
                log.error("multisig_config_invalid", error=str(e))
        self._registry = registry

        self._dispatcher = dispatcher or DiscordDispatcher()
        self._reader = reader or JsonRpcChainReader(
            rpc_endpoints=settings.rpc_endpoints,
            supported_chains=settings.supported_chain_list(),
        )
        self._processor: EventProcessor | None = None
        if registry is not None:
            self._processor = EventProcessor(
                registry,
                Router.from_settings(settings),
                self._dispatcher,
                self._reader,
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if self._settings.is_development:
            log.warning(
                "signature_verification_disabled",
                msg="ENVIRONMENT=development, webhook signatures are not checked. Never use in production.",
            )
        app = self._build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._settings.host, self._settings.port)
        await site.start()
        log.info(
            "webhook_server_started",
            host=self._settings.host,
            port=self._settings.port,
            multisigs=len(self._registry) if self._registry is not None else 0,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        await self._dispatcher.close()
        await self._reader.close()
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    def _build_app(self) -> web.Application:
        app = web.Application(
            client_max_size=self._settings.max_payload_bytes + _READ_HEADROOM_BYTES
        )
        app.router.add_get("/", self._handle_health)
        app.router.add_post("/", self._handle_webhook)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_health(self, request: web.Request) -> web.Response:
        status, body = health_report(self._settings, self._registry, self._registry_error)
        return web.json_response(body, status=status)

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        max_size = self._settings.max_payload_bytes

        # 1. Size ceiling, from the header when present, before reading
        if request.content_length is not None:
            size_check = check_payload_size(request.content_length, max_size)
            if not size_check.valid:
                return self._too_large(size_check)

        try:
            body = await request.read()
        except web.HTTPRequestEntityTooLarge:
            return self._too_large(PayloadSizeCheck(False, max_size + 1, max_size))

        size_check = check_payload_size(len(body), max_size)
        if not size_check.valid:
            return self._too_large(size_check)

        # 2. Signature
        if not self._settings.is_development:
            validation = validate_quicknode_request(
                request.headers, body, self._settings.quicknode_signing_secret
            )
            if not validation.valid:
                log.warning(
                    "webhook_validation_failed",
                    status=validation.status,
                    message=validation.message,
                )
                return web.Response(status=validation.status, text=validation.message)

        # 3. Structure
        payload = validate_payload(body)
        if not payload.valid or payload.batch is None:
            log.warning("payload_validation_failed", status=payload.status, error=payload.error)
            return web.json_response(payload.error, status=payload.status)

        batch = payload.batch
        log.info("processing_webhook", log_count=batch.total, network=batch.network)

        try:
            if self._processor is None:
                raise ConfigurationError(self._registry_error or "Multisig registry not loaded")

            # 4. Context must cover the whole batch before any dispatch
            context = build_event_context(batch.events)

            # 5. Concurrent fan-out
            results = await self._processor.process_batch(batch, context)
        except ChainDetectionError as e:
            log.error("chain_detection_failed", error=str(e), **e.details())
            return web.json_response(
                {
                    "error": "Unprocessable Entity",
                    "message": str(e),
                    "details": e.details(),
                },
                status=422,
            )
        except Exception:
            log.exception("webhook_processing_error")
            return web.Response(status=500, text="Internal Server Error")

        log.info("webhook_processing_completed", processed=len(results), total=batch.total)
        return web.json_response({"processed": len(results), "total": batch.total})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _too_large(self, check: PayloadSizeCheck) -> web.Response:
        log.warning("payload_size_exceeded", payload_size=check.size, max_size=check.max_size)
        return web.json_response(
            {
                "error": "Payload Too Large",
                "message": (
                    f"Payload size {check.size} bytes exceeds maximum of {check.max_size} bytes"
                ),
            },
            status=413,
        )
