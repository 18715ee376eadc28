"""Structured logging for the relay: structlog over stdlib logging, with redaction."""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Iterable

import structlog

# Library loggers that log every request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore", "aiohttp.access")

_KEY_VALUE_RE = re.compile(
    r"(token|key|secret|password|signature)[\"']?\s*[:=]\s*[\"']?[\w\-\.]+", re.IGNORECASE
)
# The path after /api/webhooks/ is the credential
_DISCORD_WEBHOOK_RE = re.compile(
    r"(https://(?:\w+\.)?discord(?:app)?\.com/api/webhooks/)\S+", re.IGNORECASE
)

REDACTED = "***REDACTED***"


class Redactor:
    """structlog processor masking credentials in string values.

    Besides the generic ``key=value`` and Discord webhook patterns, any
    literal secret handed in at setup (the QuickNode signing secret) is
    replaced wherever it appears.
    """

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        self._secrets = tuple(s for s in secrets if s)

    def redact(self, value: str) -> str:
        for secret in self._secrets:
            value = value.replace(secret, REDACTED)
        value = _KEY_VALUE_RE.sub(rf"\1={REDACTED}", value)
        return _DISCORD_WEBHOOK_RE.sub(rf"\1{REDACTED}", value)

    def __call__(
        self,
        _logger: structlog.types.WrappedLogger,
        _method: str,
        event_dict: structlog.types.EventDict,
    ) -> structlog.types.EventDict:
        for key, value in event_dict.items():
            if isinstance(value, str):
                event_dict[key] = self.redact(value)
        return event_dict


def _renderer(json_output: bool) -> list[structlog.types.Processor]:
    if json_output:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer()]


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    secrets: Iterable[str] = (),
    environment: str | None = None,
) -> None:
    """Route structlog and stdlib records through one stdout handler."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if numeric_level <= logging.DEBUG:
        print(
            "WARNING: DEBUG logging is enabled. Request and chain lookup details "
            "may appear in logs. Do not use in production.",
            file=sys.stderr,
        )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        Redactor(secrets),
    ]

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderer(json_output),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    structlog.contextvars.clear_contextvars()
    if environment:
        structlog.contextvars.bind_contextvars(environment=environment)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
