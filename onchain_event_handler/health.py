"""Liveness probe reporting configuration state."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from onchain_event_handler.config import Settings
from onchain_event_handler.registry import MultisigRegistry


def health_report(
    settings: Settings,
    registry: MultisigRegistry | None,
    registry_error: str | None = None,
) -> tuple[int, dict[str, Any]]:
    """Return ``(http_status, body)`` for GET /."""
    checks: dict[str, dict[str, str]] = {}

    missing = settings.missing_required()
    checks["config"] = {"status": "ok"} if not missing else {
        "status": "error",
        "message": f"Missing {', '.join(missing)}",
    }

    if registry is None:
        checks["multisigs"] = {
            "status": "error",
            "message": f"Failed to parse multisig config: {registry_error or 'not loaded'}",
        }
    elif len(registry) == 0:
        checks["multisigs"] = {"status": "warning", "message": "No multisigs configured"}
    else:
        checks["multisigs"] = {
            "status": "ok",
            "message": f"{len(registry)} multisig(s) configured",
        }

    statuses = [c["status"] for c in checks.values()]
    if "error" in statuses:
        status, code = "unhealthy", 503
    elif all(s == "ok" for s in statuses):
        status, code = "healthy", 200
    else:
        status, code = "degraded", 200

    return code, {
        "status": status,
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
