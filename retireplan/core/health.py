"""Liveness data for the health-check endpoint."""

import time
from datetime import datetime, timezone

_STARTED_AT = time.monotonic()


def get_health_status() -> dict:
    """Return a static status plus the current UTC time and process uptime in seconds."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
    }
