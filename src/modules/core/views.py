import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()


def _ping_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _ping_cache() -> None:
    cache.set("_health_check", "ok", 10)
    if cache.get("_health_check") != "ok":
        raise ConnectionError("Cache read failed")


PROBES: Dict[str, Callable[[], None]] = {
    "database": _ping_database,
    "cache": _ping_cache,
}


def _probe(name: str, ping: Callable[[], None]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        ping()
    except Exception:
        logger.exception("health_check.probe_failed", service=name)
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """Liveness probe: database and cache round-trips."""
    services = {name: _probe(name, ping) for name, ping in PROBES.items()}
    healthy = all(s["status"] == "up" for s in services.values())
    status = "healthy" if healthy else "unhealthy"

    logger.info("health_check.completed", status=status)

    return JsonResponse(
        {
            "status": status,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
