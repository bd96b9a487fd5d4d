"""Liveness and readiness probes for the reminder service."""

import logging
import time
from collections.abc import Callable

from django.db import DatabaseError, connection

import django_rq

from reminders.enums import HealthStatus
from reminders.models import ScheduledNotification
from reminders.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)


class HealthService:
    """Probes the database, the scheduled notification store and Redis.

    Probe results are cached for ``cache_ttl_seconds`` so a busy
    orchestrator cannot turn readiness checks into database load.
    """

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cache: dict[str, tuple[float, DependencyHealth]] = {}

    def get_liveness_status(self) -> LivenessResponse:
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Report every dependency; a failing one degrades, never unreadies.

        Scheduling needs the database, but armed timers keep firing without
        it and the worker falls back to periodic resync without Redis.
        """
        dependencies = {
            "database": self.check_database_health(),
            "store": self.check_store_health(),
            "redis": self.check_redis_health(),
        }
        degraded = not all(health.healthy for health in dependencies.values())
        return ReadinessResponse(
            ready=True,
            status="degraded" if degraded else "ready",
            degraded=degraded,
            dependencies=dependencies,
        )

    def check_database_health(self) -> DependencyHealth:
        return self._cached("database", "Database", connection.ensure_connection)

    def check_store_health(self) -> DependencyHealth:
        """Count scheduled rows, proving the reminders table is readable."""

        def probe():
            rows = ScheduledNotification.objects.all()
            return {
                "scheduled": rows.count(),
                "enabled": rows.filter(enabled=True).count(),
            }

        return self._cached("store", "Notification store", probe)

    def check_redis_health(self) -> DependencyHealth:
        """PING Redis through the django-rq connection the mailbox uses."""

        def probe():
            if not django_rq.get_connection("default").ping():
                raise ConnectionError("unexpected PING result")

        return self._cached("redis", "Redis", probe)

    def clear_cache(self) -> None:
        self._cache.clear()

    def _cached(
        self, name: str, label: str, probe: Callable[[], dict | None]
    ) -> DependencyHealth:
        now = time.time()
        cached = self._cache.get(name)
        if cached is not None and now - cached[0] < self.cache_ttl_seconds:
            return cached[1]
        health = self._run_probe(label, probe)
        self._cache[name] = (now, health)
        return health

    def _run_probe(
        self, label: str, probe: Callable[[], dict | None]
    ) -> DependencyHealth:
        started = time.perf_counter()

        def elapsed_ms() -> float:
            return (time.perf_counter() - started) * 1000

        try:
            details = probe()
        except (DatabaseError, ConnectionError) as e:
            logger.warning("%s health check failed: %s", label, e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"{label} unreachable: {e!s}",
                response_time_ms=elapsed_ms(),
            )
        except Exception as e:
            logger.error("Unexpected error checking %s: %s", label, e)
            return DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Unexpected error checking {label}: {e!s}",
                response_time_ms=elapsed_ms(),
            )
        return DependencyHealth(
            healthy=True,
            status=HealthStatus.HEALTHY,
            message=f"{label} reachable",
            response_time_ms=elapsed_ms(),
            details=details or None,
        )


health_service = HealthService()
