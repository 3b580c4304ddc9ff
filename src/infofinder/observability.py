"""Logging setup, lookup event lines, and StatsD counters/timers."""

from __future__ import annotations

import json
import logging
import socket
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Mapping

from infofinder.settings import Settings, get_settings

_LOGGER = logging.getLogger("infofinder.observability")


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from ``runtime.log_level``."""

    resolved = settings or get_settings()
    level = getattr(logging, resolved.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


class StatsdClient:
    """Fire-and-forget UDP sender for DogStatsD lines."""

    def __init__(self, host: str, port: int, prefix: str) -> None:
        self.address = (host, port)
        self.prefix = prefix
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def send(self, metric: str, value: float, *, metric_type: str, tags: Mapping[str, str] | None = None) -> None:
        payload = format_statsd_payload(self.prefix, metric, value, metric_type=metric_type, tags=tags)
        try:
            self._socket.sendto(payload.encode("utf-8"), self.address)
        except OSError:
            _LOGGER.debug("StatsD send failed for metric %s", metric, exc_info=True)


class Observability:
    """Event logging and metrics for one lookup component.

    Events are written through ``logging`` as one JSON object per line when
    ``observability.structured_logging`` is on, otherwise as ``event | fields``
    text. Metrics go to StatsD only when a client is attached.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        component: str | None = None,
        statsd: StatsdClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings
        self.component = component or "core"
        self.statsd = statsd
        self._logger = logger or _LOGGER
        self._structured = bool(settings.observability.structured_logging)

    def emit_event(self, event: str, **fields: Any) -> None:
        payload = {
            "event": event,
            "component": self.component,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **fields,
        }
        if self._structured:
            self._logger.info(json.dumps(payload, default=str))
        else:
            self._logger.info("%s | %s", event, payload)

    def increment(self, metric: str, *, value: float = 1.0, tags: Mapping[str, Any] | None = None) -> None:
        if self.statsd is not None:
            self.statsd.send(metric, value, metric_type="c", tags=_clean_tags(tags))

    def record_timing(self, metric: str, value_ms: float, *, tags: Mapping[str, Any] | None = None) -> None:
        if self.statsd is not None:
            self.statsd.send(metric, value_ms, metric_type="ms", tags=_clean_tags(tags))


@lru_cache(maxsize=None)
def _statsd_client(host: str, port: int, prefix: str) -> StatsdClient:
    return StatsdClient(host, port, prefix)


def get_observability(*, component: str | None = None, settings: Settings | None = None) -> Observability:
    """Build an :class:`Observability` sharing one StatsD socket per target."""

    resolved = settings or get_settings()
    obs_settings = resolved.observability
    statsd = None
    if obs_settings.statsd_host:
        statsd = _statsd_client(obs_settings.statsd_host, obs_settings.statsd_port, obs_settings.statsd_prefix)
    return Observability(settings=resolved, component=component, statsd=statsd)


def reset_observability_cache() -> None:
    """Drop cached StatsD clients (used in tests)."""

    _statsd_client.cache_clear()


def format_statsd_payload(
    prefix: str,
    metric: str,
    value: float,
    *,
    metric_type: str,
    tags: Mapping[str, str] | None = None,
) -> str:
    """Render a DogStatsD line such as ``infofinder.lookup.requests:1|c|#category:mobile``."""

    name = f"{prefix}.{metric}" if prefix else metric
    number = f"{value:.6f}".rstrip("0").rstrip(".") or "0"
    line = f"{name}:{number}|{metric_type}"
    if tags:
        line += "|#" + ",".join(f"{key}:{val}" for key, val in sorted(tags.items()))
    return line


def _clean_tags(tags: Mapping[str, Any] | None) -> dict[str, str] | None:
    if not tags:
        return None
    return {str(key): str(value) for key, value in tags.items() if value is not None} or None


__all__ = [
    "Observability",
    "StatsdClient",
    "configure_logging",
    "format_statsd_payload",
    "get_observability",
    "reset_observability_cache",
]
