"""Unit tests for structured event logging and StatsD formatting."""

from __future__ import annotations

import json
import logging

from infofinder.observability import (
    Observability,
    format_statsd_payload,
    get_observability,
    reset_observability_cache,
)
from infofinder.settings import get_settings


def _settings(structured: bool):
    base = get_settings()
    return base.model_copy(
        update={"observability": base.observability.model_copy(update={"structured_logging": structured})}
    )


def test_emit_event_writes_json_line(caplog):
    logger = logging.getLogger("infofinder.tests.observability")
    obs = Observability(settings=_settings(True), component="lookup", logger=logger)

    with caplog.at_level(logging.INFO, logger=logger.name):
        obs.emit_event("lookup.fetch", category="mobile", status_code=200)

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "lookup.fetch"
    assert payload["component"] == "lookup"
    assert payload["category"] == "mobile"
    assert payload["status_code"] == 200
    assert "timestamp" in payload


def test_emit_event_plain_text_when_structured_logging_disabled(caplog):
    logger = logging.getLogger("infofinder.tests.observability.plain")
    obs = Observability(settings=_settings(False), component="lookup", logger=logger)

    with caplog.at_level(logging.INFO, logger=logger.name):
        obs.emit_event("search.completed", sections=2)

    assert caplog.records[-1].getMessage().startswith("search.completed | ")


def test_metrics_are_noops_without_statsd():
    obs = Observability(settings=_settings(True), statsd=None)
    obs.increment("lookup.requests", tags={"category": "mobile"})
    obs.record_timing("lookup.latency_ms", 12.5)


def test_get_observability_without_statsd_host():
    reset_observability_cache()
    obs = get_observability(component="lookup", settings=_settings(True))
    assert obs.component == "lookup"
    assert obs.statsd is None


def test_format_statsd_payload():
    assert format_statsd_payload("infofinder", "lookup.requests", 1.0, metric_type="c") == "infofinder.lookup.requests:1|c"
    assert (
        format_statsd_payload(
            "infofinder",
            "lookup.latency_ms",
            12.5,
            metric_type="ms",
            tags={"kind": "http", "category": "mobile"},
        )
        == "infofinder.lookup.latency_ms:12.5|ms|#category:mobile,kind:http"
    )
    assert format_statsd_payload("", "x", 0.0, metric_type="c") == "x:0|c"


class _RecordingStatsd:
    def __init__(self) -> None:
        self.sent: list[tuple[str, float, str, object]] = []

    def send(self, metric, value, *, metric_type, tags=None):  # type: ignore[no-untyped-def]
        self.sent.append((metric, value, metric_type, tags))


def test_metrics_forward_to_statsd_with_cleaned_tags():
    statsd = _RecordingStatsd()
    obs = Observability(settings=_settings(True), statsd=statsd)  # type: ignore[arg-type]

    obs.increment("lookup.errors", tags={"kind": "http", "status": None, "code": 404})
    obs.record_timing("lookup.latency_ms", 8.25)

    assert statsd.sent == [
        ("lookup.errors", 1.0, "c", {"kind": "http", "code": "404"}),
        ("lookup.latency_ms", 8.25, "ms", None),
    ]


def test_get_observability_shares_statsd_client_per_target():
    reset_observability_cache()
    base = get_settings()
    settings = base.model_copy(
        update={"observability": base.observability.model_copy(update={"statsd_host": "127.0.0.1"})}
    )

    first = get_observability(component="lookup", settings=settings)
    second = get_observability(component="lookup_service", settings=settings)

    assert first.statsd is not None
    assert first.statsd is second.statsd
    assert first.statsd.address == ("127.0.0.1", settings.observability.statsd_port)
    reset_observability_cache()
