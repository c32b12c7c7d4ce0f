"""Prometheus metrics for the HTTP service and codec calls."""
from __future__ import annotations

from typing import Final

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

_HTTP_REQUEST_TOTAL: Final = Counter(
    "zatcaqr_http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status"),
)
_HTTP_REQUEST_LATENCY: Final = Histogram(
    "zatcaqr_http_request_duration_seconds",
    "Latency of HTTP requests",
    labelnames=("method", "route"),
    buckets=(0.005, 0.01, 0.05, 0.1, 0.5, 1),
)
_CODEC_OPERATIONS_TOTAL: Final = Counter(
    "zatcaqr_codec_operations_total",
    "Encode and decode calls by outcome",
    labelnames=("operation", "outcome"),
)


def observe_request(method: str, route: str, status_code: int, duration_ms: float) -> None:
    _HTTP_REQUEST_TOTAL.labels(method=method, route=route, status=str(status_code)).inc()
    _HTTP_REQUEST_LATENCY.labels(method=method, route=route).observe(duration_ms / 1000)


def record_codec_operation(operation: str, outcome: str = "ok") -> None:
    """Count an ``encode``/``decode`` call; ``outcome`` is ``ok`` or an error code."""

    _CODEC_OPERATIONS_TOTAL.labels(operation=operation, outcome=outcome).inc()


def metrics_payload() -> tuple[bytes, str]:
    """Return Prometheus exposition payload and content type."""

    return generate_latest(), CONTENT_TYPE_LATEST
