"""Monitoring helpers and Prometheus metrics exporters."""
from __future__ import annotations

from typing import Final

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

_HTTP_REQUEST_TOTAL: Final = Counter(
    "pixqr_http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status"),
)
_HTTP_REQUEST_LATENCY: Final = Histogram(
    "pixqr_http_request_duration_seconds",
    "Latency of HTTP requests",
    labelnames=("method", "route"),
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
_SERVICE_ERRORS_TOTAL: Final = Counter(
    "pixqr_service_errors_total",
    "Service-level errors by code",
    labelnames=("code", "route"),
)
_RENDER_CACHE_LOOKUPS: Final = Counter(
    "pixqr_render_cache_lookups_total",
    "QR render cache lookups by outcome",
    labelnames=("outcome",),
)
_RENDER_CACHE_EVICTIONS: Final = Counter(
    "pixqr_render_cache_evictions_total",
    "QR render cache entries evicted to stay within capacity",
)
_PAYLOAD_VALIDATIONS: Final = Counter(
    "pixqr_payload_validations_total",
    "PIX payload checksum validations by result",
    labelnames=("result",),
)


def observe_request(method: str, route: str, status_code: int, duration_ms: float) -> None:
    _HTTP_REQUEST_TOTAL.labels(method=method, route=route, status=str(status_code)).inc()
    _HTTP_REQUEST_LATENCY.labels(method=method, route=route).observe(duration_ms / 1000)


def record_service_error(code: str, route: str) -> None:
    _SERVICE_ERRORS_TOTAL.labels(code=code, route=route).inc()


def record_cache_lookup(*, hit: bool) -> None:
    _RENDER_CACHE_LOOKUPS.labels(outcome="hit" if hit else "miss").inc()


def record_cache_eviction() -> None:
    _RENDER_CACHE_EVICTIONS.inc()


def record_validation(valid: bool) -> None:
    _PAYLOAD_VALIDATIONS.labels(result="valid" if valid else "invalid").inc()


def metrics_payload() -> tuple[bytes, str]:
    """Return Prometheus exposition payload and content type."""

    return generate_latest(), CONTENT_TYPE_LATEST
