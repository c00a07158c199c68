"""Prometheus metrics helpers and metric definitions."""

from __future__ import annotations

from prometheus_client import (  # type: ignore
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from ..config import settings

NAMESPACE = settings.METRICS_NAMESPACE

REQUEST_COUNTER = Counter(
    "requests_total",
    "Total HTTP requests",
    labelnames=("method", "path", "status"),
    namespace=NAMESPACE,
)

REQUEST_LATENCY = Histogram(
    "request_latency_seconds",
    "Request latency in seconds",
    labelnames=("method", "path"),
    namespace=NAMESPACE,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

REQUEST_ERRORS = Counter(
    "request_errors_total",
    "Total HTTP request errors",
    labelnames=("method", "path", "status"),
    namespace=NAMESPACE,
)

INGESTIONS = Counter(
    "scripture_ingestions_total",
    "Scripture ingestion attempts by outcome",
    labelnames=("outcome",),
    namespace=NAMESPACE,
)

INGESTED_CHAPTERS = Gauge(
    "scripture_chapters",
    "Chapters in the most recently persisted normalized scripture",
    namespace=NAMESPACE,
)

INGESTED_VERSES = Gauge(
    "scripture_verses",
    "Verses in the most recently persisted normalized scripture",
    namespace=NAMESPACE,
)


def observe_request(method: str, path: str, status_code: int, duration: float) -> None:
    """Record metrics for a processed HTTP request."""

    REQUEST_COUNTER.labels(method=method, path=path, status=status_code).inc()
    REQUEST_LATENCY.labels(method=method, path=path).observe(duration)
    if status_code >= 500:
        REQUEST_ERRORS.labels(method=method, path=path, status=status_code).inc()


def observe_ingestion(outcome: str, chapters: int | None = None, verses: int | None = None) -> None:
    """Record an ingestion outcome and, on success, the persisted counts."""

    INGESTIONS.labels(outcome=outcome).inc()
    if chapters is not None:
        INGESTED_CHAPTERS.set(chapters)
    if verses is not None:
        INGESTED_VERSES.set(verses)


def metrics_response() -> tuple[bytes, str]:
    """Return serialized Prometheus metrics payload and content type."""

    payload = generate_latest()
    return payload, CONTENT_TYPE_LATEST
