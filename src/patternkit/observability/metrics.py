"""Prometheus metrics.

Counters are always updated; the HTTP endpoint is only started when
``observability.metrics_enabled`` is set.
"""

from __future__ import annotations

from prometheus_client import Counter, Info, start_http_server

SYSTEM_INFO = Info("patternkit", "Composition framework information")

OBJECTS_CREATED = Counter(
    "patternkit_objects_created_total",
    "Objects produced by factory registries",
    ["kind"],
)

CONSTRUCTION_FAILURES = Counter(
    "patternkit_construction_failures_total",
    "Factory create() calls that failed",
    ["kind", "reason"],
)

STATE_CHANGES = Counter(
    "patternkit_state_changes_total",
    "Subject state transitions",
    ["subject"],
)

DELIVERIES = Counter(
    "patternkit_deliveries_total",
    "Successful listener notifications",
    ["subject"],
)

LISTENER_FAILURES = Counter(
    "patternkit_listener_failures_total",
    "Listener callbacks that raised during delivery",
    ["subject", "listener"],
)


def start_metrics_server(port: int = 9090) -> None:
    """Start Prometheus metrics HTTP server in a background thread."""
    SYSTEM_INFO.info({"version": "0.1.0"})
    start_http_server(port)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------


def record_created(kind: str) -> None:
    OBJECTS_CREATED.labels(kind=kind).inc()


def record_construction_failure(kind: str, reason: str) -> None:
    CONSTRUCTION_FAILURES.labels(kind=kind, reason=reason).inc()


def record_state_change(subject: str) -> None:
    STATE_CHANGES.labels(subject=subject).inc()


def record_delivery(subject: str) -> None:
    DELIVERIES.labels(subject=subject).inc()


def record_listener_failure(subject: str, listener: str) -> None:
    LISTENER_FAILURES.labels(subject=subject, listener=listener).inc()
