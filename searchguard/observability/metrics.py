from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

_log = logging.getLogger(__name__)

_enabled = True


def set_metrics_enabled(enabled: bool) -> None:
    global _enabled
    _enabled = bool(enabled)


def metrics_enabled() -> bool:
    return _enabled


# -----------------------------------------------------------------------------
# Metrics must never break a request; failures are recorded at DEBUG only.
# -----------------------------------------------------------------------------
def _best_effort(msg: str, fn: Callable[[], Any]) -> None:
    try:
        fn()
    except Exception as e:  # pragma: no cover
        _log.debug("%s: %s", msg, e)


def _lookup(reg: CollectorRegistry, name: str) -> Any:
    names_map = getattr(reg, "_names_to_collectors", None)
    if isinstance(names_map, dict):
        return names_map.get(name)
    return None


def _get_or_create_counter(
    name: str,
    doc: str,
    labelnames: Tuple[str, ...] = (),
    registry: Optional[CollectorRegistry] = None,
) -> Counter:
    reg = registry or REGISTRY
    existing = _lookup(reg, name)
    if isinstance(existing, Counter):
        return existing
    try:
        return Counter(name, doc, labelnames=labelnames, registry=reg)
    except ValueError:
        # Registered concurrently (or under the *_total alias); reuse it.
        found = _lookup(reg, name) or _lookup(reg, f"{name}_total")
        if isinstance(found, Counter):
            return found
        # Final fallback: an unregistered counter (won't be exposed).
        return Counter(name, doc, labelnames=labelnames, registry=None)


def _get_or_create_histogram(
    name: str,
    doc: str,
    labelnames: Tuple[str, ...] = (),
    buckets: Tuple[float, ...] = Histogram.DEFAULT_BUCKETS,
    registry: Optional[CollectorRegistry] = None,
) -> Histogram:
    reg = registry or REGISTRY
    existing = _lookup(reg, name)
    if isinstance(existing, Histogram):
        return existing
    try:
        return Histogram(name, doc, labelnames=labelnames, buckets=buckets, registry=reg)
    except ValueError:
        found = _lookup(reg, name) or _lookup(reg, f"{name}_bucket")
        if isinstance(found, Histogram):
            return found
        return Histogram(name, doc, labelnames=labelnames, buckets=buckets, registry=None)


# --- Classification metrics ---------------------------------------------------

classifications_total = _get_or_create_counter(
    "searchguard_classifications_total",
    "Search inputs classified, by verdict and reason",
    ("verdict", "reason"),
)
classification_seconds = _get_or_create_histogram(
    "searchguard_classification_seconds",
    "Time spent classifying one search input",
    buckets=(0.0001, 0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5),
)

# --- HTTP metrics ---------------------------------------------------------------

http_requests_total = _get_or_create_counter(
    "searchguard_http_requests_total",
    "HTTP requests served, by method and status",
    ("method", "status"),
)


def record_classification(verdict: str, reason: str, seconds: float) -> None:
    if not _enabled:
        return

    def _do() -> None:
        classifications_total.labels(verdict=verdict, reason=reason).inc()
        classification_seconds.observe(max(seconds, 0.0))

    _best_effort("record classification", _do)


def inc_http_request(method: str, status: int) -> None:
    if not _enabled:
        return
    _best_effort(
        "inc http request",
        lambda: http_requests_total.labels(method=method.upper(), status=str(status)).inc(),
    )


__all__ = [
    "classification_seconds",
    "classifications_total",
    "http_requests_total",
    "inc_http_request",
    "metrics_enabled",
    "record_classification",
    "set_metrics_enabled",
]
