"""Prometheus metrics collector."""

import logging
from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

logger = logging.getLogger(__name__)


class MetricsCollector:
    """Collects and exposes Prometheus metrics for the coordination primitives."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize metrics.

        Args:
            registry: Registry to register metrics on (default: global registry)
        """
        if registry is None:
            registry = REGISTRY
        self.registry = registry

        # Outcome counters
        self.operations_total = Counter(
            "flyfit_coordination_operations_total",
            "Total calls finished by a coordination primitive",
            ["primitive", "outcome"],
            registry=registry,
        )

        self.debounce_calls_total = Counter(
            "flyfit_coordination_debounce_calls_total",
            "Debouncer control events",
            ["primitive", "event"],
            registry=registry,
        )

        # Latency metrics
        self.operation_seconds = Histogram(
            "flyfit_coordination_operation_seconds",
            "Time spent running wrapped operations in seconds",
            ["primitive"],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=registry,
        )

        # Queue depth
        self.queue_pending = Gauge(
            "flyfit_coordination_queue_pending",
            "Entries waiting in a sequential queue",
            ["queue"],
            registry=registry,
        )

    def record_outcome(self, primitive: str, outcome: str) -> None:
        """Record a finished call."""
        self.operations_total.labels(primitive=primitive, outcome=outcome).inc()

    def record_duration(self, primitive: str, seconds: float) -> None:
        """Record how long an operation ran."""
        self.operation_seconds.labels(primitive=primitive).observe(seconds)

    def record_debounce_event(self, primitive: str, event: str) -> None:
        """Record a debouncer call, cancel, flush or timer fire."""
        self.debounce_calls_total.labels(primitive=primitive, event=event).inc()

    def set_queue_pending(self, queue: str, count: int) -> None:
        """Update queue depth."""
        self.queue_pending.labels(queue=queue).set(count)


# Global metrics collector instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
