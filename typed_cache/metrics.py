"""
Prometheus metrics for the typed cache.
"""

from typing import Dict, Any, Optional

from prometheus_client import Counter, Histogram, CollectorRegistry


class CacheMetrics:
    """Cache hit/miss, error and single-flight metrics.

    Collectors are registered on ``registry`` when one is given; without a
    registry they stay unregistered, so several instances can coexist.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        self._metrics["typed_cache_requests_total"] = Counter(
            "typed_cache_requests_total",
            "Total cache operations by outcome",
            ["operation", "result"],
            registry=self.registry
        )

        self._metrics["typed_cache_errors_total"] = Counter(
            "typed_cache_errors_total",
            "Total absorbed cache failures",
            ["operation", "error_code"],
            registry=self.registry
        )

        self._metrics["typed_cache_loader_calls_total"] = Counter(
            "typed_cache_loader_calls_total",
            "Total loader invocations",
            ["result"],
            registry=self.registry
        )

        self._metrics["typed_cache_loader_duration_seconds"] = Histogram(
            "typed_cache_loader_duration_seconds",
            "Loader execution time in seconds",
            registry=self.registry
        )

        self._metrics["typed_cache_lock_wait_seconds"] = Histogram(
            "typed_cache_lock_wait_seconds",
            "Time spent waiting for the single-flight lock",
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def increment_counter(self, metric_name: str, **labels):
        """Increment a counter metric."""
        if metric_name in self._metrics:
            metric = self._metrics[metric_name]
            (metric.labels(**labels) if labels else metric).inc()

    def observe_histogram(self, metric_name: str, value: float, **labels):
        """Observe a histogram metric."""
        if metric_name in self._metrics:
            metric = self._metrics[metric_name]
            (metric.labels(**labels) if labels else metric).observe(value)

