"""
Tests for CacheMetrics.
"""

from prometheus_client import CollectorRegistry

from typed_cache import CacheMetrics


def _sample(metrics: CacheMetrics, metric_name: str, sample_name: str, **labels) -> float:
    for family in metrics.get_metric(metric_name).collect():
        for sample in family.samples:
            if sample.name == sample_name and sample.labels == labels:
                return sample.value
    return 0.0


class TestCacheMetrics:
    """Test cases for CacheMetrics."""

    def test_instances_without_registry_coexist(self):
        """Test several default instances can live in one process."""
        first = CacheMetrics()
        second = CacheMetrics()

        first.increment_counter("typed_cache_requests_total", operation="get", result="hit")
        first.increment_counter("typed_cache_requests_total", operation="get", result="hit")
        second.increment_counter("typed_cache_requests_total", operation="get", result="hit")

        assert first.registry is None
        assert _sample(first, "typed_cache_requests_total", "typed_cache_requests_total",
                       operation="get", result="hit") == 2.0
        assert _sample(second, "typed_cache_requests_total", "typed_cache_requests_total",
                       operation="get", result="hit") == 1.0

    def test_registers_on_given_registry(self):
        """Test collectors are exposed through an explicit registry."""
        registry = CollectorRegistry()
        metrics = CacheMetrics(registry)

        metrics.observe_histogram("typed_cache_loader_duration_seconds", 0.25)

        assert registry.get_sample_value("typed_cache_loader_duration_seconds_count") == 1.0
        assert registry.get_sample_value("typed_cache_loader_duration_seconds_sum") == 0.25

    def test_unknown_metric_is_ignored(self):
        """Test names outside the collector set are no-ops."""
        metrics = CacheMetrics()

        metrics.increment_counter("not_a_metric", result="x")

        assert metrics.get_metric("not_a_metric") is None
