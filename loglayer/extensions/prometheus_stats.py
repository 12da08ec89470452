"""
Prometheus stats client

Records metrics from the metrics extension with the prometheus_client
library.
"""

from __future__ import annotations

import re
import threading
from typing import Any, Dict, Optional, Tuple

# Optional dependency
try:
    from prometheus_client import REGISTRY, Counter, Gauge, Histogram
    HAS_PROMETHEUS = True
except ImportError:
    HAS_PROMETHEUS = False
    Counter = None
    Gauge = None
    Histogram = None
    REGISTRY = None


_INVALID_CHARS = re.compile(r"[^a-zA-Z0-9_]")


class PrometheusStatsClient:
    """
    Stats client backed by prometheus_client.

    Requires prometheus_client package:
        pip install prometheus-client

    Metric objects are created on first use. The label names of a metric
    are fixed by the tags of its first recording; later recordings must use
    the same tag keys.

    Example:
        client = PrometheusStatsClient(prefix="myapp")
        client.record_counter("requests", 1, {"route": "/health"})
        # exposes myapp_requests_total{route="/health"}
    """

    def __init__(
        self,
        prefix: str = "loglayer",
        registry=None,
        buckets: Tuple[float, ...] = (0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
    ):
        """
        Initialize Prometheus stats client.

        Args:
            prefix: Metric name prefix
            registry: Optional custom registry (uses default if None)
            buckets: Histogram buckets

        Raises:
            ImportError: If prometheus_client is not installed
        """
        if not HAS_PROMETHEUS:
            raise ImportError(
                "prometheus_client not installed. "
                "Install with: pip install prometheus-client"
            )

        self._prefix = prefix
        self._registry = registry or REGISTRY
        self._buckets = buckets
        self._metrics: Dict[Tuple[str, str], Any] = {}
        self._lock = threading.Lock()

    def _metric_name(self, name: str) -> str:
        return _INVALID_CHARS.sub("_", f"{self._prefix}_{name}")

    def _get_metric(self, kind: str, name: str, tags: Optional[Dict[str, str]]):
        key = (kind, name)
        with self._lock:
            metric = self._metrics.get(key)
            if metric is None:
                labels = sorted((tags or {}).keys())
                metric_name = self._metric_name(name)
                if kind == "counter":
                    metric = Counter(metric_name, f"Counter {name}", labels, registry=self._registry)
                elif kind == "gauge":
                    metric = Gauge(metric_name, f"Gauge {name}", labels, registry=self._registry)
                else:
                    metric = Histogram(
                        metric_name,
                        f"Histogram {name}",
                        labels,
                        buckets=self._buckets,
                        registry=self._registry,
                    )
                self._metrics[key] = metric

        if tags:
            return metric.labels(**tags)
        return metric

    def record_counter(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Record a counter metric.

        Prometheus counters only go up; negative values are rejected by
        prometheus_client.

        Args:
            name: Metric name
            value: Counter increment
            tags: Optional labels
        """
        self._get_metric("counter", name, tags).inc(value)

    def record_gauge(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None
    ) -> None:
        """Record a gauge metric."""
        self._get_metric("gauge", name, tags).set(value)

    def record_histogram(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None
    ) -> None:
        """Record a histogram observation."""
        self._get_metric("histogram", name, tags).observe(value)
