"""
Extensions module

Adds methods to LogLayer and LogBuilder through an explicit registry.

Example:
    from loglayer import LogLayer, LogLayerConfig
    from loglayer.extensions import MetricsExtension, InMemoryStatsClient

    stats = InMemoryStatsClient()
    log = LogLayer(LogLayerConfig(
        transport=ConsoleTransport(),
        extensions=[MetricsExtension(stats)],
    ))
    log.stats().increment("jobs.processed")
"""

from loglayer.extensions.base_extension import LogLayerExtension
from loglayer.extensions.extension_registry import ExtensionRegistry
from loglayer.extensions.metrics import (
    InMemoryStatsClient,
    MetricsError,
    MetricsExtension,
    RecordedMetric,
    StatsHandle,
)
from loglayer.extensions.prometheus_stats import HAS_PROMETHEUS, PrometheusStatsClient

__all__ = [
    "LogLayerExtension",
    "ExtensionRegistry",
    "InMemoryStatsClient",
    "MetricsError",
    "MetricsExtension",
    "RecordedMetric",
    "StatsHandle",
    "PrometheusStatsClient",
    "HAS_PROMETHEUS",
]
