"""
Metrics extension

Adds a stats() method to loggers and builders that records counters, gauges
and histograms through an explicit client handle. The client is passed to
the extension's constructor; there is no process-wide client.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from loglayer.core.errors import LogLayerError
from loglayer.extensions.base_extension import LogLayerExtension

if TYPE_CHECKING:
    from loglayer.core.log_layer import LogLayer


Tags = Optional[Dict[str, str]]


class MetricsError(LogLayerError):
    """The metrics client raised while recording."""

    def __init__(self, metric: str, original: BaseException):
        self.metric = metric
        self.original = original
        super().__init__(f"Failed to record metric '{metric}': {original!r}")


@dataclass
class RecordedMetric:
    """One call received by InMemoryStatsClient."""

    kind: str
    name: str
    value: float
    tags: Dict[str, str] = field(default_factory=dict)


class InMemoryStatsClient:
    """
    Stats client that keeps every recorded metric in memory.

    Thread-safe; useful for tests and for exposing counters from a health
    endpoint.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.records: List[RecordedMetric] = []
        self.counters: Dict[str, float] = {}
        self.gauges: Dict[str, float] = {}

    def record_counter(self, name: str, value: int, tags: Tags = None) -> None:
        with self._lock:
            self.records.append(RecordedMetric("counter", name, value, dict(tags or {})))
            self.counters[name] = self.counters.get(name, 0) + value

    def record_gauge(self, name: str, value: float, tags: Tags = None) -> None:
        with self._lock:
            self.records.append(RecordedMetric("gauge", name, value, dict(tags or {})))
            self.gauges[name] = value

    def record_histogram(self, name: str, value: float, tags: Tags = None) -> None:
        with self._lock:
            self.records.append(RecordedMetric("histogram", name, value, dict(tags or {})))

    def clear(self) -> None:
        with self._lock:
            self.records.clear()
            self.counters.clear()
            self.gauges.clear()


class StatsHandle:
    """
    Bound metrics recorder returned by log.stats().

    Default tags are merged under per-call tags. A client failure is
    reported through the logger's error callback instead of raising.
    """

    def __init__(
        self,
        client: Any,
        default_tags: Tags = None,
        report: Optional[Callable[[LogLayerError], None]] = None,
    ):
        self._client = client
        self._default_tags = dict(default_tags or {})
        self._report = report

    def _tags(self, tags: Tags) -> Dict[str, str]:
        merged = dict(self._default_tags)
        if tags:
            merged.update(tags)
        return merged

    def _record(self, method: str, name: str, value: float, tags: Tags) -> "StatsHandle":
        try:
            getattr(self._client, method)(name, value, self._tags(tags))
        except Exception as e:
            if self._report is None:
                raise
            self._report(MetricsError(name, e))
        return self

    def increment(self, name: str, value: int = 1, tags: Tags = None) -> "StatsHandle":
        return self._record("record_counter", name, value, tags)

    def decrement(self, name: str, value: int = 1, tags: Tags = None) -> "StatsHandle":
        return self._record("record_counter", name, -value, tags)

    def gauge(self, name: str, value: float, tags: Tags = None) -> "StatsHandle":
        return self._record("record_gauge", name, value, tags)

    def histogram(self, name: str, value: float, tags: Tags = None) -> "StatsHandle":
        return self._record("record_histogram", name, value, tags)

    def get_client(self) -> Any:
        return self._client


class MetricsExtension(LogLayerExtension):
    """
    Extension exposing a metrics client on every logger.

    Example:
        client = PrometheusStatsClient(prefix="myapp")
        log = LogLayer(LogLayerConfig(
            transport=ConsoleTransport(),
            extensions=[MetricsExtension(client, default_tags={"service": "api"})],
        ))

        log.stats().increment("requests", tags={"route": "/health"})
    """

    name = "metrics"

    def __init__(self, client: Any, default_tags: Tags = None, method_name: str = "stats"):
        """
        Initialize metrics extension.

        Args:
            client: Object with record_counter, record_gauge and
                    record_histogram methods
            default_tags: Tags added to every metric
            method_name: Name of the method added to loggers and builders
        """
        for method in ("record_counter", "record_gauge", "record_histogram"):
            if not callable(getattr(client, method, None)):
                raise TypeError(f"metrics client must implement {method}()")

        self.client = client
        self.default_tags = dict(default_tags or {})
        self.method_name = method_name

    def _handle_for(self, log: "LogLayer") -> StatsHandle:
        return StatsHandle(self.client, self.default_tags, log.report_error)

    def logger_methods(self) -> Dict[str, Callable[..., Any]]:
        return {self.method_name: self._handle_for}

    def builder_methods(self) -> Dict[str, Callable[..., Any]]:
        return {self.method_name: lambda builder: self._handle_for(builder.logger)}
