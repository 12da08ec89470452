"""Tests for extensions and the metrics extension"""

import pytest
from unittest.mock import Mock

from loglayer import ConfigurationError, LogLayer, LogLayerConfig
from loglayer.extensions import (
    HAS_PROMETHEUS,
    ExtensionRegistry,
    InMemoryStatsClient,
    LogLayerExtension,
    MetricsError,
    MetricsExtension,
    PrometheusStatsClient,
    StatsHandle,
)
from loglayer.plugins import CallbackPlugin

if HAS_PROMETHEUS:
    from prometheus_client import CollectorRegistry


class AuditExtension(LogLayerExtension):
    name = "audit"

    def __init__(self):
        self.constructed = []

    def logger_methods(self):
        return {"audit": lambda log, action: log.with_metadata({"action": action}).info("audit")}

    def builder_methods(self):
        return {"with_actor": lambda builder, actor: builder.with_metadata({"actor": actor})}

    def plugins(self):
        return [CallbackPlugin(
            id="audit-tag",
            on_before_data_out=lambda params, log: {"audited": True},
        )]

    def on_construct(self, loglayer):
        self.constructed.append(loglayer)


class TestExtensionRegistry:
    """Test method registration rules."""

    def test_lookup(self):
        registry = ExtensionRegistry([AuditExtension()])
        assert callable(registry.get_logger_method("audit"))
        assert callable(registry.get_builder_method("with_actor"))
        assert registry.get_logger_method("missing") is None

    def test_duplicate_extension_name(self):
        with pytest.raises(ConfigurationError):
            ExtensionRegistry([AuditExtension(), AuditExtension()])

    def test_reserved_name(self):
        class Shadowing(LogLayerExtension):
            name = "shadow"

            def logger_methods(self):
                return {"info": lambda log: None}

        with pytest.raises(ConfigurationError):
            ExtensionRegistry([Shadowing()], reserved_logger_names=["info"])

    def test_method_clash_between_extensions(self):
        class First(LogLayerExtension):
            name = "first"

            def logger_methods(self):
                return {"shared": lambda log: 1}

        class Second(First):
            name = "second"

        with pytest.raises(ConfigurationError):
            ExtensionRegistry([First(), Second()])

    def test_loglayer_rejects_shadowing(self, transport):
        class Shadowing(LogLayerExtension):
            name = "shadow"

            def logger_methods(self):
                return {"child": lambda log: None}

        with pytest.raises(ConfigurationError):
            LogLayer(LogLayerConfig(transport=transport, extensions=[Shadowing()]))


class TestExtensionDelegation:
    """Test extension methods on LogLayer and LogBuilder."""

    def test_logger_and_builder_methods(self, transport, library):
        extension = AuditExtension()
        log = LogLayer(LogLayerConfig(transport=transport, extensions=[extension]))

        log.audit("login")
        log.with_metadata({"a": 1}).with_actor("kim").warn("changed")

        assert library.lines[0].data[0] == {"action": "login", "audited": True}
        assert library.lines[1].data[0] == {"a": 1, "actor": "kim", "audited": True}

    def test_on_construct_runs_for_children(self, transport):
        extension = AuditExtension()
        log = LogLayer(LogLayerConfig(transport=transport, extensions=[extension]))
        child = log.child()

        assert extension.constructed == [log, child]

    def test_extension_plugins_not_duplicated_for_children(self, transport):
        log = LogLayer(LogLayerConfig(transport=transport, extensions=[AuditExtension()]))
        child = log.child()

        assert child.get_plugin_manager().count_plugins() == 1

    def test_unknown_attribute(self, log):
        with pytest.raises(AttributeError):
            log.not_a_method()
        with pytest.raises(AttributeError):
            log.with_metadata({"a": 1}).not_a_method()


class TestMetricsExtension:
    """Test metrics extension with an in-memory client."""

    def test_stats(self, transport):
        client = InMemoryStatsClient()
        log = LogLayer(LogLayerConfig(
            transport=transport,
            extensions=[MetricsExtension(client, default_tags={"service": "api"})],
        ))

        log.stats().increment("requests").increment("requests", 2, tags={"route": "/"})
        log.stats().gauge("queue", 5).histogram("latency", 0.2)
        log.stats().decrement("requests")

        assert client.counters["requests"] == 2
        assert client.gauges["queue"] == 5
        assert client.records[1].tags == {"service": "api", "route": "/"}
        assert [r.kind for r in client.records] == [
            "counter", "counter", "gauge", "histogram", "counter"
        ]

    def test_stats_from_builder(self, transport):
        client = InMemoryStatsClient()
        log = LogLayer(LogLayerConfig(transport=transport, extensions=[MetricsExtension(client)]))

        handle = log.with_metadata({"a": 1}).stats()
        handle.increment("jobs")

        assert isinstance(handle, StatsHandle)
        assert handle.get_client() is client
        assert client.counters == {"jobs": 1}

    def test_client_per_extension(self, transport):
        first = InMemoryStatsClient()
        second = InMemoryStatsClient()
        log_a = LogLayer(LogLayerConfig(transport=transport, extensions=[MetricsExtension(first)]))
        log_b = LogLayer(LogLayerConfig(transport=transport, extensions=[MetricsExtension(second)]))

        log_a.stats().increment("a")
        log_b.stats().increment("b")

        assert first.counters == {"a": 1}
        assert second.counters == {"b": 1}

    def test_client_errors_reported(self, transport, reported):
        client = Mock(spec=["record_counter", "record_gauge", "record_histogram"])
        client.record_counter.side_effect = RuntimeError("statsd down")
        log = LogLayer(LogLayerConfig(
            transport=transport,
            on_error=reported.append,
            extensions=[MetricsExtension(client)],
        ))

        log.stats().increment("requests")

        assert isinstance(reported[0], MetricsError)
        assert reported[0].metric == "requests"

    def test_invalid_client(self):
        with pytest.raises(TypeError):
            MetricsExtension(object())

    def test_custom_method_name(self, transport):
        client = InMemoryStatsClient()
        log = LogLayer(LogLayerConfig(
            transport=transport,
            extensions=[MetricsExtension(client, method_name="metrics")],
        ))
        log.metrics().gauge("x", 1)
        assert client.gauges == {"x": 1}


@pytest.mark.skipif(not HAS_PROMETHEUS, reason="prometheus_client not installed")
class TestPrometheusStatsClient:
    """Test Prometheus-backed stats client."""

    def test_counter(self):
        registry = CollectorRegistry()
        client = PrometheusStatsClient(prefix="app", registry=registry)

        client.record_counter("requests", 2, {"route": "/"})
        client.record_counter("requests", 1, {"route": "/"})

        assert registry.get_sample_value("app_requests_total", {"route": "/"}) == 3.0

    def test_gauge_and_histogram(self):
        registry = CollectorRegistry()
        client = PrometheusStatsClient(prefix="app", registry=registry)

        client.record_gauge("queue.depth", 7)
        client.record_histogram("latency", 0.3)
        client.record_histogram("latency", 0.1)

        assert registry.get_sample_value("app_queue_depth") == 7.0
        assert registry.get_sample_value("app_latency_count") == 2.0

    def test_through_extension(self, transport):
        registry = CollectorRegistry()
        client = PrometheusStatsClient(prefix="svc", registry=registry)
        log = LogLayer(LogLayerConfig(
            transport=transport,
            extensions=[MetricsExtension(client, default_tags={"service": "api"})],
        ))

        log.stats().increment("logins")

        assert registry.get_sample_value("svc_logins_total", {"service": "api"}) == 1.0
