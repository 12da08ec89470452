#!/usr/bin/env python3
"""Basic usage example"""

from loglayer import LogLayer, LogLayerConfig, LogLevel, lazy
from loglayer.extensions import InMemoryStatsClient, MetricsExtension
from loglayer.plugins import BasePlugin
from loglayer.transports import ConsoleTransport, StructuredTransport


class RedactPasswords(BasePlugin):
    def on_metadata_called(self, metadata, loglayer):
        if "password" in metadata:
            metadata["password"] = "[REDACTED]"
        return metadata


def main():
    stats = InMemoryStatsClient()

    # Colored console for humans, JSON lines for the aggregator
    log = LogLayer(LogLayerConfig(
        transport=[
            ConsoleTransport(colored=True, id="console"),
            StructuredTransport(level=LogLevel.WARN, id="json"),
        ],
        groups={"database": {"transports": ["json"], "level": "warn"}},
        plugins=[RedactPasswords(id="redact")],
        extensions=[MetricsExtension(stats)],
    ))

    log.with_context({"service": "example"})

    # Log messages
    log.trace("This is trace")
    log.debug("This is debug")
    log.info("Application started")
    log.with_metadata({"user": "kim", "password": "hunter2"}).info("User logged in")

    try:
        raise ValueError("invalid order id")
    except ValueError as e:
        log.with_error(e).error("Order lookup failed")

    # Evaluated only when debug is enabled
    log.with_metadata({"cache": lazy(lambda: {"hits": 10, "misses": 2})}).debug("Cache stats")

    # Child logger with its own prefix and context
    worker = log.with_prefix("[worker]")
    worker.with_context({"worker_id": 3})
    worker.warn("Queue is getting long")

    # Only reaches the JSON transport
    log.with_group("database").error("Connection pool exhausted")

    log.stats().increment("example.runs")

    log.flush()
    log.close()


if __name__ == "__main__":
    main()
