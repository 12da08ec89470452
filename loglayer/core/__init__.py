"""
Core module for LogLayer

This module contains the fundamental classes:
- LogLayer: Logging facade and dispatch pipeline
- LogBuilder: Per-call metadata and error accumulator
- LogEntry: Log entry data structure
- LogLevel: Log level enumeration
- LogLayerConfig: Configuration management
- LogGroupConfig: Group routing rule
"""

from loglayer.core.errors import (
    ConfigurationError,
    LazyEvaluationError,
    LogLayerError,
    PluginHookError,
    SerializationError,
    TransportError,
)
from loglayer.core.log_level import LogLevel
from loglayer.core.groups import GroupRouter, LogGroupConfig
from loglayer.core.log_entry import LogEntry, RawLogEntry
from loglayer.core.lazy import LazyValue, lazy
from loglayer.core.serializers import serialize_error
from loglayer.core.log_layer_config import LogLayerConfig
from loglayer.core.log_builder import LogBuilder
from loglayer.core.log_layer import LogLayer
from loglayer.core.mock import MockLogBuilder, MockLogLayer

__all__ = [
    "LogLayer",
    "LogBuilder",
    "LogEntry",
    "RawLogEntry",
    "LogLevel",
    "LogLayerConfig",
    "LogGroupConfig",
    "GroupRouter",
    "LazyValue",
    "lazy",
    "serialize_error",
    "MockLogLayer",
    "MockLogBuilder",
    "LogLayerError",
    "ConfigurationError",
    "PluginHookError",
    "TransportError",
    "SerializationError",
    "LazyEvaluationError",
]
