"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

LogLayer - A structured logging facade
Routes context, metadata and errors through plugins to pluggable transports
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from loglayer.core.log_layer import LogLayer
from loglayer.core.log_builder import LogBuilder
from loglayer.core.log_entry import LogEntry, RawLogEntry
from loglayer.core.log_level import LogLevel
from loglayer.core.log_layer_config import LogLayerConfig
from loglayer.core.groups import LogGroupConfig
from loglayer.core.lazy import lazy
from loglayer.core.mock import MockLogBuilder, MockLogLayer
from loglayer.core.errors import (
    ConfigurationError,
    LazyEvaluationError,
    LogLayerError,
    PluginHookError,
    SerializationError,
    TransportError,
)

# Import submodules (not all classes by default)
from loglayer import context
from loglayer import extensions
from loglayer import levels
from loglayer import plugins
from loglayer import transports

__all__ = [
    "LogLayer",
    "LogBuilder",
    "LogEntry",
    "RawLogEntry",
    "LogLevel",
    "LogLayerConfig",
    "LogGroupConfig",
    "lazy",
    "MockLogLayer",
    "MockLogBuilder",
    "LogLayerError",
    "ConfigurationError",
    "PluginHookError",
    "TransportError",
    "SerializationError",
    "LazyEvaluationError",
    "context",
    "extensions",
    "levels",
    "plugins",
    "transports",
]
