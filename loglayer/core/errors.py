"""
Exception hierarchy

Only ConfigurationError is ever raised to the caller. The others are
created on the logging path and handed to the configured error callback.
"""

from typing import Any, Optional


class LogLayerError(Exception):
    """Base class for all LogLayer errors."""


class ConfigurationError(LogLayerError, ValueError):
    """Invalid setup detected at construction or registration time."""


class PluginHookError(LogLayerError):
    """A plugin hook raised while processing a log call."""

    def __init__(self, plugin_id: str, hook: str, original: BaseException):
        self.plugin_id = plugin_id
        self.hook = hook
        self.original = original
        super().__init__(f"Plugin '{plugin_id}' failed in {hook}: {original!r}")


class TransportError(LogLayerError):
    """A transport raised while shipping a log entry."""

    def __init__(self, transport_id: Optional[str], original: BaseException):
        self.transport_id = transport_id
        self.original = original
        super().__init__(f"Transport '{transport_id}' failed to ship entry: {original!r}")


class SerializationError(LogLayerError):
    """The error serializer raised; a fallback representation was used."""

    def __init__(self, error: Any, original: BaseException):
        self.error = error
        self.original = original
        super().__init__(f"Error serializer failed for {type(error).__name__}: {original!r}")


class LazyEvaluationError(LogLayerError):
    """A lazy value callable raised during resolution."""

    def __init__(self, key: str, source: str, original: BaseException):
        self.key = key
        self.source = source
        self.original = original
        super().__init__(f"Lazy evaluation failed for {source} key '{key}': {original!r}")
