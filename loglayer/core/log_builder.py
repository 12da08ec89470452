"""
Per-call log builder

Accumulates metadata and an error for a single log call:

    log.with_metadata({"user_id": 42}).with_error(exc).error("Payment failed")
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Union

from loglayer.core.groups import merge_groups, to_group_list
from loglayer.core.log_level import LogLevel

if TYPE_CHECKING:
    from loglayer.core.log_layer import LogLayer


class LogBuilder:
    """
    Fluent accumulator created by LogLayer.with_metadata() and
    LogLayer.with_error().

    A terminal call (trace .. fatal) dispatches through the owning LogLayer
    and then clears the builder, whether or not anything was emitted.
    """

    def __init__(self, logger: "LogLayer"):
        self.logger = logger
        self._reset()

    def _reset(self) -> None:
        self._metadata: Dict[str, Any] = {}
        self._has_metadata = False
        self._error: Any = None
        self._groups: Optional[List[str]] = None
        self._enabled = True

    def with_metadata(self, metadata: Optional[Dict[str, Any]] = None) -> "LogBuilder":
        """
        Shallow-merge metadata for this call; later keys win.

        None or an empty mapping is ignored.
        """
        if not metadata:
            self.logger._console_debug("with_metadata was called with no metadata; dropping.")
            return self

        self._metadata.update(metadata)
        self._has_metadata = True
        return self

    def with_error(self, error: Any) -> "LogBuilder":
        """Attach an error to this call, replacing any earlier one."""
        self._error = error
        return self

    def with_group(self, group: Union[str, Iterable[str]]) -> "LogBuilder":
        """Tag this call with group(s), in addition to the logger's own."""
        self._groups = merge_groups(self._groups, to_group_list(group))
        return self

    def enable_logging(self) -> "LogBuilder":
        """Re-enable this call after disable_logging()."""
        self._enabled = True
        return self

    def disable_logging(self) -> "LogBuilder":
        """Suppress this call only; the logger's own state is untouched."""
        self._enabled = False
        return self

    def trace(self, *messages: Any) -> None:
        self._log(LogLevel.TRACE, messages)

    def debug(self, *messages: Any) -> None:
        self._log(LogLevel.DEBUG, messages)

    def info(self, *messages: Any) -> None:
        self._log(LogLevel.INFO, messages)

    def warn(self, *messages: Any) -> None:
        self._log(LogLevel.WARN, messages)

    def error(self, *messages: Any) -> None:
        self._log(LogLevel.ERROR, messages)

    def fatal(self, *messages: Any) -> None:
        self._log(LogLevel.FATAL, messages)

    def _log(self, level: LogLevel, messages) -> None:
        try:
            if not self._enabled:
                return
            self.logger._log(
                level,
                messages,
                metadata=self._metadata if self._has_metadata else None,
                error=self._error,
                groups=self._groups,
            )
        finally:
            self._reset()

    def __getattr__(self, name: str) -> Any:
        logger = self.__dict__.get("logger")
        if logger is not None:
            fn = logger.get_extension_registry().get_builder_method(name)
            if fn is not None:
                return functools.partial(fn, self)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __repr__(self) -> str:
        return (
            f"LogBuilder(metadata={self._metadata!r}, "
            f"error={self._error!r}, groups={self._groups!r}, "
            f"enabled={self._enabled})"
        )
