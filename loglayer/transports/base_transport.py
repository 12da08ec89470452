"""
Base transport interface

A transport adapts one external logging backend. It owns its own enabled
flag and minimum level, independent of the LogLayer's level state, and
exposes a single shipping operation.
"""

import sys
import uuid
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

from loglayer.core.log_entry import LogEntry
from loglayer.core.log_level import LevelLike, LogLevel, to_log_level

LoggerT = TypeVar("LoggerT")


class BaseTransport(ABC, Generic[LoggerT]):
    """
    Abstract base class for transports that wrap a logger object.

    Subclasses implement ship_to_logger() and return the exact arguments
    they sent to the backend, so tests can assert on real output.
    """

    def __init__(
        self,
        logger: LoggerT,
        id: Optional[str] = None,
        enabled: bool = True,
        level: LevelLike = LogLevel.TRACE,
        console_debug: bool = False,
    ):
        """
        Initialize transport.

        Args:
            logger: The wrapped backend instance
            id: Transport id; generated when omitted
            enabled: If False, the transport receives nothing
            level: Minimum level this transport accepts
            console_debug: Echo shipped messages to stderr
        """
        self.id = id or uuid.uuid4().hex
        self.logger = logger
        self.enabled = enabled
        self.level = to_log_level(level)
        self.console_debug = console_debug

    def is_level_enabled(self, level: LogLevel) -> bool:
        """Check the transport's own enabled flag and minimum level."""
        return self.enabled and level >= self.level

    def send_to_logger(self, entry: LogEntry) -> Optional[List[Any]]:
        """
        Called by LogLayer to hand over an entry.

        Returns:
            Messages shipped, or None when the transport is disabled
        """
        if not self.enabled:
            return None

        messages = self.ship_to_logger(entry)

        if self.console_debug and messages is not None:
            print(f"[{entry.level}]", *messages, file=sys.stderr)

        return messages

    def get_logger_instance(self) -> Optional[LoggerT]:
        """Returns the wrapped backend instance."""
        return self.logger

    @abstractmethod
    def ship_to_logger(self, entry: LogEntry) -> List[Any]:
        """
        Send a resolved entry to the backend.

        Args:
            entry: Resolved entry; its messages list may be mutated freely

        Returns:
            The message arguments that were sent
        """
        pass

    def flush(self) -> None:
        """Flush pending output. No-op unless the backend buffers."""
        pass

    def close(self) -> None:
        """Release backend resources."""
        pass

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id!r}, "
            f"enabled={self.enabled}, level={self.level})"
        )


class LoggerlessTransport(BaseTransport[None]):
    """Base class for transports whose backend is not a logger object."""

    def __init__(
        self,
        id: Optional[str] = None,
        enabled: bool = True,
        level: LevelLike = LogLevel.TRACE,
        console_debug: bool = False,
    ):
        super().__init__(
            logger=None,
            id=id,
            enabled=enabled,
            level=level,
            console_debug=console_debug,
        )
