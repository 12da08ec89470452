"""
Log entry data structures

LogEntry is the fully resolved payload handed to transports.
RawLogEntry is what callers pass to LogLayer.raw().
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from loglayer.core.log_level import LogLevel


@dataclass
class LogEntry:
    """
    Resolved log entry for one dispatch.

    Created by the orchestrator after plugins have run and discarded once
    every transport has been called.
    """

    level: LogLevel
    messages: List[Any] = field(default_factory=list)
    data: Optional[Dict[str, Any]] = None
    has_data: bool = False
    error: Any = None
    metadata: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None
    groups: Optional[List[str]] = None

    def __post_init__(self):
        """Validate log entry after initialization."""
        if not isinstance(self.level, LogLevel):
            raise TypeError("level must be LogLevel enum")

    def copy(self) -> "LogEntry":
        """
        Copy the entry for one transport.

        messages and the top level of data are copied, so a transport may
        add or remove keys without affecting the others.
        """
        return LogEntry(
            level=self.level,
            messages=list(self.messages),
            data=dict(self.data) if self.data is not None else None,
            has_data=self.has_data,
            error=self.error,
            metadata=self.metadata,
            context=self.context,
            groups=list(self.groups) if self.groups is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert log entry to dictionary.

        Returns:
            Dictionary representation
        """
        return {
            "level": str(self.level),
            "messages": list(self.messages),
            "data": self.data,
            "has_data": self.has_data,
        }


@dataclass
class RawLogEntry:
    """
    Caller-assembled entry for LogLayer.raw().

    When context is given it replaces the logger's persistent context
    for that call only. groups are merged with the logger's own groups.
    """

    level: LogLevel
    messages: List[Any] = field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None
    error: Any = None
    context: Optional[Dict[str, Any]] = None
    groups: Optional[List[str]] = None

    def __post_init__(self):
        self.level = LogLevel.coerce(self.level)
