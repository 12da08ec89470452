"""
Transports for testing

TestTransport records every shipped entry in a TestLoggingLibrary so tests
can assert on exact output. MockTransport discards everything.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from loglayer.core.log_entry import LogEntry
from loglayer.core.log_level import LevelLike, LogLevel
from loglayer.transports.base_transport import BaseTransport, LoggerlessTransport


@dataclass
class CapturedLine:
    """
    One call received by TestLoggingLibrary.

    data holds every argument in call order (the data object first, when
    present); messages holds only the message parts.
    """

    level: LogLevel
    data: List[Any] = field(default_factory=list)
    messages: List[Any] = field(default_factory=list)


class TestLoggingLibrary:
    """In-memory logging backend used with TestTransport."""

    __test__ = False

    def __init__(self):
        self.lines: List[CapturedLine] = []

    def log(self, level: LogLevel, *params: Any, messages: Optional[List[Any]] = None) -> None:
        self.lines.append(
            CapturedLine(
                level=level,
                data=list(params),
                messages=list(params) if messages is None else list(messages),
            )
        )

    def trace(self, *params: Any) -> None:
        self.log(LogLevel.TRACE, *params)

    def debug(self, *params: Any) -> None:
        self.log(LogLevel.DEBUG, *params)

    def info(self, *params: Any) -> None:
        self.log(LogLevel.INFO, *params)

    def warn(self, *params: Any) -> None:
        self.log(LogLevel.WARN, *params)

    def error(self, *params: Any) -> None:
        self.log(LogLevel.ERROR, *params)

    def fatal(self, *params: Any) -> None:
        self.log(LogLevel.FATAL, *params)

    def get_last_line(self) -> Optional[CapturedLine]:
        """Last line logged, or None if nothing was logged."""
        if not self.lines:
            return None
        return self.lines[-1]

    def pop_line(self) -> Optional[CapturedLine]:
        """Remove and return the last line, or None if nothing was logged."""
        if not self.lines:
            return None
        return self.lines.pop()

    def clear_lines(self) -> None:
        self.lines.clear()

    def __len__(self) -> int:
        return len(self.lines)


class TestTransport(BaseTransport[TestLoggingLibrary]):
    """Capture-only transport; the data object is placed first."""

    __test__ = False

    def __init__(
        self,
        logger: Optional[TestLoggingLibrary] = None,
        id: Optional[str] = None,
        enabled: bool = True,
        level: LevelLike = LogLevel.TRACE,
    ):
        super().__init__(
            logger=logger if logger is not None else TestLoggingLibrary(),
            id=id,
            enabled=enabled,
            level=level,
        )

    def ship_to_logger(self, entry: LogEntry) -> List[Any]:
        messages = list(entry.messages)
        params = list(messages)

        if entry.data and entry.has_data:
            params.insert(0, entry.data)

        self.logger.log(entry.level, *params, messages=messages)
        return params


class MockTransport(LoggerlessTransport):
    """Accepts and discards every entry."""

    def __init__(self, id: Optional[str] = None, enabled: bool = True):
        super().__init__(id=id, enabled=enabled)

    def ship_to_logger(self, entry: LogEntry) -> List[Any]:
        return entry.messages
