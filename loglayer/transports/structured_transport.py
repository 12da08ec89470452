"""
Structured transport

Writes each entry as a JSON object with level, time and message fields
followed by the entry's data. With stringify=False the object is written
as a dict.
"""

import json
import sys
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TextIO, Union

from loglayer.core.log_entry import LogEntry
from loglayer.core.log_level import LevelLike, LogLevel
from loglayer.transports.base_transport import BaseTransport


class StructuredTransport(BaseTransport[TextIO]):
    """
    Emit one JSON object per entry.

    Produces output suitable for log aggregation systems.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        message_field: str = "msg",
        date_field: str = "time",
        level_field: str = "level",
        date_fn: Optional[Callable[[], Union[str, int, float]]] = None,
        level_fn: Optional[Callable[[LogLevel], Union[str, int]]] = None,
        message_fn: Optional[Callable[[LogEntry], str]] = None,
        indent: Optional[int] = None,
        ensure_ascii: bool = False,
        stringify: bool = True,
        id: Optional[str] = None,
        enabled: bool = True,
        level: LevelLike = LogLevel.TRACE,
    ):
        """
        Initialize structured transport.

        Args:
            stream: Output stream (default: sys.stdout)
            message_field: Field for the joined message text
            date_field: Field for the timestamp
            level_field: Field for the level
            date_fn: Produces the timestamp value (default: UTC ISO 8601)
            level_fn: Produces the level value (default: level name)
            message_fn: Produces the message text from the entry
            indent: JSON indentation (None for compact, 2 for readable)
            ensure_ascii: Escape non-ASCII characters
            stringify: Write JSON text; when False the record dict itself
                       is passed to stream.write(), for sinks that take objects

        Example:
            # Compact JSON (one line per entry)
            transport = StructuredTransport()

            # Numeric levels under "severity"
            transport = StructuredTransport(
                level_field="severity",
                level_fn=lambda level: int(level),
            )
        """
        super().__init__(
            logger=stream or sys.stdout,
            id=id,
            enabled=enabled,
            level=level,
        )
        self.message_field = message_field
        self.date_field = date_field
        self.level_field = level_field
        self.date_fn = date_fn
        self.level_fn = level_fn
        self.message_fn = message_fn
        self.indent = indent
        self.ensure_ascii = ensure_ascii
        self.stringify = stringify

    def build_record(self, entry: LogEntry) -> Dict[str, Any]:
        """Build the structured object for an entry."""
        if self.message_fn:
            text = self.message_fn(entry)
        else:
            text = " ".join(str(m) for m in entry.messages)

        record: Dict[str, Any] = {
            self.level_field: self.level_fn(entry.level) if self.level_fn else str(entry.level),
            self.date_field: (
                self.date_fn() if self.date_fn
                else datetime.now(timezone.utc).isoformat()
            ),
            self.message_field: text,
        }

        if entry.data:
            record.update(entry.data)

        return record

    def ship_to_logger(self, entry: LogEntry) -> List[Any]:
        record = self.build_record(entry)
        if not self.stringify:
            self.logger.write(record)
            return [record]

        self.logger.write(
            json.dumps(
                record,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
                default=str,
            ) + "\n"
        )
        return [record]

    def flush(self) -> None:
        flush = getattr(self.logger, "flush", None)
        if callable(flush):
            flush()

    def __repr__(self) -> str:
        return f"StructuredTransport(id={self.id!r}, indent={self.indent})"
