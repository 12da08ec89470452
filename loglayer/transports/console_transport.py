"""Console transport with ANSI colors"""

import json
import sys
from datetime import datetime
from typing import Any, List, Optional, TextIO

from loglayer.core.log_entry import LogEntry
from loglayer.core.log_level import LevelLike, LogLevel
from loglayer.transports.base_transport import BaseTransport


class ConsoleTransport(BaseTransport[TextIO]):
    """Write one text line per entry to a stream with optional colors."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        colored: bool = True,
        append_object_data: bool = False,
        show_timestamp: bool = True,
        id: Optional[str] = None,
        enabled: bool = True,
        level: LevelLike = LogLevel.TRACE,
    ):
        """
        Initialize console transport.

        Args:
            stream: Output stream (default: sys.stderr)
            colored: Use ANSI color codes
            append_object_data: Put the data object after the messages
                                instead of before them
            show_timestamp: Prefix each line with the current time
            id: Transport id
            enabled: If False, nothing is written
            level: Minimum level written
        """
        super().__init__(
            logger=stream or sys.stderr,
            id=id,
            enabled=enabled,
            level=level,
        )
        self.colored = colored
        self.append_object_data = append_object_data
        self.show_timestamp = show_timestamp

    def ship_to_logger(self, entry: LogEntry) -> List[Any]:
        """Write log entry to the stream."""
        messages = entry.messages

        if entry.data and entry.has_data:
            if self.append_object_data:
                messages.append(entry.data)
            else:
                messages.insert(0, entry.data)

        line = f"[{str(entry.level).upper():5}] " + " ".join(
            self._render(part) for part in messages
        )

        if self.show_timestamp:
            now = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            line = f"[{now}] {line}"

        if self.colored:
            line = f"{entry.level.color_code}{line}{entry.level.reset_code}"

        self.logger.write(line + "\n")
        self.logger.flush()
        return messages

    @staticmethod
    def _render(part: Any) -> str:
        if isinstance(part, (dict, list)):
            return json.dumps(part, default=str, ensure_ascii=False)
        return str(part)

    def flush(self) -> None:
        """Flush stream."""
        self.logger.flush()
