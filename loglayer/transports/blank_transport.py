"""Transport that ships through a user-supplied function"""

from typing import Any, Callable, List, Optional

from loglayer.core.log_entry import LogEntry
from loglayer.core.log_level import LevelLike, LogLevel
from loglayer.transports.base_transport import LoggerlessTransport


class BlankTransport(LoggerlessTransport):
    """
    Quick custom transport.

    Example:
        def ship(entry):
            print(f"[{entry.level}]", *entry.messages, entry.data or "")
            return entry.messages

        log = LogLayer(LogLayerConfig(transport=BlankTransport(ship)))
    """

    def __init__(
        self,
        ship_to_logger: Callable[[LogEntry], List[Any]],
        id: Optional[str] = None,
        enabled: bool = True,
        level: LevelLike = LogLevel.TRACE,
        console_debug: bool = False,
    ):
        if not callable(ship_to_logger):
            raise TypeError("ship_to_logger must be callable")

        super().__init__(id=id, enabled=enabled, level=level, console_debug=console_debug)
        self._ship_fn = ship_to_logger

    def ship_to_logger(self, entry: LogEntry) -> List[Any]:
        return self._ship_fn(entry)
