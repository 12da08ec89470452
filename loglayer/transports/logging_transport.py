"""
Transport for the standard library logging module

Forwards entries to a logging.Logger so LogLayer can sit in front of an
existing logging configuration.
"""

import logging
from typing import Any, Dict, List, Optional

from loglayer.core.log_entry import LogEntry
from loglayer.core.log_level import LevelLike, LogLevel
from loglayer.transports.base_transport import BaseTransport

# logging has no TRACE level
TRACE_LEVEL_NUM = 5

STDLIB_LEVELS: Dict[LogLevel, int] = {
    LogLevel.TRACE: TRACE_LEVEL_NUM,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
}


class LoggingTransport(BaseTransport[logging.Logger]):
    """
    Ship entries to a logging.Logger.

    The message parts are joined with spaces. The data object is attached
    to the LogRecord under extra_key, so handlers and formatters can read
    it as record.<extra_key>.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        extra_key: str = "loglayer_data",
        attach_exc_info: bool = True,
        id: Optional[str] = None,
        enabled: bool = True,
        level: LevelLike = LogLevel.TRACE,
    ):
        """
        Initialize logging transport.

        Args:
            logger: Target logger (default: logging.getLogger("loglayer"))
            extra_key: LogRecord attribute holding the data object
            attach_exc_info: Pass exception errors as exc_info
        """
        super().__init__(
            logger=logger or logging.getLogger("loglayer"),
            id=id,
            enabled=enabled,
            level=level,
        )
        self.extra_key = extra_key
        self.attach_exc_info = attach_exc_info

    def ship_to_logger(self, entry: LogEntry) -> List[Any]:
        message = " ".join(str(m) for m in entry.messages)
        kwargs: Dict[str, Any] = {}

        if entry.has_data and entry.data:
            kwargs["extra"] = {self.extra_key: entry.data}

        if self.attach_exc_info and isinstance(entry.error, BaseException):
            kwargs["exc_info"] = entry.error

        self.logger.log(STDLIB_LEVELS[entry.level], message, **kwargs)

        if "extra" in kwargs:
            return [message, entry.data]
        return [message]
