"""
Log level enumeration

Levels follow a fixed priority order: trace < debug < info < warn < error < fatal.
"""

from enum import IntEnum
from typing import Dict, Union

from loglayer.core.errors import ConfigurationError


class LogLevel(IntEnum):
    """
    Log level enumeration.

    Values are priorities; a higher value is a higher severity.
    """

    TRACE = 10      # Most verbose, detailed tracing
    DEBUG = 20      # Debug information
    INFO = 30       # Informational messages
    WARN = 40       # Warning messages
    ERROR = 50      # Error messages
    FATAL = 60      # Unrecoverable errors

    def __str__(self) -> str:
        """String representation of log level."""
        return self.name.lower()

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """
        Convert string to LogLevel.

        Args:
            level_str: Level name (case-insensitive)

        Returns:
            LogLevel enum value

        Raises:
            ValueError: If level_str is not valid
        """
        name = level_str.upper()
        if name == "WARNING":
            name = "WARN"
        if name in cls.__members__:
            return cls[name]
        raise ValueError(f"Invalid log level: {level_str}")

    @classmethod
    def coerce(cls, level: Union["LogLevel", str, int]) -> "LogLevel":
        """
        Accept a LogLevel, a level name or a priority value.

        Raises:
            ValueError: If the value does not name a level
        """
        if isinstance(level, cls):
            return level
        if isinstance(level, str):
            return cls.from_string(level)
        return cls(level)

    @property
    def color_code(self) -> str:
        """
        Get ANSI color code for this level.

        Returns:
            ANSI escape sequence
        """
        colors = {
            LogLevel.TRACE: "\033[37m",     # White
            LogLevel.DEBUG: "\033[36m",     # Cyan
            LogLevel.INFO: "\033[32m",      # Green
            LogLevel.WARN: "\033[33m",      # Yellow
            LogLevel.ERROR: "\033[31m",     # Red
            LogLevel.FATAL: "\033[35m",     # Magenta
        }
        return colors.get(self, "\033[0m")

    @property
    def reset_code(self) -> str:
        """ANSI reset code."""
        return "\033[0m"


LevelLike = Union[LogLevel, str, int]

# Mapping from log level to names
LEVEL_NAMES: Dict[LogLevel, str] = {level: str(level) for level in LogLevel}

# Reverse mapping
LEVEL_FROM_NAME: Dict[str, LogLevel] = {v: k for k, v in LEVEL_NAMES.items()}


def to_log_level(level: LevelLike) -> LogLevel:
    """
    Coerce a level argument given at setup time.

    Raises:
        ConfigurationError: If the value does not name a level
    """
    try:
        return LogLevel.coerce(level)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
