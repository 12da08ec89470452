"""
Base log level manager interface

A log level manager decides which severities a LogLayer instance emits.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from loglayer.core.log_level import LevelLike

if TYPE_CHECKING:
    from loglayer.core.params import ChildLoggerCreatedParams


class BaseLogLevelManager(ABC):
    """Abstract base class for log level managers."""

    @abstractmethod
    def set_level(self, level: LevelLike) -> None:
        """Enable level and every higher level; disable all lower ones."""
        pass

    @abstractmethod
    def enable_individual_level(self, level: LevelLike) -> None:
        pass

    @abstractmethod
    def disable_individual_level(self, level: LevelLike) -> None:
        pass

    @abstractmethod
    def is_level_enabled(self, level: LevelLike) -> bool:
        pass

    @abstractmethod
    def enable_logging(self) -> None:
        """Turn the master switch on. Per-level flags are untouched."""
        pass

    @abstractmethod
    def disable_logging(self) -> None:
        """Turn the master switch off. Per-level flags are untouched."""
        pass

    @abstractmethod
    def on_child_logger_created(self, params: "ChildLoggerCreatedParams") -> None:
        pass

    @abstractmethod
    def clone(self) -> "BaseLogLevelManager":
        pass
