"""
Default log level manager

Children inherit the parent's level state at creation time; later changes
on the parent do not propagate to existing children.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List

from loglayer.core.log_level import LevelLike, LogLevel, to_log_level
from loglayer.levels.base_log_level_manager import BaseLogLevelManager

if TYPE_CHECKING:
    from loglayer.core.params import ChildLoggerCreatedParams


class DefaultLogLevelManager(BaseLogLevelManager):
    """
    Per-level flags plus a master switch.

    A level is emitted only when both the master switch and its own flag
    are on.
    """

    def __init__(self, level: LevelLike = LogLevel.TRACE):
        self._enabled = True
        self._level_status: Dict[LogLevel, bool] = {}
        self.set_level(level)

    def set_level(self, level: LevelLike) -> None:
        min_level = to_log_level(level)
        for lvl in LogLevel:
            self._level_status[lvl] = lvl >= min_level

    def enable_individual_level(self, level: LevelLike) -> None:
        self._level_status[to_log_level(level)] = True

    def disable_individual_level(self, level: LevelLike) -> None:
        self._level_status[to_log_level(level)] = False

    def is_level_enabled(self, level: LevelLike) -> bool:
        return self._enabled and self._level_status[to_log_level(level)]

    def enable_logging(self) -> None:
        self._enabled = True

    def disable_logging(self) -> None:
        self._enabled = False

    @property
    def logging_enabled(self) -> bool:
        """State of the master switch."""
        return self._enabled

    def get_enabled_levels(self) -> List[LogLevel]:
        """Levels whose own flag is on, ignoring the master switch."""
        return [lvl for lvl in LogLevel if self._level_status[lvl]]

    def on_child_logger_created(self, params: "ChildLoggerCreatedParams") -> None:
        """Copy this manager's state into a default child manager."""
        child = params.child_log_level_manager
        if isinstance(child, DefaultLogLevelManager):
            child._level_status = dict(self._level_status)
            child._enabled = self._enabled

    def clone(self) -> "DefaultLogLevelManager":
        clone = DefaultLogLevelManager()
        clone._level_status = dict(self._level_status)
        clone._enabled = self._enabled
        return clone

    def __repr__(self) -> str:
        enabled = [str(lvl) for lvl in self.get_enabled_levels()]
        return f"DefaultLogLevelManager(enabled={self._enabled}, levels={enabled})"
