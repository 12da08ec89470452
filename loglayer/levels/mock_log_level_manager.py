"""No-op log level manager for unit tests"""

from loglayer.core.log_level import LevelLike
from loglayer.levels.base_log_level_manager import BaseLogLevelManager


class MockLogLevelManager(BaseLogLevelManager):
    """Reports every level as enabled and ignores all mutators."""

    def set_level(self, level: LevelLike) -> None:
        pass

    def enable_individual_level(self, level: LevelLike) -> None:
        pass

    def disable_individual_level(self, level: LevelLike) -> None:
        pass

    def is_level_enabled(self, level: LevelLike) -> bool:
        return True

    def enable_logging(self) -> None:
        pass

    def disable_logging(self) -> None:
        pass

    def on_child_logger_created(self, params) -> None:
        pass

    def clone(self) -> "MockLogLevelManager":
        return MockLogLevelManager()
