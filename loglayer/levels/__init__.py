"""Log level managers module"""

from loglayer.levels.base_log_level_manager import BaseLogLevelManager
from loglayer.levels.default_log_level_manager import DefaultLogLevelManager
from loglayer.levels.mock_log_level_manager import MockLogLevelManager

__all__ = [
    "BaseLogLevelManager",
    "DefaultLogLevelManager",
    "MockLogLevelManager",
]
