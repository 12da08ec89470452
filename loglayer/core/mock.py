"""
No-op LogLayer and LogBuilder for tests

MockLogLayer exposes the LogLayer API but never dispatches. Code under test
can receive it wherever a LogLayer is expected.
"""

from typing import Any, Dict, Iterable, List, Optional

from loglayer.context.mock_context_manager import MockContextManager
from loglayer.core.log_entry import RawLogEntry
from loglayer.core.log_level import LevelLike, LogLevel
from loglayer.levels.mock_log_level_manager import MockLogLevelManager


class MockLogBuilder:
    """Builder whose fluent methods return itself and whose log methods do nothing."""

    def with_metadata(self, metadata: Optional[Dict[str, Any]] = None) -> "MockLogBuilder":
        return self

    def with_error(self, error: Any) -> "MockLogBuilder":
        return self

    def with_group(self, group: Any) -> "MockLogBuilder":
        return self

    def enable_logging(self) -> "MockLogBuilder":
        return self

    def disable_logging(self) -> "MockLogBuilder":
        return self

    def trace(self, *messages: Any) -> None:
        pass

    def debug(self, *messages: Any) -> None:
        pass

    def info(self, *messages: Any) -> None:
        pass

    def warn(self, *messages: Any) -> None:
        pass

    def error(self, *messages: Any) -> None:
        pass

    def fatal(self, *messages: Any) -> None:
        pass


class MockLogLayer:
    """
    LogLayer stand-in that records nothing.

    with_metadata() and with_error() return the same MockLogBuilder, so a
    test can patch its methods:

        log = MockLogLayer()
        with patch.object(log.get_mock_builder(), "error") as error:
            process(log)
        error.assert_called_once_with("Payment failed")
    """

    def __init__(self):
        self._builder = MockLogBuilder()
        self._context_manager = MockContextManager()
        self._log_level_manager = MockLogLevelManager()

    def get_mock_builder(self) -> MockLogBuilder:
        return self._builder

    def set_mock_builder(self, builder: MockLogBuilder) -> None:
        self._builder = builder

    def report_error(self, error: Exception) -> None:
        pass

    # Context
    def with_context(self, context: Optional[Dict[str, Any]] = None) -> "MockLogLayer":
        return self

    def get_context(self, raw: bool = False) -> Dict[str, Any]:
        return {}

    def clear_context(self, keys=None) -> "MockLogLayer":
        return self

    def mute_context(self) -> "MockLogLayer":
        return self

    def unmute_context(self) -> "MockLogLayer":
        return self

    def mute_metadata(self) -> "MockLogLayer":
        return self

    def unmute_metadata(self) -> "MockLogLayer":
        return self

    # Builders
    def with_metadata(self, metadata: Optional[Dict[str, Any]] = None) -> MockLogBuilder:
        return self._builder

    def with_error(self, error: Any) -> MockLogBuilder:
        return self._builder

    # Levels
    def enable_logging(self) -> "MockLogLayer":
        return self

    def disable_logging(self) -> "MockLogLayer":
        return self

    def set_level(self, level: LevelLike) -> "MockLogLayer":
        return self

    def enable_individual_level(self, level: LevelLike) -> "MockLogLayer":
        return self

    def disable_individual_level(self, level: LevelLike) -> "MockLogLayer":
        return self

    def is_level_enabled(self, level: LevelLike) -> bool:
        return True

    # Children
    def child(self) -> "MockLogLayer":
        return self

    def with_prefix(self, prefix: str) -> "MockLogLayer":
        return self

    # Groups
    def with_group(self, group: Any) -> "MockLogLayer":
        return self

    def get_assigned_groups(self) -> List[str]:
        return []

    def add_group(self, name: str, config: Any) -> "MockLogLayer":
        return self

    def remove_group(self, name: str) -> "MockLogLayer":
        return self

    def enable_group(self, name: str) -> "MockLogLayer":
        return self

    def disable_group(self, name: str) -> "MockLogLayer":
        return self

    def set_group_level(self, name: str, level: LevelLike) -> "MockLogLayer":
        return self

    def set_active_groups(self, names: Optional[Iterable[str]]) -> "MockLogLayer":
        return self

    def get_groups(self) -> Dict[str, Any]:
        return {}

    # Plugins
    def add_plugins(self, plugins: Iterable[Any]) -> "MockLogLayer":
        return self

    def remove_plugin(self, plugin_id: str) -> "MockLogLayer":
        return self

    def enable_plugin(self, plugin_id: str) -> "MockLogLayer":
        return self

    def disable_plugin(self, plugin_id: str) -> "MockLogLayer":
        return self

    def with_fresh_plugins(self, plugins: Iterable[Any]) -> "MockLogLayer":
        return self

    # Transports
    def add_transport(self, transports: Any) -> "MockLogLayer":
        return self

    def remove_transport(self, transport_id: str) -> bool:
        return False

    def with_fresh_transports(self, transports: Any) -> "MockLogLayer":
        return self

    def get_transports(self) -> List[Any]:
        return []

    def get_logger_instance(self, transport_id: str) -> Optional[Any]:
        return None

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass

    # Collaborators
    def with_context_manager(self, context_manager: Any) -> "MockLogLayer":
        return self

    def get_context_manager(self) -> MockContextManager:
        return self._context_manager

    def with_log_level_manager(self, log_level_manager: Any) -> "MockLogLayer":
        return self

    def get_log_level_manager(self) -> MockLogLevelManager:
        return self._log_level_manager

    # Logging
    def trace(self, *messages: Any) -> None:
        pass

    def debug(self, *messages: Any) -> None:
        pass

    def info(self, *messages: Any) -> None:
        pass

    def warn(self, *messages: Any) -> None:
        pass

    def error(self, *messages: Any) -> None:
        pass

    def fatal(self, *messages: Any) -> None:
        pass

    def error_only(self, error: Any, level: LevelLike = LogLevel.ERROR, copy_msg: Optional[bool] = None) -> None:
        pass

    def metadata_only(self, metadata: Optional[Dict[str, Any]], level: LevelLike = LogLevel.INFO) -> None:
        pass

    def raw(self, entry: RawLogEntry) -> None:
        pass
