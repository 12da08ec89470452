"""Tests for mock loggers"""

from unittest.mock import patch

from loglayer import LogLevel, MockLogBuilder, MockLogLayer, RawLogEntry
from loglayer.context import MockContextManager
from loglayer.levels import MockLogLevelManager


class TestMockLogLayer:
    """Test MockLogLayer API surface."""

    def test_fluent_methods_return_self(self):
        log = MockLogLayer()
        assert log.with_context({"a": 1}) is log
        assert log.child() is log
        assert log.with_prefix("x") is log
        assert log.set_level(LogLevel.ERROR) is log
        assert log.add_plugins([]) is log
        assert log.mute_context().unmute_context() is log

    def test_logging_does_nothing(self):
        log = MockLogLayer()
        log.info("x")
        log.error_only(ValueError("x"))
        log.metadata_only({"a": 1})
        log.raw(RawLogEntry(level="info", messages=["x"]))

        assert log.get_context() == {}
        assert log.is_level_enabled(LogLevel.TRACE)
        assert log.remove_transport("any") is False
        assert log.get_logger_instance("any") is None

    def test_builder_is_shared(self):
        log = MockLogLayer()
        builder = log.with_metadata({"a": 1})

        assert isinstance(builder, MockLogBuilder)
        assert log.with_error(ValueError()) is builder
        assert builder.with_metadata({}).with_error(None).disable_logging() is builder

    def test_builder_can_be_patched(self):
        log = MockLogLayer()

        with patch.object(log.get_mock_builder(), "error") as error:
            log.with_error(ValueError("x")).error("Payment failed")

        error.assert_called_once_with("Payment failed")

    def test_set_mock_builder(self):
        log = MockLogLayer()
        builder = MockLogBuilder()
        log.set_mock_builder(builder)
        assert log.with_metadata({}) is builder

    def test_mock_managers(self):
        log = MockLogLayer()
        assert isinstance(log.get_context_manager(), MockContextManager)
        assert isinstance(log.get_log_level_manager(), MockLogLevelManager)

    def test_group_methods_return_self(self):
        log = MockLogLayer()
        assert log.with_group("database") is log
        assert log.add_group("database", {"transports": ["t1"]}) is log
        assert log.remove_group("database") is log
        assert log.enable_group("database").disable_group("database") is log
        assert log.set_group_level("database", "error") is log
        assert log.set_active_groups(["database"]) is log
        assert log.get_groups() == {}

    def test_builder_with_group_returns_self(self):
        builder = MockLogBuilder()
        assert builder.with_group(["a", "b"]) is builder
