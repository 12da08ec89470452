"""Tests for transports"""

import io
import json
import logging

import pytest
from unittest.mock import Mock

from loglayer import LogEntry, LogLayer, LogLayerConfig, LogLevel
from loglayer.transports import (
    BlankTransport,
    ConsoleTransport,
    LoggingTransport,
    MockTransport,
    StructuredTransport,
    TestLoggingLibrary,
    TestTransport,
)


def make_entry(level=LogLevel.INFO, messages=None, data=None, error=None):
    return LogEntry(
        level=level,
        messages=list(messages or ["hello"]),
        data=data,
        has_data=data is not None,
        error=error,
    )


class TestBaseTransport:
    """Test shared transport behavior."""

    def test_generated_id(self):
        assert TestTransport().id != TestTransport().id

    def test_level_filter(self):
        transport = TestTransport(level="warn")
        assert not transport.is_level_enabled(LogLevel.INFO)
        assert transport.is_level_enabled(LogLevel.ERROR)

        transport.enabled = False
        assert not transport.is_level_enabled(LogLevel.FATAL)

    def test_send_to_disabled_transport(self):
        transport = TestTransport(enabled=False)
        assert transport.send_to_logger(make_entry()) is None
        assert len(transport.logger) == 0

    def test_console_debug_echo(self, capsys):
        transport = BlankTransport(lambda entry: entry.messages, console_debug=True)
        transport.send_to_logger(make_entry(messages=["echoed"]))

        assert "[info] echoed" in capsys.readouterr().err

    def test_entry_copy_per_transport(self):
        def mutate(entry):
            entry.messages.append("mutated")
            return entry.messages

        second = TestTransport()
        log = LogLayer(LogLayerConfig(transport=[BlankTransport(mutate), second]))
        log.info("original")

        assert second.logger.get_last_line().messages == ["original"]

    def test_data_copy_per_transport(self):
        def mutate(entry):
            entry.data["added"] = True
            del entry.data["k"]
            return entry.messages

        second = TestTransport()
        log = LogLayer(LogLayerConfig(transport=[BlankTransport(mutate), second]))
        log.with_metadata({"k": 1}).info("original")

        assert second.logger.get_last_line().data[0] == {"k": 1}


class TestConsoleTransport:
    """Test console transport."""

    def test_writes_line(self):
        stream = io.StringIO()
        transport = ConsoleTransport(stream=stream, colored=False, show_timestamp=False)

        shipped = transport.send_to_logger(make_entry(messages=["hello", 3], data={"k": 1}))

        assert stream.getvalue() == '[INFO ] {"k": 1} hello 3\n'
        assert shipped == [{"k": 1}, "hello", 3]

    def test_append_object_data(self):
        stream = io.StringIO()
        transport = ConsoleTransport(
            stream=stream, colored=False, show_timestamp=False, append_object_data=True
        )
        transport.send_to_logger(make_entry(data={"k": 1}))

        assert stream.getvalue() == '[INFO ] hello {"k": 1}\n'

    def test_colored(self):
        stream = io.StringIO()
        transport = ConsoleTransport(stream=stream, show_timestamp=False)
        transport.send_to_logger(make_entry(level=LogLevel.ERROR))

        output = stream.getvalue()
        assert output.startswith(LogLevel.ERROR.color_code)
        assert output.rstrip("\n").endswith(LogLevel.ERROR.reset_code)


class TestStructuredTransport:
    """Test structured transport."""

    def test_json_line(self):
        stream = io.StringIO()
        transport = StructuredTransport(stream=stream, date_fn=lambda: "now")

        transport.send_to_logger(make_entry(messages=["a", "b"], data={"user": 1}))

        assert json.loads(stream.getvalue()) == {
            "level": "info",
            "time": "now",
            "msg": "a b",
            "user": 1,
        }

    def test_custom_fields(self):
        stream = io.StringIO()
        transport = StructuredTransport(
            stream=stream,
            level_field="severity",
            level_fn=int,
            message_field="message",
            date_field="ts",
            date_fn=lambda: 0,
        )

        shipped = transport.send_to_logger(make_entry(level=LogLevel.WARN))

        assert shipped == [{"severity": 40, "ts": 0, "message": "hello"}]

    def test_through_loglayer(self):
        stream = io.StringIO()
        log = LogLayer(LogLayerConfig(transport=StructuredTransport(stream=stream)))
        log.with_context({"service": "api"})
        log.with_error(ValueError("x")).error("failed")

        record = json.loads(stream.getvalue())
        assert record["service"] == "api"
        assert record["err"]["type"] == "ValueError"
        assert record["msg"] == "failed"

    def test_stringify_false_writes_dict(self):
        sink = Mock(spec=["write"])
        transport = StructuredTransport(stream=sink, stringify=False, date_fn=lambda: "now")

        transport.send_to_logger(make_entry(messages=["a"], data={"user": 1}))
        transport.flush()

        sink.write.assert_called_once_with(
            {"level": "info", "time": "now", "msg": "a", "user": 1}
        )


class TestLoggingTransport:
    """Test standard library logging transport."""

    def test_forwards_to_logger(self, caplog):
        logger = logging.getLogger("loglayer.test")
        transport = LoggingTransport(logger=logger)

        with caplog.at_level(logging.DEBUG, logger="loglayer.test"):
            shipped = transport.send_to_logger(
                make_entry(level=LogLevel.WARN, messages=["disk", "low"], data={"free": 3})
            )

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "disk low"
        assert record.loglayer_data == {"free": 3}
        assert shipped == ["disk low", {"free": 3}]

    def test_fatal_maps_to_critical(self, caplog):
        logger = logging.getLogger("loglayer.test")
        transport = LoggingTransport(logger=logger)

        with caplog.at_level(logging.DEBUG, logger="loglayer.test"):
            transport.send_to_logger(make_entry(level=LogLevel.FATAL))

        assert caplog.records[-1].levelno == logging.CRITICAL

    def test_exc_info(self, caplog):
        logger = logging.getLogger("loglayer.test")
        transport = LoggingTransport(logger=logger)

        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            with caplog.at_level(logging.DEBUG, logger="loglayer.test"):
                transport.send_to_logger(make_entry(level=LogLevel.ERROR, error=e))

        assert caplog.records[-1].exc_info[1].args == ("boom",)


class TestBlankTransport:
    """Test callable-based transport."""

    def test_ships_through_function(self):
        received = []

        def ship(entry):
            received.append(entry)
            return entry.messages

        log = LogLayer(LogLayerConfig(transport=BlankTransport(ship)))
        log.with_metadata({"a": 1}).info("x")

        assert received[0].data == {"a": 1}
        assert received[0].messages == ["x"]

    def test_requires_callable(self):
        with pytest.raises(TypeError):
            BlankTransport("not callable")


class TestTestTransport:
    """Test capture transport."""

    def test_captures_lines(self):
        library = TestLoggingLibrary()
        transport = TestTransport(logger=library)
        transport.send_to_logger(make_entry(messages=["x"], data={"k": 1}))

        line = library.get_last_line()
        assert line.level == LogLevel.INFO
        assert line.data == [{"k": 1}, "x"]
        assert line.messages == ["x"]

    def test_pop_and_clear(self):
        library = TestLoggingLibrary()
        library.info("a")
        library.error("b")

        assert library.pop_line().messages == ["b"]
        assert len(library) == 1

        library.clear_lines()
        assert library.pop_line() is None
        assert library.get_last_line() is None

    def test_get_logger_instance(self):
        library = TestLoggingLibrary()
        assert TestTransport(logger=library).get_logger_instance() is library


class TestMockTransport:
    """Test discarding transport."""

    def test_discards(self):
        transport = MockTransport(id="mock")
        assert transport.send_to_logger(make_entry()) == ["hello"]
        assert transport.get_logger_instance() is None
