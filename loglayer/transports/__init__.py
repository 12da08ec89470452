"""Transports module - Adapters that ship entries to logging backends"""

from loglayer.transports.base_transport import BaseTransport, LoggerlessTransport
from loglayer.transports.blank_transport import BlankTransport
from loglayer.transports.console_transport import ConsoleTransport
from loglayer.transports.logging_transport import LoggingTransport
from loglayer.transports.structured_transport import StructuredTransport
from loglayer.transports.capture_transport import (
    CapturedLine,
    MockTransport,
    TestLoggingLibrary,
    TestTransport,
)

__all__ = [
    "BaseTransport",
    "LoggerlessTransport",
    "BlankTransport",
    "ConsoleTransport",
    "LoggingTransport",
    "StructuredTransport",
    "CapturedLine",
    "MockTransport",
    "TestLoggingLibrary",
    "TestTransport",
]
