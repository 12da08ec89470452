"""Shared fixtures for LogLayer tests"""

import pytest

from loglayer import LogLayer, LogLayerConfig
from loglayer.transports import TestLoggingLibrary, TestTransport


@pytest.fixture
def library():
    """Capturing backend."""
    return TestLoggingLibrary()


@pytest.fixture
def transport(library):
    return TestTransport(logger=library, id="test")


@pytest.fixture
def reported():
    """Errors handed to on_error."""
    return []


@pytest.fixture
def log(transport, reported):
    return LogLayer(LogLayerConfig(transport=transport, on_error=reported.append))
