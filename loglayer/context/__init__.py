"""
Context managers module

Provides the persistent key/value context store used by LogLayer and the
inheritance policies applied when child loggers are created.
"""

from loglayer.context.base_context_manager import BaseContextManager
from loglayer.context.default_context_manager import DefaultContextManager
from loglayer.context.isolated_context_manager import IsolatedContextManager
from loglayer.context.linked_context_manager import LinkedContextManager
from loglayer.context.mock_context_manager import MockContextManager

__all__ = [
    "BaseContextManager",
    "DefaultContextManager",
    "IsolatedContextManager",
    "LinkedContextManager",
    "MockContextManager",
]
