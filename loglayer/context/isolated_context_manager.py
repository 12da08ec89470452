"""Context manager whose children start with no context"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loglayer.context.default_context_manager import DefaultContextManager

if TYPE_CHECKING:
    from loglayer.core.params import ChildLoggerCreatedParams


class IsolatedContextManager(DefaultContextManager):
    """
    Keeps context private to each logger instance.

    A child logger never inherits the parent's context.
    """

    def on_child_logger_created(self, params: "ChildLoggerCreatedParams") -> None:
        pass

    def clone(self) -> "IsolatedContextManager":
        return IsolatedContextManager()

    def __repr__(self) -> str:
        return f"IsolatedContextManager(keys={list(self._context.keys())})"
