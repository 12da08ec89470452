"""
Default context manager

Children start with a snapshot of the parent's context. Later changes on
either side are not seen by the other.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from loglayer.context.base_context_manager import (
    BaseContextManager,
    ContextKeys,
    normalize_keys,
)

if TYPE_CHECKING:
    from loglayer.core.params import ChildLoggerCreatedParams


class DefaultContextManager(BaseContextManager):
    """Simple key/value store for context data."""

    def __init__(self):
        self._context: Dict[str, Any] = {}

    def set_context(self, context: Optional[Dict[str, Any]] = None) -> None:
        self._context = dict(context) if context else {}

    def append_context(self, context: Dict[str, Any]) -> None:
        self._context.update(context)

    def get_context(self) -> Dict[str, Any]:
        return dict(self._context)

    def has_context_data(self) -> bool:
        return bool(self._context)

    def clear_context(self, keys: ContextKeys = None) -> None:
        key_list = normalize_keys(keys)
        if key_list is None:
            self._context = {}
            return

        for key in key_list:
            self._context.pop(key, None)

    def on_child_logger_created(self, params: "ChildLoggerCreatedParams") -> None:
        """Copy the parent's context into the child's manager."""
        if params.parent_context_manager.has_context_data():
            params.child_context_manager.set_context(
                params.parent_context_manager.get_context()
            )

    def clone(self) -> "DefaultContextManager":
        clone = DefaultContextManager()
        clone._context = dict(self._context)
        return clone

    def __repr__(self) -> str:
        return f"DefaultContextManager(keys={list(self._context.keys())})"
