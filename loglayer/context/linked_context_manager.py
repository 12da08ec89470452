"""
Context manager shared between a parent and its children

Every logger in a linked family reads and writes one store, so a change made
through any of them is seen by all. Unlike the other managers this one is
shared across loggers: callers driving linked loggers from several threads
must serialize context mutation themselves.
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


class LinkedContextManager(BaseContextManager):
    """Bi-directionally linked context store."""

    def __init__(self, store: Optional[Dict[str, Any]] = None):
        self._store: Dict[str, Any] = store if store is not None else {}

    def set_context(self, context: Optional[Dict[str, Any]] = None) -> None:
        # Mutate in place; rebinding would break the link
        self._store.clear()
        if context:
            self._store.update(context)

    def append_context(self, context: Dict[str, Any]) -> None:
        self._store.update(context)

    def get_context(self) -> Dict[str, Any]:
        return dict(self._store)

    def has_context_data(self) -> bool:
        return bool(self._store)

    def clear_context(self, keys: ContextKeys = None) -> None:
        key_list = normalize_keys(keys)
        if key_list is None:
            self._store.clear()
            return

        for key in key_list:
            self._store.pop(key, None)

    def on_child_logger_created(self, params: "ChildLoggerCreatedParams") -> None:
        """Link a linked child to this store; copy into any other manager."""
        child = params.child_context_manager
        if isinstance(child, LinkedContextManager):
            child._store = self._store
        elif self.has_context_data():
            child.set_context(self.get_context())

    def clone(self) -> "LinkedContextManager":
        return LinkedContextManager(self._store)

    def __repr__(self) -> str:
        return f"LinkedContextManager(keys={list(self._store.keys())})"
