"""
Base context manager interface

A context manager owns the key/value context attached to every log call
made through one LogLayer instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Union

if TYPE_CHECKING:
    from loglayer.core.params import ChildLoggerCreatedParams


ContextKeys = Optional[Union[str, Iterable[str]]]


def normalize_keys(keys: ContextKeys) -> Optional[List[str]]:
    """Turn a key or an iterable of keys into a list; None stays None."""
    if keys is None:
        return None
    if isinstance(keys, str):
        return [keys]
    return list(keys)


class BaseContextManager(ABC):
    """Abstract base class for context managers."""

    @abstractmethod
    def set_context(self, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Replace the context. None clears it.

        Args:
            context: New context mapping
        """
        pass

    @abstractmethod
    def append_context(self, context: Dict[str, Any]) -> None:
        """Shallow-merge context over the existing keys."""
        pass

    @abstractmethod
    def get_context(self) -> Dict[str, Any]:
        """
        Return the context.

        Returns:
            A copy; mutating it never changes the manager's state
        """
        pass

    @abstractmethod
    def has_context_data(self) -> bool:
        pass

    @abstractmethod
    def clear_context(self, keys: ContextKeys = None) -> None:
        """
        Remove context keys.

        Args:
            keys: A key or list of keys to remove; None removes everything
        """
        pass

    @abstractmethod
    def on_child_logger_created(self, params: "ChildLoggerCreatedParams") -> None:
        """
        Called on the parent's manager after a child logger was created.

        Args:
            params: Parent and child loggers and their managers
        """
        pass

    @abstractmethod
    def clone(self) -> "BaseContextManager":
        """Create the manager instance handed to a new child logger."""
        pass
