"""No-op context manager for unit tests"""

from typing import Any, Dict, Optional

from loglayer.context.base_context_manager import BaseContextManager, ContextKeys


class MockContextManager(BaseContextManager):
    """Ignores every mutation and always reports an empty context."""

    def set_context(self, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def append_context(self, context: Dict[str, Any]) -> None:
        pass

    def get_context(self) -> Dict[str, Any]:
        return {}

    def has_context_data(self) -> bool:
        return False

    def clear_context(self, keys: ContextKeys = None) -> None:
        pass

    def on_child_logger_created(self, params) -> None:
        pass

    def clone(self) -> "MockContextManager":
        return MockContextManager()
