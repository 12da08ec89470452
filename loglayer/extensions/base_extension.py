"""
Base extension interface

An extension adds methods to LogLayer and LogBuilder instances by
delegation, and may contribute plugins. Extensions are listed in
LogLayerConfig.extensions and consulted when each logger is constructed.
"""

from typing import Any, Callable, Dict, List


class LogLayerExtension:
    """
    Base class for extensions.

    Method functions take the target (a LogLayer or a LogBuilder) as their
    first argument; the target is bound when the method is looked up.

    Example:
        class AuditExtension(LogLayerExtension):
            name = "audit"

            def logger_methods(self):
                return {"audit": lambda log, action: log.with_metadata(
                    {"audit": True, "action": action}).info(action)}

        log = LogLayer(LogLayerConfig(transport=..., extensions=[AuditExtension()]))
        log.audit("user.login")
    """

    name: str = ""

    def logger_methods(self) -> Dict[str, Callable[..., Any]]:
        """Methods added to LogLayer instances."""
        return {}

    def builder_methods(self) -> Dict[str, Callable[..., Any]]:
        """Methods added to LogBuilder instances."""
        return {}

    def plugins(self) -> List[Any]:
        """Plugins registered with every new root logger."""
        return []

    def on_construct(self, loglayer: Any) -> None:
        """Called at the end of every LogLayer construction, children included."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
