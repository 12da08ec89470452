"""
Base plugin

A plugin intercepts log calls through optional hook methods. Define only the
hooks you need; the plugin manager skips plugins that lack a hook.

Hooks (each also receives the calling LogLayer):
    on_context_called(context, loglayer) -> dict or None
    on_metadata_called(metadata, loglayer) -> dict or None
    should_send_to_logger(params, loglayer) -> bool
    on_before_message_out(params, loglayer) -> list
    on_before_data_out(params, loglayer) -> dict or None
    transform_log_level(params, loglayer) -> LogLevel, level name or None
    on_child_logger_created(params) -> None
"""

from typing import Optional, Tuple


HOOK_NAMES: Tuple[str, ...] = (
    "on_context_called",
    "on_metadata_called",
    "should_send_to_logger",
    "on_before_message_out",
    "on_before_data_out",
    "transform_log_level",
    "on_child_logger_created",
)


class BasePlugin:
    """
    Base class for plugins.

    Example:
        class RedactPasswords(BasePlugin):
            def on_metadata_called(self, metadata, loglayer):
                if "password" in metadata:
                    metadata["password"] = "[REDACTED]"
                return metadata

        log = LogLayer(LogLayerConfig(
            transport=ConsoleTransport(),
            plugins=[RedactPasswords(id="redact")],
        ))
    """

    def __init__(self, id: Optional[str] = None, disabled: bool = False):
        """
        Initialize plugin.

        Args:
            id: Unique id within one LogLayer; generated when omitted
            disabled: If True, the plugin is skipped at every hook site
        """
        self.id = id
        self.disabled = disabled

    def has_hook(self, hook: str) -> bool:
        return callable(getattr(self, hook, None))

    def __repr__(self) -> str:
        hooks = [name for name in HOOK_NAMES if self.has_hook(name)]
        return f"{type(self).__name__}(id={self.id!r}, disabled={self.disabled}, hooks={hooks})"
