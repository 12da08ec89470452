"""
Callback-based plugin

Builds a plugin from plain functions
"""

from typing import Callable, Optional

from loglayer.plugins.base_plugin import HOOK_NAMES, BasePlugin


class CallbackPlugin(BasePlugin):
    """
    Plugin whose hooks are the callables passed to the constructor.

    Only the hooks that are given exist on the instance, so the plugin
    manager does not schedule the others.
    """

    def __init__(
        self,
        id: Optional[str] = None,
        disabled: bool = False,
        **hooks: Callable,
    ):
        """
        Initialize callback plugin.

        Args:
            id: Unique plugin id
            disabled: Skip the plugin when True
            hooks: Hook name to callable, e.g. on_metadata_called=fn

        Raises:
            TypeError: If a hook name is unknown or its value is not callable

        Example:
            # Drop every debug message that mentions "healthcheck"
            def skip_healthchecks(params, loglayer):
                return not any("healthcheck" in str(m) for m in params.messages)

            plugin = CallbackPlugin(
                id="no-healthchecks",
                should_send_to_logger=skip_healthchecks,
            )
        """
        super().__init__(id=id, disabled=disabled)

        for name, fn in hooks.items():
            if name not in HOOK_NAMES:
                raise TypeError(f"Unknown plugin hook: {name}")
            if not callable(fn):
                raise TypeError(f"{name} must be callable")
            setattr(self, name, fn)
