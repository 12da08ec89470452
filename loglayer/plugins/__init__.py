"""
Plugins module

Provides the plugin base class, a callback-built plugin and the ordered
plugin registry that runs hooks for each log call.
"""

from loglayer.plugins.base_plugin import HOOK_NAMES, BasePlugin
from loglayer.plugins.callback_plugin import CallbackPlugin
from loglayer.plugins.plugin_manager import PluginManager, PluginPipeline

__all__ = [
    "HOOK_NAMES",
    "BasePlugin",
    "CallbackPlugin",
    "PluginManager",
    "PluginPipeline",
]
