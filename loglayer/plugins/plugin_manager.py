"""
Plugin manager and per-call pipeline

The manager is the ordered plugin registry. A PluginPipeline is a snapshot of
the enabled plugins taken at the start of one log call; it runs each hook
type over that snapshot in registration order.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from loglayer.core.errors import ConfigurationError, LogLayerError, PluginHookError
from loglayer.core.log_level import LogLevel
from loglayer.core.params import (
    ChildLoggerCreatedParams,
    DataOutParams,
    MessageOutParams,
    ShouldSendParams,
    TransformLevelParams,
)

if TYPE_CHECKING:
    from loglayer.core.log_layer import LogLayer


ErrorReporter = Callable[[LogLayerError], None]


class PluginManager:
    """
    Ordered plugin registry.

    Registration order is execution order. Ids are unique; registering a
    duplicate id raises ConfigurationError instead of replacing.

    Thread Safety:
        Registry mutation is single-writer and must happen before loggers
        sharing this manager start logging. Running pipelines only reads.
    """

    def __init__(self, plugins: Optional[Iterable[Any]] = None):
        self._plugins: Dict[str, Any] = {}
        if plugins:
            self.add_plugins(plugins)

    def add_plugins(self, plugins: Iterable[Any]) -> None:
        """
        Register plugins after the existing ones.

        Args:
            plugins: Plugin instances

        Raises:
            ConfigurationError: If a plugin id is already registered
        """
        plugins = list(plugins)
        pending: Dict[str, Any] = {}

        for plugin in plugins:
            if not getattr(plugin, "id", None):
                plugin.id = uuid.uuid4().hex
            if not hasattr(plugin, "disabled"):
                plugin.disabled = False

            if plugin.id in self._plugins or plugin.id in pending:
                raise ConfigurationError(f"Plugin with id '{plugin.id}' already exists")
            pending[plugin.id] = plugin

        self._plugins.update(pending)

    def remove_plugin(self, plugin_id: str) -> bool:
        """
        Remove a plugin by id.

        Returns:
            True if the plugin was removed, False if not found
        """
        return self._plugins.pop(plugin_id, None) is not None

    def enable_plugin(self, plugin_id: str) -> None:
        plugin = self._plugins.get(plugin_id)
        if plugin is not None:
            plugin.disabled = False

    def disable_plugin(self, plugin_id: str) -> None:
        plugin = self._plugins.get(plugin_id)
        if plugin is not None:
            plugin.disabled = True

    def get_plugin(self, plugin_id: str) -> Optional[Any]:
        return self._plugins.get(plugin_id)

    def get_plugins(self) -> List[Any]:
        """All registered plugins in registration order."""
        return list(self._plugins.values())

    def count_plugins(self, hook: Optional[str] = None) -> int:
        """
        Count registered plugins.

        Args:
            hook: If given, count only enabled plugins defining this hook
        """
        if hook is None:
            return len(self._plugins)
        return sum(
            1 for plugin in self._plugins.values()
            if not plugin.disabled and callable(getattr(plugin, hook, None))
        )

    def has_plugins(self, hook: Optional[str] = None) -> bool:
        return self.count_plugins(hook) > 0

    def pipeline(self, loglayer: "LogLayer", report: ErrorReporter) -> "PluginPipeline":
        """
        Snapshot the enabled plugins for one log call.

        Each plugin's disabled flag is read here, once per call.
        """
        active = [plugin for plugin in self._plugins.values() if not plugin.disabled]
        return PluginPipeline(active, loglayer, report)

    def notify_child_logger_created(
        self,
        params: ChildLoggerCreatedParams,
        report: ErrorReporter,
    ) -> None:
        """Call on_child_logger_created on every registered plugin."""
        for plugin in self.get_plugins():
            hook = getattr(plugin, "on_child_logger_created", None)
            if not callable(hook):
                continue
            try:
                hook(params)
            except Exception as e:
                report(PluginHookError(plugin.id, "on_child_logger_created", e))

    def __len__(self) -> int:
        return len(self._plugins)

    def __repr__(self) -> str:
        return f"PluginManager(plugins={list(self._plugins.keys())})"


class PluginPipeline:
    """
    Runs plugin hooks for a single log call.

    Transform hooks are chained: each plugin receives the previous plugin's
    output. A hook that raises is reported and its contribution skipped; the
    chain continues with the prior value.
    """

    def __init__(self, plugins: List[Any], loglayer: "LogLayer", report: ErrorReporter):
        self._plugins = plugins
        self._loglayer = loglayer
        self._report = report

    def _hooks(self, name: str) -> List[Tuple[str, Callable]]:
        hooks = []
        for plugin in self._plugins:
            fn = getattr(plugin, name, None)
            if callable(fn):
                hooks.append((plugin.id, fn))
        return hooks

    def _call(self, plugin_id: str, name: str, fn: Callable, *args) -> Tuple[bool, Any]:
        try:
            return True, fn(*args)
        except Exception as e:
            self._report(PluginHookError(plugin_id, name, e))
            return False, None

    def _check_type(self, plugin_id: str, name: str, result: Any, expected, label: str) -> bool:
        if isinstance(result, expected):
            return True
        self._report(
            PluginHookError(
                plugin_id,
                name,
                TypeError(f"{name} must return {label} or None, got {type(result).__name__}"),
            )
        )
        return False

    def _run_record_hook(
        self, name: str, record: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        data = dict(record)
        for plugin_id, fn in self._hooks(name):
            ok, result = self._call(plugin_id, name, fn, data, self._loglayer)
            if not ok:
                continue
            if result is None:
                return None
            if self._check_type(plugin_id, name, result, Mapping, "a mapping"):
                data = dict(result)
        return data

    def on_context_called(self, context: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Run on_context_called.

        Returns:
            Transformed context, or None if a plugin dropped it
        """
        return self._run_record_hook("on_context_called", context)

    def on_metadata_called(self, metadata: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Run on_metadata_called.

        Returns:
            Transformed metadata, or None if a plugin dropped it
        """
        return self._run_record_hook("on_metadata_called", metadata)

    def should_send_to_logger(self, params: ShouldSendParams) -> bool:
        """
        AND-reduce should_send_to_logger, stopping at the first False.

        A hook that raises does not veto.
        """
        for plugin_id, fn in self._hooks("should_send_to_logger"):
            ok, result = self._call(plugin_id, "should_send_to_logger", fn, params, self._loglayer)
            if ok and not result:
                return False
        return True

    def on_before_message_out(self, params: MessageOutParams) -> List[Any]:
        messages = list(params.messages)
        for plugin_id, fn in self._hooks("on_before_message_out"):
            ok, result = self._call(
                plugin_id,
                "on_before_message_out",
                fn,
                MessageOutParams(level=params.level, messages=messages),
                self._loglayer,
            )
            if not ok or result is None:
                continue
            if self._check_type(
                plugin_id, "on_before_message_out", result, (list, tuple), "a list"
            ):
                messages = list(result)
        return messages

    def on_before_data_out(self, params: DataOutParams) -> Optional[Dict[str, Any]]:
        """
        Run on_before_data_out.

        Each result is merged over the current data, so later plugins win
        on conflicting keys.
        """
        data = dict(params.data) if params.data is not None else None
        for plugin_id, fn in self._hooks("on_before_data_out"):
            ok, result = self._call(
                plugin_id,
                "on_before_data_out",
                fn,
                DataOutParams(
                    level=params.level,
                    data=data,
                    error=params.error,
                    metadata=params.metadata,
                    context=params.context,
                ),
                self._loglayer,
            )
            if not ok or result is None:
                continue
            if not self._check_type(plugin_id, "on_before_data_out", result, Mapping, "a mapping"):
                continue
            if result:
                if data is None:
                    data = {}
                data.update(result)
        return data

    def transform_log_level(self, params: TransformLevelParams) -> LogLevel:
        level = params.level
        for plugin_id, fn in self._hooks("transform_log_level"):
            ok, result = self._call(
                plugin_id,
                "transform_log_level",
                fn,
                TransformLevelParams(
                    level=level,
                    messages=list(params.messages),
                    data=params.data,
                    error=params.error,
                    metadata=params.metadata,
                    context=params.context,
                ),
                self._loglayer,
            )
            if not ok or result is None:
                continue
            try:
                level = LogLevel.coerce(result)
            except ValueError as e:
                self._report(PluginHookError(plugin_id, "transform_log_level", e))
        return level
