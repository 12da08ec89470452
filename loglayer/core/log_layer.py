"""
LogLayer orchestrator

The facade applications log through. It gates calls by level, assembles
context, metadata and error data, runs the plugin pipeline and hands the
resulting entry to every transport.
"""

from __future__ import annotations

import functools
import sys
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from loglayer.context.base_context_manager import BaseContextManager, ContextKeys
from loglayer.context.default_context_manager import DefaultContextManager
from loglayer.core.errors import (
    ConfigurationError,
    LazyEvaluationError,
    LogLayerError,
    SerializationError,
    TransportError,
)
from loglayer.core.groups import GroupRouter, LogGroupConfig, merge_groups, to_group_list
from loglayer.core.lazy import resolve_lazy_values
from loglayer.core.log_builder import LogBuilder
from loglayer.core.log_entry import LogEntry, RawLogEntry
from loglayer.core.log_layer_config import LogLayerConfig
from loglayer.core.log_level import LevelLike, LogLevel, to_log_level
from loglayer.core.params import (
    ChildLoggerCreatedParams,
    DataOutParams,
    MessageOutParams,
    ShouldSendParams,
    TransformLevelParams,
)
from loglayer.core.serializers import fallback_serialize_error
from loglayer.extensions.extension_registry import ExtensionRegistry
from loglayer.levels.base_log_level_manager import BaseLogLevelManager
from loglayer.levels.default_log_level_manager import DefaultLogLevelManager
from loglayer.plugins.plugin_manager import PluginManager
from loglayer.transports.base_transport import BaseTransport


TransportArg = Union[BaseTransport, Iterable[BaseTransport]]


class LogLayer:
    """
    Logging facade dispatching to one or more transports.

    Features:
    - Persistent context and per-call metadata
    - Error serialization under a configurable field
    - Plugin pipeline for filtering and transforming entries
    - Child loggers with inherited context and level state
    - Group routing of tagged entries to selected transports

    Example:
        log = LogLayer(LogLayerConfig(transport=ConsoleTransport()))
        log.with_context({"request_id": "abc"})
        log.with_metadata({"user_id": 42}).info("User logged in")

    Thread Safety:
        Logging is safe from multiple threads as long as transports are.
        Registry and context mutation is single-writer.
    """

    def __init__(
        self,
        config: LogLayerConfig,
        context_manager: Optional[BaseContextManager] = None,
        log_level_manager: Optional[BaseLogLevelManager] = None,
        plugin_manager: Optional[PluginManager] = None,
        group_router: Optional[GroupRouter] = None,
    ):
        """
        Initialize LogLayer.

        Args:
            config: Logger configuration
            context_manager: Context manager (DefaultContextManager if None)
            log_level_manager: Level manager built from config.level and
                               config.enabled if None
            plugin_manager: Shared plugin manager; when None a new one is
                            created from config.plugins and extension plugins
            group_router: Shared group router; when None one is built from
                          config.groups and the LOGLAYER_GROUPS variable
        """
        if not isinstance(config, LogLayerConfig):
            raise ConfigurationError("config must be a LogLayerConfig instance")

        self._config = config
        self._context_manager = context_manager or DefaultContextManager()

        if log_level_manager is None:
            log_level_manager = DefaultLogLevelManager(config.level)
            if not config.enabled:
                log_level_manager.disable_logging()
        self._log_level_manager = log_level_manager

        self._extensions = ExtensionRegistry(
            config.extensions,
            reserved_logger_names=dir(type(self)),
            reserved_builder_names=dir(LogBuilder),
        )

        if plugin_manager is None:
            plugin_manager = PluginManager(list(config.plugins) + self._extensions.plugins())
        self._plugin_manager = plugin_manager

        if group_router is None:
            group_router = GroupRouter(
                config.groups,
                active_groups=config.active_groups,
                ungrouped_behavior=config.ungrouped_behavior,
            )
            group_router.apply_env()
        self._group_router = group_router
        self._assigned_groups: Optional[List[str]] = None

        for extension in self._extensions.get_extensions():
            extension.on_construct(self)

    # ------------------------------------------------------------------
    # Diagnostics

    def report_error(self, error: LogLayerError) -> None:
        """
        Report an error raised on the logging path.

        Goes to config.on_error when set, otherwise to stderr when
        console_debug is on.
        """
        on_error = self._config.on_error
        if on_error is not None:
            try:
                on_error(error)
            except Exception as callback_error:
                self._console_debug(f"on_error callback raised: {callback_error!r}")
            return

        if self._config.console_debug:
            print(f"[LogLayer] {error}", file=sys.stderr)

    def _console_debug(self, message: str) -> None:
        if self._config.console_debug:
            print(f"[LogLayer] {message}", file=sys.stderr)

    # ------------------------------------------------------------------
    # Context

    def with_context(self, context: Optional[Dict[str, Any]] = None) -> "LogLayer":
        """
        Merge keys into the persistent context.

        None or an empty mapping is ignored.
        """
        if not context:
            self._console_debug("with_context was called with no context; dropping.")
            return self

        self._context_manager.append_context(context)
        return self

    def get_context(self, raw: bool = False) -> Dict[str, Any]:
        """
        Return a copy of the persistent context.

        Args:
            raw: If True, lazy values are returned unresolved

        Returns:
            Context mapping
        """
        context = self._context_manager.get_context()
        if raw:
            return context
        resolved, failures = resolve_lazy_values(context)
        self._report_lazy_failures(failures, "context")
        return resolved

    def clear_context(self, keys: ContextKeys = None) -> "LogLayer":
        """Remove the given key(s), or the whole context when keys is None."""
        self._context_manager.clear_context(keys)
        return self

    def mute_context(self) -> "LogLayer":
        """Stop including context in log entries."""
        self._config.mute_context = True
        return self

    def unmute_context(self) -> "LogLayer":
        self._config.mute_context = False
        return self

    def mute_metadata(self) -> "LogLayer":
        """Stop including metadata in log entries."""
        self._config.mute_metadata = True
        return self

    def unmute_metadata(self) -> "LogLayer":
        self._config.mute_metadata = False
        return self

    # ------------------------------------------------------------------
    # Builders

    def with_metadata(self, metadata: Optional[Dict[str, Any]] = None) -> LogBuilder:
        """Start a log call carrying metadata."""
        return LogBuilder(self).with_metadata(metadata)

    def with_error(self, error: Any) -> LogBuilder:
        """Start a log call carrying an error."""
        return LogBuilder(self).with_error(error)

    # ------------------------------------------------------------------
    # Levels

    def enable_logging(self) -> "LogLayer":
        """Turn the master switch on; per-level flags are unchanged."""
        self._log_level_manager.enable_logging()
        return self

    def disable_logging(self) -> "LogLayer":
        """Turn the master switch off; per-level flags are unchanged."""
        self._log_level_manager.disable_logging()
        return self

    def set_level(self, level: LevelLike) -> "LogLayer":
        """Enable level and every higher level; disable lower ones."""
        self._log_level_manager.set_level(level)
        return self

    def enable_individual_level(self, level: LevelLike) -> "LogLayer":
        self._log_level_manager.enable_individual_level(level)
        return self

    def disable_individual_level(self, level: LevelLike) -> "LogLayer":
        self._log_level_manager.disable_individual_level(level)
        return self

    def is_level_enabled(self, level: LevelLike) -> bool:
        return self._log_level_manager.is_level_enabled(level)

    # ------------------------------------------------------------------
    # Child loggers

    def child(self) -> "LogLayer":
        """
        Create a child logger.

        The child shares this logger's transports and plugin manager and
        receives clones of its context and level managers. The parent's
        context manager, level manager and plugins are then notified.
        """
        child_config = self._config.copy()
        child = LogLayer(
            child_config,
            context_manager=self._context_manager.clone(),
            log_level_manager=self._log_level_manager.clone(),
            plugin_manager=self._plugin_manager,
            group_router=self._group_router,
        )
        child_config.transports = self._config.transports
        if self._assigned_groups is not None:
            child._assigned_groups = list(self._assigned_groups)

        params = ChildLoggerCreatedParams(
            parent_logger=self,
            child_logger=child,
            parent_context_manager=self._context_manager,
            child_context_manager=child._context_manager,
            parent_log_level_manager=self._log_level_manager,
            child_log_level_manager=child._log_level_manager,
        )
        self._context_manager.on_child_logger_created(params)
        self._log_level_manager.on_child_logger_created(params)
        self._plugin_manager.notify_child_logger_created(params, self.report_error)

        return child

    def with_prefix(self, prefix: str) -> "LogLayer":
        """Create a child logger that prefixes the first string message part."""
        child = self.child()
        child._config.prefix = prefix
        return child

    # ------------------------------------------------------------------
    # Groups

    def with_group(self, group: Union[str, Iterable[str]]) -> "LogLayer":
        """
        Create a child logger whose entries are tagged with the group(s).

        Tags accumulate: a child of a tagged logger keeps the parent's
        groups and adds its own.
        """
        child = self.child()
        child._assigned_groups = merge_groups(child._assigned_groups, to_group_list(group))
        return child

    def get_assigned_groups(self) -> List[str]:
        return list(self._assigned_groups or [])

    def add_group(self, name: str, config: Union[LogGroupConfig, Dict[str, Any]]) -> "LogLayer":
        """
        Define or replace a group at runtime.

        Group definitions are shared with parent and child loggers.

        Raises:
            ConfigurationError: If the group config is invalid
        """
        self._group_router.add_group(name, config)
        return self

    def remove_group(self, name: str) -> "LogLayer":
        self._group_router.remove_group(name)
        return self

    def enable_group(self, name: str) -> "LogLayer":
        self._group_router.enable_group(name)
        return self

    def disable_group(self, name: str) -> "LogLayer":
        self._group_router.disable_group(name)
        return self

    def set_group_level(self, name: str, level: LevelLike) -> "LogLayer":
        self._group_router.set_group_level(name, level)
        return self

    def set_active_groups(self, names: Optional[Iterable[str]]) -> "LogLayer":
        """Route only through the named groups; None clears the filter."""
        self._group_router.set_active_groups(names)
        return self

    def get_groups(self) -> Dict[str, LogGroupConfig]:
        """Snapshot of the group definitions."""
        return self._group_router.get_groups()

    # ------------------------------------------------------------------
    # Plugins

    def add_plugins(self, plugins: Iterable[Any]) -> "LogLayer":
        """
        Register plugins after the existing ones.

        The plugin manager is shared with children, so they see the change.

        Raises:
            ConfigurationError: If a plugin id is already registered
        """
        self._plugin_manager.add_plugins(plugins)
        return self

    def remove_plugin(self, plugin_id: str) -> "LogLayer":
        self._plugin_manager.remove_plugin(plugin_id)
        return self

    def enable_plugin(self, plugin_id: str) -> "LogLayer":
        self._plugin_manager.enable_plugin(plugin_id)
        return self

    def disable_plugin(self, plugin_id: str) -> "LogLayer":
        self._plugin_manager.disable_plugin(plugin_id)
        return self

    def with_fresh_plugins(self, plugins: Iterable[Any]) -> "LogLayer":
        """Replace this logger's plugin manager; existing children keep the old one."""
        self._plugin_manager = PluginManager(plugins)
        return self

    def get_plugin_manager(self) -> PluginManager:
        return self._plugin_manager

    # ------------------------------------------------------------------
    # Transports

    @staticmethod
    def _to_transport_list(transports: TransportArg) -> List[BaseTransport]:
        if isinstance(transports, BaseTransport):
            transports = [transports]
        transports = list(transports)

        seen = set()
        for transport in transports:
            if not isinstance(transport, BaseTransport):
                raise ConfigurationError(
                    f"transport must be a BaseTransport, got {type(transport).__name__}"
                )
            if transport.id in seen:
                raise ConfigurationError(f"Transport with id '{transport.id}' already exists")
            seen.add(transport.id)
        return transports

    def add_transport(self, transports: TransportArg) -> "LogLayer":
        """
        Add transports; an existing transport with the same id is replaced.

        Rebinds this logger's transport list, so children created earlier
        keep theirs.
        """
        new_transports = self._to_transport_list(transports)
        new_ids = {transport.id for transport in new_transports}

        kept = [t for t in self._config.transports if t.id not in new_ids]
        self._config.transports = kept + new_transports
        return self

    def remove_transport(self, transport_id: str) -> bool:
        """
        Remove a transport by id.

        Returns:
            True if the transport was removed, False if not found
        """
        remaining = [t for t in self._config.transports if t.id != transport_id]
        if len(remaining) == len(self._config.transports):
            return False

        self._config.transports = remaining
        return True

    def with_fresh_transports(self, transports: TransportArg) -> "LogLayer":
        """Replace all transports of this logger."""
        self._config.transports = self._to_transport_list(transports)
        return self

    def get_transports(self) -> List[BaseTransport]:
        return list(self._config.transports)

    def get_logger_instance(self, transport_id: str) -> Optional[Any]:
        """Return the backend wrapped by a transport, or None if not found."""
        for transport in self._config.transports:
            if transport.id == transport_id:
                return transport.get_logger_instance()
        return None

    def flush(self) -> None:
        """Flush every transport."""
        for transport in self._config.transports:
            try:
                transport.flush()
            except Exception as e:
                self.report_error(TransportError(transport.id, e))

    def close(self) -> None:
        """Close every transport."""
        for transport in self._config.transports:
            try:
                transport.close()
            except Exception as e:
                self.report_error(TransportError(transport.id, e))

    # ------------------------------------------------------------------
    # Collaborators

    def with_context_manager(self, context_manager: BaseContextManager) -> "LogLayer":
        self._context_manager = context_manager
        return self

    def get_context_manager(self) -> BaseContextManager:
        return self._context_manager

    def with_log_level_manager(self, log_level_manager: BaseLogLevelManager) -> "LogLayer":
        self._log_level_manager = log_level_manager
        return self

    def get_log_level_manager(self) -> BaseLogLevelManager:
        return self._log_level_manager

    def get_config(self) -> LogLayerConfig:
        return self._config

    def get_extension_registry(self) -> ExtensionRegistry:
        return self._extensions

    # ------------------------------------------------------------------
    # Logging

    def trace(self, *messages: Any) -> None:
        self._log(LogLevel.TRACE, messages)

    def debug(self, *messages: Any) -> None:
        self._log(LogLevel.DEBUG, messages)

    def info(self, *messages: Any) -> None:
        self._log(LogLevel.INFO, messages)

    def warn(self, *messages: Any) -> None:
        self._log(LogLevel.WARN, messages)

    def error(self, *messages: Any) -> None:
        self._log(LogLevel.ERROR, messages)

    def fatal(self, *messages: Any) -> None:
        self._log(LogLevel.FATAL, messages)

    def error_only(
        self,
        error: Any,
        level: LevelLike = LogLevel.ERROR,
        copy_msg: Optional[bool] = None,
    ) -> None:
        """
        Log an error with no message.

        Args:
            error: Error to serialize
            level: Level to log at
            copy_msg: Use str(error) as the message; defaults to
                      config.copy_msg_on_only_error
        """
        level = to_log_level(level)
        if not self.is_level_enabled(level):
            return

        if copy_msg is None:
            copy_msg = self._config.copy_msg_on_only_error

        messages: List[Any] = []
        if copy_msg and isinstance(error, BaseException) and str(error):
            messages.append(str(error))

        self._dispatch(level, messages, error=error)

    def metadata_only(
        self,
        metadata: Optional[Dict[str, Any]],
        level: LevelLike = LogLevel.INFO,
    ) -> None:
        """Log metadata with no message."""
        level = to_log_level(level)
        if not self.is_level_enabled(level):
            return

        if self._config.mute_metadata:
            return

        if not metadata:
            self._console_debug("metadata_only was called with no metadata; dropping.")
            return

        self._dispatch(level, [], metadata=metadata)

    def raw(self, entry: RawLogEntry) -> None:
        """
        Log a caller-assembled entry through the full pipeline.

        entry.context, when given, replaces the persistent context for this
        call only.
        """
        if not self.is_level_enabled(entry.level):
            return

        messages = list(entry.messages)
        self._format_messages(messages)
        self._dispatch(
            entry.level,
            messages,
            metadata=entry.metadata,
            error=entry.error,
            context=entry.context,
            groups=entry.groups,
        )

    def _log(
        self,
        level: LogLevel,
        messages: Sequence[Any],
        metadata: Optional[Dict[str, Any]] = None,
        error: Any = None,
        groups: Optional[List[str]] = None,
    ) -> None:
        if not self.is_level_enabled(level):
            return

        messages = list(messages)
        self._format_messages(messages)
        self._dispatch(level, messages, metadata=metadata, error=error, groups=groups)

    def _format_messages(self, messages: List[Any]) -> None:
        prefix = self._config.prefix
        if prefix and messages and isinstance(messages[0], str):
            messages[0] = f"{prefix} {messages[0]}"

    def _report_lazy_failures(self, failures, source: str) -> None:
        for key, exc in failures:
            self.report_error(LazyEvaluationError(key, source, exc))

    def _serialize_error(self, error: Any) -> Any:
        try:
            return self._config.error_serializer(error)
        except Exception as e:
            self.report_error(SerializationError(error, e))
            return fallback_serialize_error(error)

    def _assemble_data(
        self,
        context: Dict[str, Any],
        metadata: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        context_field = self._config.context_field_name
        metadata_field = self._config.metadata_field_name

        if context_field and context_field == metadata_field:
            merged = dict(context)
            merged.update(metadata or {})
            return {context_field: merged}

        data: Dict[str, Any] = {}
        if context_field:
            data[context_field] = dict(context)
        else:
            data.update(context)

        if metadata_field:
            data[metadata_field] = dict(metadata or {})
        elif metadata:
            data.update(metadata)

        return data

    def _dispatch(
        self,
        level: LogLevel,
        messages: List[Any],
        metadata: Optional[Dict[str, Any]] = None,
        error: Any = None,
        context: Optional[Dict[str, Any]] = None,
        groups: Optional[List[str]] = None,
    ) -> None:
        """
        Run the pipeline for a call that already passed the level gate.

        Args:
            level: Entry level
            messages: Formatted message parts
            metadata: Per-call metadata, or None
            error: Error to serialize, or None
            context: Replacement for the persistent context, or None
            groups: Per-call groups, merged with the logger's own
        """
        config = self._config

        if config.mute_context:
            context = {}
        elif context is None:
            context = self._context_manager.get_context()
        else:
            context = dict(context)

        if config.mute_metadata:
            metadata = None

        context, failures = resolve_lazy_values(context)
        self._report_lazy_failures(failures, "context")

        if metadata is not None:
            metadata, failures = resolve_lazy_values(metadata)
            self._report_lazy_failures(failures, "metadata")

        effective_groups = merge_groups(self._assigned_groups, groups)
        pipeline = self._plugin_manager.pipeline(self, self.report_error)

        if context:
            context = pipeline.on_context_called(context)
            if context is None:
                self._console_debug("Context was dropped due to plugin returning None.")
                context = {}

        if metadata is not None:
            metadata = pipeline.on_metadata_called(metadata)
            if metadata is None:
                self._console_debug("Metadata was dropped due to plugin returning None.")

        has_data = bool(context) or metadata is not None
        data: Dict[str, Any] = self._assemble_data(context, metadata) if has_data else {}

        if error is not None:
            serialized = self._serialize_error(error)
            error_field = config.error_field_name
            if config.error_field_in_metadata:
                metadata_block = dict(data.get(config.metadata_field_name) or {})
                metadata_block[error_field] = serialized
                data[config.metadata_field_name] = metadata_block
            else:
                data[error_field] = serialized
            has_data = True

        should_send = pipeline.should_send_to_logger(
            ShouldSendParams(
                level=level,
                messages=list(messages),
                data=data if has_data else None,
                error=error,
                metadata=metadata,
                context=context,
                groups=list(effective_groups) if effective_groups else None,
            )
        )
        if not should_send:
            return

        messages = pipeline.on_before_message_out(
            MessageOutParams(level=level, messages=messages)
        )

        data_out = pipeline.on_before_data_out(
            DataOutParams(
                level=level,
                data=data if has_data else None,
                error=error,
                metadata=metadata,
                context=context,
            )
        )
        if data_out is not None:
            data = data_out
            has_data = True

        level = pipeline.transform_log_level(
            TransformLevelParams(
                level=level,
                messages=list(messages),
                data=data if has_data else None,
                error=error,
                metadata=metadata,
                context=context,
            )
        )

        entry = LogEntry(
            level=level,
            messages=messages,
            data=data if has_data else None,
            has_data=has_data,
            error=error,
            metadata=metadata,
            context=context,
            groups=effective_groups,
        )

        for transport in self._config.transports:
            try:
                if not transport.is_level_enabled(entry.level):
                    continue
                if not self._group_router.should_receive(transport.id, entry.level, effective_groups):
                    continue
                transport.send_to_logger(entry.copy())
            except Exception as e:
                self.report_error(TransportError(transport.id, e))

    def __getattr__(self, name: str) -> Any:
        registry = self.__dict__.get("_extensions")
        if registry is not None:
            fn = registry.get_logger_method(name)
            if fn is not None:
                return functools.partial(fn, self)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __repr__(self) -> str:
        return (
            f"LogLayer(transports={[t.id for t in self._config.transports]}, "
            f"plugins={len(self._plugin_manager)}, "
            f"context_manager={type(self._context_manager).__name__})"
        )
