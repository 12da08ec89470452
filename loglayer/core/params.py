"""Parameter objects passed to plugin hooks and child-logger callbacks"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from loglayer.core.log_level import LogLevel

if TYPE_CHECKING:
    from loglayer.context.base_context_manager import BaseContextManager
    from loglayer.core.log_layer import LogLayer
    from loglayer.levels.base_log_level_manager import BaseLogLevelManager


@dataclass
class ShouldSendParams:
    """Input for should_send_to_logger."""

    level: LogLevel
    messages: List[Any] = field(default_factory=list)
    data: Optional[Dict[str, Any]] = None
    error: Any = None
    metadata: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None
    groups: Optional[List[str]] = None


@dataclass
class MessageOutParams:
    """Input for on_before_message_out."""

    level: LogLevel
    messages: List[Any] = field(default_factory=list)


@dataclass
class DataOutParams:
    """
    Input for on_before_data_out.

    data is None when the entry carries no context, metadata or error.
    """

    level: LogLevel
    data: Optional[Dict[str, Any]] = None
    error: Any = None
    metadata: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None


@dataclass
class TransformLevelParams:
    """Input for transform_log_level."""

    level: LogLevel
    messages: List[Any] = field(default_factory=list)
    data: Optional[Dict[str, Any]] = None
    error: Any = None
    metadata: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None


@dataclass
class ChildLoggerCreatedParams:
    """
    Passed to every collaborator's on_child_logger_created hook.

    Context and level managers receive the same object as plugins, so each
    can pick the references it needs to apply its inheritance policy.
    """

    parent_logger: "LogLayer"
    child_logger: "LogLayer"
    parent_context_manager: "BaseContextManager"
    child_context_manager: "BaseContextManager"
    parent_log_level_manager: "BaseLogLevelManager"
    child_log_level_manager: "BaseLogLevelManager"
