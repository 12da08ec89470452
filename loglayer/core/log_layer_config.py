"""
LogLayer configuration management
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from loglayer.core.errors import ConfigurationError, LogLayerError
from loglayer.core.groups import LogGroupConfig, UngroupedBehavior, validate_ungrouped_behavior
from loglayer.core.log_level import LevelLike, LogLevel, to_log_level
from loglayer.core.serializers import serialize_error
from loglayer.transports.base_transport import BaseTransport


@dataclass
class LogLayerConfig:
    """
    LogLayer configuration.

    Validated on creation; invalid values raise ConfigurationError.
    """

    # Destinations
    transport: Union[BaseTransport, List[BaseTransport]]
    plugins: List[Any] = field(default_factory=list)
    extensions: List[Any] = field(default_factory=list)

    # Basic settings
    enabled: bool = True
    level: LevelLike = LogLevel.TRACE
    prefix: Optional[str] = None
    console_debug: bool = False

    # Error settings
    error_serializer: Callable[[Any], Any] = serialize_error
    error_field_name: str = "err"
    copy_msg_on_only_error: bool = False
    error_field_in_metadata: bool = False

    # Data layout
    context_field_name: Optional[str] = None
    metadata_field_name: Optional[str] = None
    mute_context: bool = False
    mute_metadata: bool = False

    # Receives PluginHookError, TransportError, SerializationError and
    # LazyEvaluationError instances raised on the logging path
    on_error: Optional[Callable[[LogLayerError], None]] = None

    # Group routing
    groups: Dict[str, Any] = field(default_factory=dict)
    active_groups: Optional[List[str]] = None
    ungrouped_behavior: UngroupedBehavior = "all"

    transports: List[BaseTransport] = field(init=False, repr=False)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.transport, (list, tuple)):
            transports = list(self.transport)
        elif self.transport is None:
            transports = []
        else:
            transports = [self.transport]

        if not transports:
            raise ConfigurationError("at least one transport is required")

        seen = set()
        for transport in transports:
            if not isinstance(transport, BaseTransport):
                raise ConfigurationError(
                    f"transport must be a BaseTransport, got {type(transport).__name__}"
                )
            if transport.id in seen:
                raise ConfigurationError(f"Transport with id '{transport.id}' already exists")
            seen.add(transport.id)

        self.transports = transports
        self.level = to_log_level(self.level)

        if not isinstance(self.error_field_name, str) or not self.error_field_name:
            raise ConfigurationError("error_field_name must be a non-empty string")
        if not callable(self.error_serializer):
            raise ConfigurationError("error_serializer must be callable")
        if self.on_error is not None and not callable(self.on_error):
            raise ConfigurationError("on_error must be callable")
        if self.error_field_in_metadata and not self.metadata_field_name:
            raise ConfigurationError("error_field_in_metadata requires metadata_field_name")

        if not isinstance(self.groups or {}, Mapping):
            raise ConfigurationError("groups must be a mapping of group name to config")
        self.groups = {
            name: LogGroupConfig.coerce(config) for name, config in (self.groups or {}).items()
        }
        if self.active_groups is not None:
            self.active_groups = list(self.active_groups)
        self.ungrouped_behavior = validate_ungrouped_behavior(self.ungrouped_behavior)

        self.plugins = list(self.plugins or [])
        self.extensions = list(self.extensions or [])

    def copy(self) -> "LogLayerConfig":
        """Shallow copy; transports, plugins and callables are shared."""
        return replace(self, transport=list(self.transports))

    @classmethod
    def development(cls, **overrides) -> "LogLayerConfig":
        """Create configuration for local development: colored console, everything on."""
        from loglayer.transports.console_transport import ConsoleTransport

        overrides.setdefault("transport", ConsoleTransport(colored=True))
        overrides.setdefault("console_debug", True)
        return cls(**overrides)

    @classmethod
    def production(cls, **overrides) -> "LogLayerConfig":
        """Create configuration for production: JSON lines, info and above."""
        from loglayer.transports.structured_transport import StructuredTransport

        overrides.setdefault("transport", StructuredTransport())
        overrides.setdefault("level", LogLevel.INFO)
        return cls(**overrides)
