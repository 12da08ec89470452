"""
Log groups for routing tagged entries to specific transports

A group names a set of transport ids. Entries tagged with a group reach only
those transports, subject to the group's level and enabled flag.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union

from loglayer.core.errors import ConfigurationError
from loglayer.core.log_level import LevelLike, LogLevel, to_log_level

GROUPS_ENV_VAR = "LOGLAYER_GROUPS"

UngroupedBehavior = Union[str, List[str]]


@dataclass
class LogGroupConfig:
    """
    Routing rule for one group.

    Attributes:
        transports: Ids of the transports the group routes to
        level: Minimum level for entries tagged with the group (None for all)
        enabled: Disabled groups route nothing
    """

    transports: List[str] = field(default_factory=list)
    level: Optional[LevelLike] = None
    enabled: bool = True

    def __post_init__(self):
        if isinstance(self.transports, str):
            self.transports = [self.transports]
        self.transports = list(self.transports)
        if self.level is not None:
            self.level = to_log_level(self.level)

    @classmethod
    def coerce(cls, value: Union["LogGroupConfig", Mapping[str, Any]]) -> "LogGroupConfig":
        """Accept a LogGroupConfig or a dict with the same keys."""
        if isinstance(value, cls):
            return replace(value)
        if isinstance(value, Mapping):
            try:
                return cls(**value)
            except TypeError as e:
                raise ConfigurationError(f"Invalid group config: {e}") from e
        raise ConfigurationError(
            f"group config must be a LogGroupConfig or dict, got {type(value).__name__}"
        )


def merge_groups(*group_lists: Optional[Iterable[str]]) -> Optional[List[str]]:
    """
    Merge group lists keeping first-seen order.

    Returns:
        Merged names, or None when every list is empty
    """
    merged: List[str] = []
    for groups in group_lists:
        for name in groups or ():
            if name not in merged:
                merged.append(name)
    return merged or None


def to_group_list(group: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(group, str):
        return [group]
    return list(group)


def validate_ungrouped_behavior(value: UngroupedBehavior) -> UngroupedBehavior:
    if value in ("all", "none"):
        return value
    if isinstance(value, (list, tuple, set)) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigurationError(
        "ungrouped_behavior must be 'all', 'none' or a list of transport ids"
    )


class GroupRouter:
    """
    Group definitions and the active-group filter.

    One router is shared by a root logger and all of its children, so
    runtime changes made through any of them apply to every logger in the
    tree.

    Thread Safety:
        All methods are thread-safe for concurrent access.

    Example:
        router = GroupRouter(
            groups={"database": {"transports": ["db-file"], "level": "warn"}},
            ungrouped_behavior="all",
        )
        router.should_receive("db-file", LogLevel.ERROR, ["database"])  # True
    """

    def __init__(
        self,
        groups: Optional[Mapping[str, Any]] = None,
        active_groups: Optional[Iterable[str]] = None,
        ungrouped_behavior: UngroupedBehavior = "all",
    ):
        self._groups: Dict[str, LogGroupConfig] = {
            name: LogGroupConfig.coerce(config) for name, config in (groups or {}).items()
        }
        self._active: Optional[Set[str]] = set(active_groups) if active_groups is not None else None
        self._ungrouped = validate_ungrouped_behavior(ungrouped_behavior)
        self._lock = threading.RLock()

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """
        Apply LOGLAYER_GROUPS.

        Format is "name,name" or "name:level,name:level". Listed names become
        the active groups; a level overrides that group's level when the
        group is defined.

        Raises:
            ConfigurationError: If a level name is unknown
        """
        if environ is None:
            environ = os.environ
        value = environ.get(GROUPS_ENV_VAR)
        if not value:
            return

        names: List[str] = []
        with self._lock:
            for item in value.split(","):
                item = item.strip()
                if not item:
                    continue
                name, sep, level = item.partition(":")
                if sep and name:
                    if name in self._groups:
                        self._groups[name] = replace(self._groups[name], level=to_log_level(level))
                    names.append(name)
                else:
                    names.append(item)
            self._active = set(names)

    def add_group(self, name: str, config: Union[LogGroupConfig, Mapping[str, Any]]) -> None:
        """Define or replace a group."""
        config = LogGroupConfig.coerce(config)
        with self._lock:
            self._groups[name] = config

    def remove_group(self, name: str) -> bool:
        """
        Remove a group definition.

        Returns:
            True if the group was removed, False if not found
        """
        with self._lock:
            return self._groups.pop(name, None) is not None

    def enable_group(self, name: str) -> None:
        self._update(name, enabled=True)

    def disable_group(self, name: str) -> None:
        self._update(name, enabled=False)

    def set_group_level(self, name: str, level: LevelLike) -> None:
        self._update(name, level=to_log_level(level))

    def _update(self, name: str, **changes) -> None:
        # Unknown names are ignored
        with self._lock:
            config = self._groups.get(name)
            if config is not None:
                self._groups[name] = replace(config, **changes)

    def set_active_groups(self, names: Optional[Iterable[str]]) -> None:
        """Restrict routing to the named groups; None makes every group active."""
        with self._lock:
            self._active = set(names) if names is not None else None

    def get_active_groups(self) -> Optional[Set[str]]:
        with self._lock:
            return set(self._active) if self._active is not None else None

    def get_groups(self) -> Dict[str, LogGroupConfig]:
        """Snapshot of the group definitions."""
        with self._lock:
            return {name: replace(config) for name, config in self._groups.items()}

    def has_groups(self) -> bool:
        return bool(self._groups)

    def _ungrouped_allows(self, transport_id: Optional[str]) -> bool:
        if self._ungrouped == "all":
            return True
        if self._ungrouped == "none":
            return False
        return transport_id in self._ungrouped

    def should_receive(
        self,
        transport_id: Optional[str],
        level: LogLevel,
        groups: Optional[List[str]],
    ) -> bool:
        """
        Decide whether a transport receives an entry.

        Args:
            transport_id: Transport id
            level: Entry level after plugin transforms
            groups: Effective groups of the entry, or None

        Returns:
            True if the transport should ship the entry
        """
        with self._lock:
            if not self._groups:
                return True
            if not groups:
                return self._ungrouped_allows(transport_id)

            any_defined = False
            for name in groups:
                config = self._groups.get(name)
                if config is None:
                    continue
                any_defined = True

                if not config.enabled:
                    continue
                if self._active is not None and name not in self._active:
                    continue
                if config.level is not None and level < config.level:
                    continue
                if transport_id in config.transports:
                    return True

            if not any_defined:
                return self._ungrouped_allows(transport_id)
            return False

    def __repr__(self) -> str:
        return (
            f"GroupRouter(groups={sorted(self._groups)}, "
            f"active={sorted(self._active) if self._active is not None else None}, "
            f"ungrouped={self._ungrouped!r})"
        )
