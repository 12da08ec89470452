"""Tests for log group routing"""

import pytest
from unittest.mock import Mock

from loglayer import ConfigurationError, LogLayer, LogLayerConfig, LogLevel, RawLogEntry
from loglayer.core.groups import GROUPS_ENV_VAR, GroupRouter, LogGroupConfig, merge_groups
from loglayer.plugins import CallbackPlugin
from loglayer.transports import TestTransport


@pytest.fixture(autouse=True)
def no_env_groups(monkeypatch):
    monkeypatch.delenv(GROUPS_ENV_VAR, raising=False)


def make_log(*ids, **kwargs):
    transports = [TestTransport(id=transport_id) for transport_id in ids]
    return LogLayer(LogLayerConfig(transport=transports, **kwargs))


def lines(log, transport_id):
    return [line.messages for line in log.get_logger_instance(transport_id).lines]


class TestGroupRouter:
    """Test routing decisions."""

    def test_no_groups_routes_everywhere(self):
        router = GroupRouter()
        assert router.should_receive("t1", LogLevel.INFO, ["anything"])

    def test_dict_config_is_coerced(self):
        router = GroupRouter({"db": {"transports": "t1", "level": "warn"}})
        config = router.get_groups()["db"]

        assert config == LogGroupConfig(transports=["t1"], level=LogLevel.WARN)

    def test_invalid_group_config(self):
        with pytest.raises(ConfigurationError):
            GroupRouter({"db": {"transport": ["t1"]}})

    def test_invalid_ungrouped_behavior(self):
        with pytest.raises(ConfigurationError):
            GroupRouter(ungrouped_behavior="some")

    def test_get_groups_is_snapshot(self):
        router = GroupRouter({"db": {"transports": ["t1"]}})
        router.get_groups()["db"].enabled = False
        assert router.get_groups()["db"].enabled is True

    def test_merge_groups_keeps_order(self):
        assert merge_groups(["a", "b"], ["b", "c"]) == ["a", "b", "c"]
        assert merge_groups(None, []) is None

    def test_apply_env(self):
        router = GroupRouter({"db": {"transports": ["t1"], "level": "error"}})
        router.apply_env({GROUPS_ENV_VAR: "db:debug, auth"})

        assert router.get_active_groups() == {"db", "auth"}
        assert router.get_groups()["db"].level == LogLevel.DEBUG

    def test_apply_env_unknown_level(self):
        router = GroupRouter({"db": {"transports": ["t1"]}})
        with pytest.raises(ConfigurationError):
            router.apply_env({GROUPS_ENV_VAR: "db:loud"})


class TestGroupRouting:
    """Test group routing through LogLayer."""

    def test_no_groups_configured(self):
        log = make_log("t1", "t2")
        log.with_group("database").info("message")

        assert lines(log, "t1") == [["message"]]
        assert lines(log, "t2") == [["message"]]

    def test_ungrouped_goes_everywhere_by_default(self):
        log = make_log("t1", "t2", groups={"database": {"transports": ["t1"], "level": "error"}})
        log.info("ungrouped")

        assert lines(log, "t1") == [["ungrouped"]]
        assert lines(log, "t2") == [["ungrouped"]]

    def test_grouped_only_to_group_transports(self):
        log = make_log("t1", "t2", groups={"database": {"transports": ["t1"]}})
        log.with_group("database").error("db error")

        assert lines(log, "t1") == [["db error"]]
        assert lines(log, "t2") == []

    def test_multi_group_union(self):
        log = make_log("t1", "t2", "t3", groups={
            "database": {"transports": ["t1"]},
            "auth": {"transports": ["t2"]},
        })
        log.with_group(["database", "auth"]).error("multi")

        assert lines(log, "t1") == [["multi"]]
        assert lines(log, "t2") == [["multi"]]
        assert lines(log, "t3") == []

    def test_group_level(self):
        log = make_log("t1", groups={"database": {"transports": ["t1"], "level": "error"}})
        db = log.with_group("database")
        db.info("dropped")
        db.error("kept")
        db.fatal("kept too")

        assert lines(log, "t1") == [["kept"], ["kept too"]]

    def test_disabled_group(self):
        log = make_log("t1", groups={"database": LogGroupConfig(transports=["t1"], enabled=False)})
        log.with_group("database").error("dropped")

        assert lines(log, "t1") == []

    def test_disable_and_enable_group_at_runtime(self):
        log = make_log("t1", groups={"database": {"transports": ["t1"]}})
        db = log.with_group("database")

        log.disable_group("database")
        db.error("dropped")
        log.enable_group("database")
        db.error("kept")

        assert lines(log, "t1") == [["kept"]]

    def test_active_groups(self):
        log = make_log("t1", "t2", groups={
            "database": {"transports": ["t1"]},
            "auth": {"transports": ["t2"]},
        }, active_groups=["database"])

        log.with_group("database").error("db")
        log.with_group("auth").error("auth")

        assert lines(log, "t1") == [["db"]]
        assert lines(log, "t2") == []

    def test_set_active_groups_at_runtime(self):
        log = make_log("t1", "t2", groups={
            "database": {"transports": ["t1"]},
            "auth": {"transports": ["t2"]},
        })
        log.set_active_groups(["auth"])
        log.with_group("database").error("filtered")
        log.set_active_groups(None)
        log.with_group("database").error("passes")

        assert lines(log, "t1") == [["passes"]]

    def test_ungrouped_none(self):
        log = make_log("t1", groups={"database": {"transports": ["t1"]}}, ungrouped_behavior="none")
        log.info("dropped")

        assert lines(log, "t1") == []

    def test_ungrouped_to_listed_transports(self):
        log = make_log("t1", "t2", groups={"database": {"transports": ["t1"]}},
                       ungrouped_behavior=["t2"])
        log.info("ungrouped")

        assert lines(log, "t1") == []
        assert lines(log, "t2") == [["ungrouped"]]

    def test_undefined_group_is_ungrouped(self):
        log = make_log("t1", "t2", groups={"database": {"transports": ["t1"]}})
        log.with_group("nonexistent").error("unknown")

        assert lines(log, "t1") == [["unknown"]]
        assert lines(log, "t2") == [["unknown"]]

    def test_defined_and_undefined_groups(self):
        log = make_log("t1", "t2", groups={"database": {"transports": ["t1"], "level": "error"}})
        log.with_group(["database", "nonexistent"]).error("mixed")

        assert lines(log, "t1") == [["mixed"]]
        assert lines(log, "t2") == []

    def test_transformed_level_is_checked(self):
        log = make_log(
            "t1",
            groups={"database": {"transports": ["t1"], "level": "error"}},
            plugins=[CallbackPlugin(transform_log_level=lambda p, l: "error")],
        )
        log.with_group("database").info("promoted")

        assert lines(log, "t1") == [["promoted"]]


class TestGroupTagging:
    """Test how loggers, builders and raw entries carry groups."""

    def test_with_group_does_not_affect_parent(self):
        log = make_log("t1", "t2", groups={"database": {"transports": ["t1"]}})
        log.with_group("database")
        log.info("parent")

        assert lines(log, "t2") == [["parent"]]

    def test_nested_with_group_accumulates(self):
        log = make_log("t1", "t2", groups={
            "database": {"transports": ["t1"]},
            "auth": {"transports": ["t2"]},
        })
        nested = log.with_group("database").with_group("auth")

        assert nested.get_assigned_groups() == ["database", "auth"]
        nested.error("both")
        assert lines(log, "t1") == [["both"]]
        assert lines(log, "t2") == [["both"]]

    def test_builder_groups_merge_with_logger_groups(self):
        log = make_log("t1", "t2", groups={
            "database": {"transports": ["t1"]},
            "auth": {"transports": ["t2"]},
        })
        log.with_group("database").with_metadata({"test": True}).with_group("auth").error("merged")

        assert lines(log, "t1") == [["merged"]]
        assert lines(log, "t2") == [["merged"]]

    def test_builder_groups_are_per_call(self):
        log = make_log("t1", "t2", groups={"database": {"transports": ["t1"]}})
        builder = log.with_error(ValueError("x")).with_group("database")
        builder.error("grouped")
        builder.error("ungrouped")

        assert lines(log, "t1") == [["grouped"], ["ungrouped"]]
        assert lines(log, "t2") == [["ungrouped"]]

    def test_raw_entry_groups(self):
        log = make_log("t1", "t2", groups={"database": {"transports": ["t1"]}})
        log.raw(RawLogEntry(level="error", messages=["raw"], groups=["database"]))

        assert lines(log, "t2") == []
        assert lines(log, "t1") == [["raw"]]

    def test_groups_passed_to_transport(self):
        transport = TestTransport(id="t1")
        log = LogLayer(LogLayerConfig(transport=transport, groups={"database": {"transports": ["t1"]}}))

        received = []
        transport.ship_to_logger = lambda entry: received.append(entry) or []
        log.with_group("database").error("tagged")
        log.info("untagged")

        assert received[0].groups == ["database"]
        assert received[1].groups is None

    def test_groups_passed_to_should_send(self):
        should_send = Mock(return_value=True)
        log = make_log(
            "t1",
            groups={"database": {"transports": ["t1"]}},
            plugins=[CallbackPlugin(should_send_to_logger=should_send)],
        )
        log.with_group("database").error("x")

        assert should_send.call_args[0][0].groups == ["database"]


class TestGroupManagement:
    """Test runtime group changes."""

    def test_add_group(self):
        log = make_log("t1", "t2")
        log.add_group("database", {"transports": ["t1"]})
        log.with_group("database").error("routed")

        assert lines(log, "t2") == []

    def test_remove_group(self):
        log = make_log("t1", "t2", groups={"database": {"transports": ["t1"]}})
        log.remove_group("database")
        log.with_group("database").error("everywhere")

        assert lines(log, "t2") == [["everywhere"]]

    def test_set_group_level(self):
        log = make_log("t1", groups={"database": {"transports": ["t1"], "level": "error"}})
        log.set_group_level("database", LogLevel.DEBUG)
        log.with_group("database").debug("now visible")

        assert lines(log, "t1") == [["now visible"]]

    def test_get_groups(self):
        log = make_log("t1", groups={"database": {"transports": ["t1"]}})
        log.add_group("auth", LogGroupConfig(transports=["t1"], level="warn"))

        assert set(log.get_groups()) == {"database", "auth"}
        assert log.get_groups()["auth"].level == LogLevel.WARN

    def test_changes_propagate_between_parent_and_child(self):
        log = make_log("t1", groups={"database": {"transports": ["t1"]}})
        child = log.with_group("database")
        child.disable_group("database")
        log.with_group("database").error("dropped")

        assert lines(log, "t1") == []

    def test_unknown_group_changes_are_ignored(self):
        log = make_log("t1")
        log.enable_group("missing").disable_group("missing").set_group_level("missing", "info")
        assert log.get_groups() == {}


class TestGroupsFromEnvironment:
    """Test LOGLAYER_GROUPS parsing at construction."""

    def test_env_filters_active_groups(self, monkeypatch):
        monkeypatch.setenv(GROUPS_ENV_VAR, "database")
        log = make_log("t1", "t2", groups={
            "database": {"transports": ["t1"]},
            "auth": {"transports": ["t2"]},
        })

        log.with_group("database").error("db")
        log.with_group("auth").error("auth")

        assert lines(log, "t1") == [["db"]]
        assert lines(log, "t2") == []

    def test_env_overrides_group_level(self, monkeypatch):
        monkeypatch.setenv(GROUPS_ENV_VAR, "database:debug")
        log = make_log("t1", groups={"database": {"transports": ["t1"], "level": "error"}})

        log.with_group("database").debug("debug message")

        assert lines(log, "t1") == [["debug message"]]

    def test_config_validation(self):
        with pytest.raises(ConfigurationError):
            make_log("t1", groups=["database"])
        with pytest.raises(ConfigurationError):
            make_log("t1", ungrouped_behavior=42)
