"""Tests for TraceStoreConfig."""

import pytest

from thoughttrace.config import DEFAULTS, TraceStoreConfig
from thoughttrace.protocols import ConfigError, TraceError


class TestDefaults:
    def test_default_values(self):
        config = TraceStoreConfig()
        assert config.max_thought_history == 1000
        assert config.max_branches == 50
        assert config.max_thoughts_per_branch == 200
        assert config.enable_auto_cleanup is True
        assert config.cleanup_on_complete is True
        assert config.retain_chain_summaries is True
        assert config.max_chain_summaries == 100

    def test_module_defaults_match(self):
        assert DEFAULTS == TraceStoreConfig()

    def test_to_dict(self):
        data = TraceStoreConfig(max_branches=3).to_dict()
        assert data["max_branches"] == 3
        assert set(data) == {
            "max_thought_history",
            "max_branches",
            "max_thoughts_per_branch",
            "enable_auto_cleanup",
            "cleanup_on_complete",
            "retain_chain_summaries",
            "max_chain_summaries",
        }


class TestValidation:
    def test_negative_rejected(self):
        with pytest.raises(ConfigError) as exc:
            TraceStoreConfig(max_branches=-1)
        assert exc.value.option == "max_branches"

    def test_bool_is_not_an_int(self):
        with pytest.raises(ConfigError):
            TraceStoreConfig(max_thought_history=True)

    def test_non_int_rejected(self):
        with pytest.raises(ConfigError):
            TraceStoreConfig(max_thought_history="10")
        with pytest.raises(ConfigError):
            TraceStoreConfig(max_chain_summaries=1.5)

    def test_non_bool_flag_rejected(self):
        with pytest.raises(ConfigError) as exc:
            TraceStoreConfig(enable_auto_cleanup=1)
        assert exc.value.option == "enable_auto_cleanup"

    def test_zero_allowed(self):
        config = TraceStoreConfig(max_thought_history=0, max_branches=0)
        assert config.max_thought_history == 0

    def test_config_error_hierarchy(self):
        with pytest.raises(ValueError):
            TraceStoreConfig(max_branches=-1)
        with pytest.raises(TraceError):
            TraceStoreConfig(max_branches=-1)


class TestFromDict:
    def test_partial_override(self):
        config = TraceStoreConfig.from_dict({"max_thought_history": 500})
        assert config.max_thought_history == 500
        assert config.max_branches == 50

    def test_wire_names(self):
        config = TraceStoreConfig.from_dict(
            {"maxThoughtHistory": 10, "cleanupOnComplete": False, "maxChainSummaries": 5}
        )
        assert config.max_thought_history == 10
        assert config.cleanup_on_complete is False
        assert config.max_chain_summaries == 5

    def test_empty_and_none(self):
        assert TraceStoreConfig.from_dict({}) == DEFAULTS
        assert TraceStoreConfig.from_dict(None) == DEFAULTS

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown configuration option: maxEverything"):
            TraceStoreConfig.from_dict({"maxEverything": 1})

    def test_merged_leaves_original(self):
        base = TraceStoreConfig(max_branches=5)
        merged = base.merged({"maxThoughtsPerBranch": 7})
        assert base.max_thoughts_per_branch == 200
        assert merged.max_branches == 5
        assert merged.max_thoughts_per_branch == 7


class TestFromEnv:
    def test_no_variables_gives_defaults(self):
        assert TraceStoreConfig.from_env({}) == DEFAULTS

    def test_ints_and_bools(self):
        config = TraceStoreConfig.from_env(
            {
                "THOUGHTTRACE_MAX_THOUGHT_HISTORY": "25",
                "THOUGHTTRACE_ENABLE_AUTO_CLEANUP": "off",
                "THOUGHTTRACE_RETAIN_CHAIN_SUMMARIES": "No",
                "THOUGHTTRACE_CLEANUP_ON_COMPLETE": "yes",
            }
        )
        assert config.max_thought_history == 25
        assert config.enable_auto_cleanup is False
        assert config.retain_chain_summaries is False
        assert config.cleanup_on_complete is True

    def test_blank_values_ignored(self):
        config = TraceStoreConfig.from_env({"THOUGHTTRACE_MAX_BRANCHES": "  "})
        assert config.max_branches == 50

    def test_unrelated_variables_ignored(self):
        config = TraceStoreConfig.from_env({"MAX_BRANCHES": "1", "PATH": "/usr/bin"})
        assert config == DEFAULTS

    def test_invalid_int(self):
        with pytest.raises(ConfigError, match="THOUGHTTRACE_MAX_BRANCHES"):
            TraceStoreConfig.from_env({"THOUGHTTRACE_MAX_BRANCHES": "many"})

    def test_invalid_bool(self):
        with pytest.raises(ConfigError, match="THOUGHTTRACE_ENABLE_AUTO_CLEANUP"):
            TraceStoreConfig.from_env({"THOUGHTTRACE_ENABLE_AUTO_CLEANUP": "maybe"})

    def test_negative_int_rejected(self):
        with pytest.raises(ConfigError):
            TraceStoreConfig.from_env({"THOUGHTTRACE_MAX_BRANCHES": "-3"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("THOUGHTTRACE_MAX_CHAIN_SUMMARIES", "9")
        assert TraceStoreConfig.from_env().max_chain_summaries == 9
