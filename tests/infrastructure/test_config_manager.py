#!/usr/bin/env python3
"""Tests for the ConfigManager module."""

import threading

import pytest
import yaml

from ctxignore.core.constants import ErrorCode, Limits
from ctxignore.infrastructure.config_manager import (
    ConfigError,
    ConfigManager,
    ConfigSource,
    get_config_manager,
    set_global_config,
)


class TestConfigSource:
    """Tests for ConfigSource enum."""

    def test_precedence_order(self):
        """Test config source precedence ordering."""
        sources = [
            ConfigSource.COMPILED_DEFAULTS,
            ConfigSource.USER_CONFIG,
            ConfigSource.ENVIRONMENT,
            ConfigSource.RUNTIME,
        ]
        for i in range(len(sources) - 1):
            assert sources[i].value < sources[i + 1].value


class TestConfigError:
    """Tests for ConfigError."""

    def test_default_code(self):
        error = ConfigError("bad config")
        assert error.message == "bad config"
        assert error.error_code == ErrorCode.INVALID_INPUT

    def test_custom_code(self):
        assert ConfigError("missing", ErrorCode.NOT_FOUND).error_code == ErrorCode.NOT_FOUND


class TestDefaults:
    """Tests for compiled defaults."""

    def test_default_values(self, config):
        assert config.get("ctxignore.platform") == "auto"
        assert config.get("ctxignore.cache.enabled") is True
        assert config.get("ctxignore.cache.max_entries") == Limits.DEFAULT_CACHE_MAX_ENTRIES
        assert config.get("ctxignore.logging.level") == "WARNING"

    def test_missing_key(self, config):
        assert config.get("ctxignore.nope") is None
        assert config.get("ctxignore.nope", default=5) == 5
        assert config.get("ctxignore.platform.deeper") is None

    def test_defaults_not_shared(self):
        """Test instances do not share the defaults dictionary."""
        first = ConfigManager(load_environment=False)
        first.set("ctxignore.platform", "windows", ConfigSource.COMPILED_DEFAULTS)

        second = ConfigManager(load_environment=False)
        assert second.get("ctxignore.platform") == "auto"


class TestLoadFile:
    """Tests for YAML file loading."""

    def test_load(self, config_file):
        config = ConfigManager(str(config_file), load_environment=False)
        assert config.get("ctxignore.platform") == "posix"
        assert config.get("ctxignore.cache.max_entries") == 256
        assert config.get("ctxignore.logging.level") == "DEBUG"

    def test_partial_file_keeps_defaults(self, temp_dir, config):
        path = temp_dir / "partial.yaml"
        path.write_text("ctxignore:\n  cache:\n    enabled: false\n")
        config.load_file(str(path))

        assert config.get("ctxignore.cache.enabled") is False
        assert config.get("ctxignore.cache.max_entries") == Limits.DEFAULT_CACHE_MAX_ENTRIES

    def test_missing_file(self, temp_dir, config):
        with pytest.raises(ConfigError) as exc_info:
            config.load_file(str(temp_dir / "missing.yaml"))
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_invalid_yaml(self, temp_dir, config):
        path = temp_dir / "broken.yaml"
        path.write_text("ctxignore: [unclosed\n")
        with pytest.raises(ConfigError, match="YAML parse error") as exc_info:
            config.load_file(str(path))
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    @pytest.mark.parametrize("content", ["", "- a\n- b\n", "just text\n"])
    def test_not_a_mapping(self, temp_dir, config, content):
        path = temp_dir / "odd.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError, match="Invalid config format") as exc_info:
            config.load_file(str(path))
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT


class TestEnvironment:
    """Tests for CTXIGNORE_* environment overrides."""

    def test_nested_keys(self, monkeypatch):
        monkeypatch.setenv("CTXIGNORE_PLATFORM", "windows")
        monkeypatch.setenv("CTXIGNORE_CACHE__MAX_ENTRIES", "500")
        monkeypatch.setenv("CTXIGNORE_CACHE__ENABLED", "off")
        monkeypatch.setenv("CTXIGNORE_LOGGING__LEVEL", "debug")

        config = ConfigManager()
        assert config.get("ctxignore.platform") == "windows"
        assert config.get("ctxignore.cache.max_entries") == 500
        assert config.get("ctxignore.cache.enabled") is False
        assert config.get("ctxignore.logging.level") == "debug"

    def test_environment_overrides_file(self, monkeypatch, config_file):
        monkeypatch.setenv("CTXIGNORE_CACHE__MAX_ENTRIES", "64")
        config = ConfigManager(str(config_file))
        assert config.get("ctxignore.cache.max_entries") == 64
        assert config.get("ctxignore.platform") == "posix"

    def test_malformed_names_ignored(self, monkeypatch):
        monkeypatch.setenv("CTXIGNORE_", "x")
        monkeypatch.setenv("CTXIGNORE_CACHE__", "x")
        config = ConfigManager()
        assert config.get("ctxignore.cache.max_entries") == Limits.DEFAULT_CACHE_MAX_ENTRIES

    def test_disabled(self, monkeypatch):
        monkeypatch.setenv("CTXIGNORE_PLATFORM", "windows")
        assert ConfigManager(load_environment=False).get("ctxignore.platform") == "auto"

    @pytest.mark.parametrize(
        "raw, parsed",
        [
            ("true", True),
            ("Yes", True),
            ("on", True),
            ("false", False),
            ("NO", False),
            ("off", False),
            ("1", 1),
            ("0", 0),
            ("42", 42),
            ("1.5", 1.5),
            ("posix", "posix"),
        ],
    )
    def test_parse_env_value(self, config, raw, parsed):
        value = config._parse_env_value(raw)
        assert value == parsed
        assert type(value) is type(parsed)


class TestRuntime:
    """Tests for runtime updates and merging."""

    def test_set_overrides(self, config):
        config.set("ctxignore.cache.max_entries", 10)
        assert config.get("ctxignore.cache.max_entries") == 10
        assert config.get("ctxignore.cache.enabled") is True

    def test_load_dict(self, config, sample_config):
        config.load_dict(sample_config)
        sample_config["ctxignore"]["platform"] = "windows"
        assert config.get("ctxignore.platform") == "posix"

    def test_get_all_deep_merges(self, config):
        config.set("ctxignore.cache.enabled", False)
        merged = config.get_all()
        assert merged["ctxignore"]["cache"] == {
            "enabled": False,
            "max_entries": Limits.DEFAULT_CACHE_MAX_ENTRIES,
        }
        assert merged["ctxignore"]["platform"] == "auto"

    def test_clear_source(self, config):
        config.set("ctxignore.platform", "windows")
        config.clear(ConfigSource.RUNTIME)
        assert config.get("ctxignore.platform") == "auto"

    def test_clear_all_keeps_defaults(self, config):
        config.set("ctxignore.platform", "windows")
        config.load_dict({"ctxignore": {"platform": "posix"}}, ConfigSource.USER_CONFIG)
        config.clear()
        config.clear(ConfigSource.COMPILED_DEFAULTS)
        assert config.get("ctxignore.platform") == "auto"

    def test_concurrent_set(self, config):
        def worker(n):
            for i in range(100):
                config.set(f"ctxignore.extra.k{n}", i)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(config.get(f"ctxignore.extra.k{n}") == 99 for n in range(4))


class TestGetSection:
    """Tests for the validated ctxignore section."""

    def test_defaults(self, config):
        section = config.get_section()
        assert section["platform"] == "auto"
        assert section["cache"]["enabled"] is True

    def test_invalid_value(self, config):
        config.set("ctxignore.cache.max_entries", -1)
        with pytest.raises(ConfigError, match="Invalid configuration") as exc_info:
            config.get_section()
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT
        assert exc_info.value.__cause__ is not None

    def test_from_file(self, config_file):
        section = ConfigManager(str(config_file), load_environment=False).get_section()
        assert section["logging"]["level"] == "DEBUG"


class TestGlobalConfig:
    """Tests for the global configuration manager."""

    def test_singleton(self):
        assert get_config_manager() is get_config_manager()

    def test_set_global(self, config):
        set_global_config(config)
        assert get_config_manager() is config

    def test_reset(self, config):
        set_global_config(config)
        set_global_config(None)
        assert get_config_manager() is not config

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("CTXIGNORE_PLATFORM", "posix")
        assert get_config_manager().get("ctxignore.platform") == "posix"

    def test_yaml_dump_roundtrip(self, temp_dir, config):
        """Test a dumped merged config can be loaded again."""
        config.set("ctxignore.platform", "windows")
        path = temp_dir / "dump.yaml"
        path.write_text(yaml.safe_dump(config.get_all()))

        reloaded = ConfigManager(str(path), load_environment=False)
        assert reloaded.get_all() == config.get_all()
