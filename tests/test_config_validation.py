"""Tests for configuration models, merging and validation"""

import pytest
from pydantic import ValidationError

from resolver_retry.domain.config import (
    AppConfig,
    RetryConfig,
    build_retry_config,
    merge_config,
)
from resolver_retry.domain.errors import ConfigurationError


class TestRetryConfigValidation:
    """Tests for RetryConfig validation."""

    def test_defaults(self):
        config = RetryConfig()
        assert config.retries == 10
        assert config.factor == 2
        assert config.min_timeout == 1000
        assert config.max_timeout == float("inf")
        assert config.randomize is False
        assert config.max_attempts == 11

    def test_schema_argument_names_are_accepted(self):
        config = RetryConfig(minTimeout=5, maxTimeout=10)
        assert config.min_timeout == 5
        assert config.max_timeout == 10

    def test_field_names_are_accepted(self):
        config = RetryConfig(min_timeout=5, max_timeout=10)
        assert config.min_timeout == 5

    def test_dump_by_alias(self):
        dumped = RetryConfig(retries=1).model_dump(by_alias=True)
        assert set(dumped) == {"retries", "factor", "minTimeout", "maxTimeout", "randomize"}

    def test_negative_retries(self):
        with pytest.raises(ValidationError, match="retries"):
            RetryConfig(retries=-1)

    def test_zero_factor(self):
        with pytest.raises(ValidationError, match="factor"):
            RetryConfig(factor=0)

    def test_negative_min_timeout(self):
        with pytest.raises(ValidationError, match="minTimeout"):
            RetryConfig(minTimeout=-5)

    def test_min_timeout_above_max_timeout(self):
        with pytest.raises(ValidationError, match="must not exceed"):
            RetryConfig(minTimeout=10, maxTimeout=5)

    def test_unknown_key(self):
        with pytest.raises(ValidationError, match="retryCount"):
            RetryConfig(retryCount=3)

    def test_config_is_immutable(self):
        config = RetryConfig()
        with pytest.raises(ValidationError):
            config.retries = 3

    def test_normalize_keys(self):
        normalized = RetryConfig.normalize_keys({"minTimeout": 1, "retries": 2, "other": 3})
        assert normalized == {"min_timeout": 1, "retries": 2, "other": 3}

    def test_normalize_keys_of_none(self):
        assert RetryConfig.normalize_keys(None) == {}

    def test_normalize_keys_rejects_both_names(self):
        with pytest.raises(ConfigurationError, match="minTimeout/min_timeout"):
            RetryConfig.normalize_keys({"minTimeout": 5, "min_timeout": 7})

    def test_build_rejects_both_names_in_one_source(self):
        with pytest.raises(ConfigurationError, match="maxTimeout/max_timeout"):
            build_retry_config({"maxTimeout": 5, "max_timeout": 7})


class TestMergeConfig:
    """Tests for merge_config."""

    def test_override_wins(self):
        assert merge_config({"retries": 1, "factor": 1}, {"retries": 0}) == {"retries": 0, "factor": 1}

    def test_missing_override_returns_base(self):
        base = {"retries": 1}
        assert merge_config(base, None) is base

    def test_inputs_are_not_modified(self):
        base = {"retries": 1}
        override = {"factor": 3}
        merge_config(base, override)
        assert base == {"retries": 1}
        assert override == {"factor": 3}

    def test_merge_is_shallow(self):
        merged = merge_config({"nested": {"a": 1, "b": 2}}, {"nested": {"a": 3}})
        assert merged == {"nested": {"a": 3}}


class TestBuildRetryConfig:
    """Tests for build_retry_config."""

    def test_context_overrides_field_config(self):
        static = {"retries": 1, "factor": 1, "minTimeout": 1, "maxTimeout": 1}
        config = build_retry_config(static, {"retries": 0})
        assert config.retries == 0
        assert config.factor == 1
        assert config.min_timeout == 1
        assert config.max_timeout == 1

    def test_mixed_key_styles_collide(self):
        config = build_retry_config({"minTimeout": 5}, {"min_timeout": 7})
        assert config.min_timeout == 7

    def test_no_sources_gives_defaults(self):
        assert build_retry_config() == RetryConfig()

    def test_none_sources_are_skipped(self):
        assert build_retry_config(None, {"retries": 2}, None).retries == 2

    def test_invalid_merge_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_retry_config({"retries": -3})
        assert "Retry configuration validation failed" in str(exc_info.value)
        assert "retries" in str(exc_info.value)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            build_retry_config({"factor": -1})


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()
        assert config.directive_name == "retry"
        assert config.retry == RetryConfig()

    def test_invalid_directive_name(self):
        with pytest.raises(ValidationError, match="directive_name"):
            AppConfig(directive_name="not a name")

    def test_unknown_section(self):
        with pytest.raises(ValidationError):
            AppConfig(unknown={})
