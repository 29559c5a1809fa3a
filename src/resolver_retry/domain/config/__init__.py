"""Configuration models with Pydantic validation."""

from resolver_retry.domain.config.app import AppConfig
from resolver_retry.domain.config.merge import merge_config
from resolver_retry.domain.config.retry import RetryConfig, build_retry_config

__all__ = [
    "AppConfig",
    "RetryConfig",
    "build_retry_config",
    "merge_config",
]
