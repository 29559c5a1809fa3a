"""Retry with exponential backoff for schema field resolvers"""

from resolver_retry.application.directive import RetryDirective
from resolver_retry.domain.config import RetryConfig, build_retry_config, merge_config
from resolver_retry.domain.declaration import directive_config_key, retry_declaration
from resolver_retry.domain.errors import ConfigurationError
from resolver_retry.domain.models import Attempt
from resolver_retry.infrastructure.retry import attach_retry

__version__ = "0.1.0"

__all__ = [
    "Attempt",
    "ConfigurationError",
    "RetryConfig",
    "RetryDirective",
    "attach_retry",
    "build_retry_config",
    "directive_config_key",
    "merge_config",
    "retry_declaration",
]
