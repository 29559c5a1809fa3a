"""Retry configuration model."""

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from resolver_retry.domain.config.merge import merge_config
from resolver_retry.domain.errors import ConfigurationError, format_validation_error


class RetryConfig(BaseModel):
    """Configuration for resolver retries.

    Timeouts are in milliseconds. Schema argument names (``minTimeout``,
    ``maxTimeout``) are accepted as aliases of the snake_case fields.

    Attributes:
        retries: Number of retries after the first attempt (attempts = retries + 1)
        factor: Exponential backoff factor
        min_timeout: Delay before the first retry
        max_timeout: Upper bound for any delay (inf = unbounded)
        randomize: Multiply each delay by a random factor in [1, 2)
    """

    retries: int = Field(10, ge=0)
    factor: float = Field(2, gt=0)
    min_timeout: int = Field(1000, ge=0, alias="minTimeout")
    max_timeout: float = Field(float("inf"), gt=0, alias="maxTimeout")
    randomize: bool = False

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    @model_validator(mode="after")
    def _check_timeouts(self) -> "RetryConfig":
        if self.min_timeout > self.max_timeout:
            raise ValueError(
                f"minTimeout ({self.min_timeout}) must not exceed maxTimeout ({self.max_timeout})"
            )
        return self

    @property
    def max_attempts(self) -> int:
        """Total number of invocations allowed"""
        return self.retries + 1

    @classmethod
    def normalize_keys(cls, config: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Map schema argument names to field names, leaving other keys as they are

        Raises:
            ConfigurationError: If a setting is given under both of its names
        """
        if not config:
            return {}
        aliases = {
            field.alias: name
            for name, field in cls.model_fields.items()
            if field.alias
        }
        duplicated = [alias for alias, name in aliases.items() if alias in config and name in config]
        if duplicated:
            names = ", ".join(f"{alias}/{aliases[alias]}" for alias in duplicated)
            raise ConfigurationError(f"Retry setting given under both names: {names}")
        return {aliases.get(key, key): value for key, value in config.items()}


def build_retry_config(*sources: Optional[Mapping[str, Any]]) -> RetryConfig:
    """Merge configuration sources (later wins) and validate the result

    Args:
        *sources: Config mappings in increasing precedence, None entries are skipped

    Returns:
        Validated RetryConfig

    Raises:
        ConfigurationError: If the merged configuration is invalid
    """
    merged: Dict[str, Any] = {}
    for source in sources:
        merged = merge_config(merged, RetryConfig.normalize_keys(source))
    try:
        return RetryConfig(**merged)
    except ValidationError as e:
        raise ConfigurationError(
            format_validation_error(e, "Retry configuration validation failed")
        ) from e
