"""Configuration manager for loading and validating .resolver-retry.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from resolver_retry.domain.config import AppConfig, RetryConfig
from resolver_retry.domain.errors import ConfigurationError, format_validation_error

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".resolver-retry.yml"

# Environment variable -> retry field
ENV_RETRY_OVERRIDES = {
    "RESOLVER_RETRY_RETRIES": "retries",
    "RESOLVER_RETRY_FACTOR": "factor",
    "RESOLVER_RETRY_MIN_TIMEOUT": "min_timeout",
    "RESOLVER_RETRY_MAX_TIMEOUT": "max_timeout",
    "RESOLVER_RETRY_RANDOMIZE": "randomize",
}


class ConfigManager:
    """Manages configuration from .resolver-retry.yml and environment variables

    Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .resolver-retry.yml file (searched from current directory upwards)
    3. Environment variables (RESOLVER_RETRY_*)
    4. Directive arguments and per-request context config (handled at call time)
    """

    DEFAULT_CONFIG: Dict[str, Any] = {
        "directive_name": "retry",
        "retry": {},
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .resolver-retry.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            raise ConfigurationError(
                format_validation_error(e, "Configuration validation failed")
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find .resolver-retry.yml starting from current directory

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and environment, then validate

        Raises:
            ConfigurationError: If the file cannot be parsed
            ValidationError: If configuration values are invalid
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"{self.config_path} must contain a mapping")
            config_dict = self._merge_config(config_dict, file_config)
            logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)
        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Merge file configuration into defaults, one section deep

        Args:
            base: Base configuration
            override: Override configuration

        Returns:
            Merged configuration
        """
        result = base.copy()
        for key, value in override.items():
            if key == "retry" and isinstance(value, dict):
                result[key] = {**result.get(key, {}), **RetryConfig.normalize_keys(value)}
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides

        Args:
            config: Configuration dictionary

        Returns:
            Configuration with env overrides applied
        """
        if os.getenv("RESOLVER_RETRY_DIRECTIVE_NAME"):
            config["directive_name"] = os.getenv("RESOLVER_RETRY_DIRECTIVE_NAME")

        retry = config.get("retry")
        if not isinstance(retry, dict):
            return config
        for env_name, field in ENV_RETRY_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                logger.debug(f"Applying {env_name} override")
                retry[field] = value
        return config

    def get_directive_name(self) -> str:
        """Get directive name

        Returns:
            Directive name used in schema declarations
        """
        return self.config.directive_name

    def get_retry_config(self) -> RetryConfig:
        """Get default retry configuration

        Returns:
            Retry configuration model
        """
        return self.config.retry

    def get_retry_overrides(self) -> Dict[str, Any]:
        """Get only the retry settings set explicitly in the file or environment

        Returns:
            Dict of field names to values
        """
        return self.config.retry.model_dump(exclude_unset=True)
