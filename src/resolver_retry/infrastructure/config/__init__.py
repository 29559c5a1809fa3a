"""Configuration loading"""

from resolver_retry.infrastructure.config.config_manager import ConfigManager

__all__ = ["ConfigManager"]
