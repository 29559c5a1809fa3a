"""Retry directive: binds the retry policy to a host's resolver map."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from resolver_retry.domain.config.merge import merge_config
from resolver_retry.domain.config.retry import RetryConfig
from resolver_retry.domain.declaration import directive_config_key, retry_declaration
from resolver_retry.infrastructure.config.config_manager import ConfigManager
from resolver_retry.infrastructure.retry import Resolver, attach_retry

logger = logging.getLogger(__name__)


class RetryDirective:
    """Named retry directive for field resolvers

    Configuration precedence, lowest first: ``defaults`` (usually loaded by
    ConfigManager), the field's directive arguments, then the per-request
    config found in the execution context under ``context_key``.
    """

    def __init__(self, name: str = "retry", defaults: Optional[Mapping[str, Any]] = None):
        """Initialize directive

        Args:
            name: Directive name as written in the schema
            defaults: Retry settings applied to every field
        """
        self.name = name
        self.defaults: Dict[str, Any] = RetryConfig.normalize_keys(defaults)

    @classmethod
    def from_config(cls, config_manager: ConfigManager) -> "RetryDirective":
        """Create directive from loaded configuration"""
        return cls(
            name=config_manager.get_directive_name(),
            defaults=config_manager.get_retry_overrides(),
        )

    @property
    def declaration(self) -> str:
        return retry_declaration(self.name)

    @property
    def context_key(self) -> str:
        return directive_config_key(self.name)

    def context_config(self, context: Any) -> Optional[Mapping[str, Any]]:
        """Find per-request configuration in an execution context

        Mapping contexts are looked up by key, other objects by attribute.

        Args:
            context: Execution context passed to the resolver

        Returns:
            Configuration mapping or None
        """
        if context is None:
            return None
        if isinstance(context, Mapping):
            return context.get(self.context_key)
        return getattr(context, self.context_key, None)

    def attach(
        self,
        resolver: Resolver,
        field_args: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ):
        """Wrap a single resolver

        Args:
            resolver: Field resolver
            field_args: Directive arguments declared on the field
            **kwargs: Passed through to attach_retry (on_attempt, sleep, name)

        Returns:
            Wrapped resolver
        """
        static_config = merge_config(self.defaults, RetryConfig.normalize_keys(field_args))
        return attach_retry(
            resolver,
            static_config,
            context_config=self.context_config,
            **kwargs,
        )

    def apply(
        self,
        resolvers: Mapping[str, Mapping[str, Resolver]],
        fields: Mapping[str, Optional[Mapping[str, Any]]],
        **kwargs: Any,
    ) -> Dict[str, Dict[str, Resolver]]:
        """Wrap the decorated fields of a resolver map

        Args:
            resolvers: Resolver map, e.g. ``{"Query": {"flaky": resolve_flaky}}``
            fields: Decorated fields as ``"Type.field"`` -> directive arguments
            **kwargs: Passed through to attach_retry (on_attempt, sleep)

        Returns:
            New resolver map; undecorated resolvers are kept as they are

        Raises:
            KeyError: If a decorated field has no resolver
        """
        result = {type_name: dict(type_fields) for type_name, type_fields in resolvers.items()}
        for coordinate, field_args in fields.items():
            type_name, _, field_name = coordinate.partition(".")
            if field_name not in result.get(type_name, {}):
                raise KeyError(f"No resolver for @{self.name} field {coordinate}")
            result[type_name][field_name] = self.attach(
                result[type_name][field_name],
                field_args,
                name=coordinate,
                **kwargs,
            )
            logger.debug(f"Attached @{self.name} to {coordinate}")
        return result
