"""Resolver retry utilities using tenacity.

This module wraps a four-argument field resolver ``(payload, arguments,
context, metadata)`` so that failures are retried with exponential backoff.
Every exception is retryable; once attempts are exhausted the last one is
re-raised unchanged.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)

from resolver_retry.domain.config.retry import RetryConfig, build_retry_config
from resolver_retry.domain.models.attempt import Attempt
from resolver_retry.infrastructure.backoff import wait_directive_backoff

logger = logging.getLogger(__name__)

Resolver = Callable[[Any, Any, Any, Any], Any]
ContextConfig = Union[
    Mapping[str, Any],
    Callable[[Any], Optional[Mapping[str, Any]]],
    None,
]
AttemptHook = Callable[[Attempt], None]
Sleep = Callable[[float], Awaitable[None]]


def _context_overrides(context_config: ContextConfig, context: Any) -> Optional[Mapping[str, Any]]:
    """Resolve the per-request configuration for one call"""
    if context_config is None:
        return None
    if callable(context_config):
        return context_config(context)
    return context_config


async def _invoke(resolver: Resolver, payload: Any, arguments: Any, context: Any, metadata: Any) -> Any:
    result = resolver(payload, arguments, context, metadata)
    if inspect.isawaitable(result):
        result = await result
    return result


def create_retrying(
    config: RetryConfig,
    before_sleep: Optional[Callable[[RetryCallState], None]] = None,
    sleep: Optional[Sleep] = None,
) -> AsyncRetrying:
    """Create a tenacity controller for one resolver call

    Args:
        config: Effective retry configuration
        before_sleep: Optional callback run before each backoff wait
        sleep: Coroutine function used to wait (defaults to asyncio.sleep)

    Returns:
        AsyncRetrying instance
    """
    return AsyncRetrying(
        sleep=sleep or asyncio.sleep,
        stop=stop_after_attempt(config.max_attempts),
        wait=wait_directive_backoff(config),
        retry=retry_if_exception_type(Exception),
        reraise=True,
        before_sleep=before_sleep,
    )


def attach_retry(
    resolver: Resolver,
    static_config: Optional[Mapping[str, Any]] = None,
    *,
    context_config: ContextConfig = None,
    on_attempt: Optional[AttemptHook] = None,
    sleep: Optional[Sleep] = None,
    name: Optional[str] = None,
) -> Callable[[Any, Any, Any, Any], Awaitable[Any]]:
    """Wrap a resolver with retry and exponential backoff

    The effective configuration is rebuilt on every call: ``static_config``
    overridden key by key by the per-request ``context_config``.

    Args:
        resolver: Resolver called as ``resolver(payload, arguments, context, metadata)``
        static_config: Field-level configuration (directive arguments)
        context_config: Mapping, or callable receiving the execution context and
            returning a mapping or None
        on_attempt: Optional callback receiving an Attempt after each invocation
        sleep: Coroutine function used to wait between attempts
        name: Name used in log messages (defaults to the resolver's qualname)

    Returns:
        Coroutine function with the resolver's signature

    Raises:
        ConfigurationError: If ``static_config`` is invalid
    """
    label = name or getattr(resolver, "__qualname__", None) or repr(resolver)
    build_retry_config(static_config)

    @functools.wraps(resolver)
    async def wrapped(payload: Any, arguments: Any, context: Any, metadata: Any) -> Any:
        config = build_retry_config(
            static_config, _context_overrides(context_config, context)
        )
        logger.debug(f"Resolver {label} retry config: {config.model_dump(by_alias=True)}")

        waited: Dict[str, float] = {"ms": 0.0}

        def _before_sleep(retry_state: RetryCallState) -> None:
            delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
            waited["ms"] = delay * 1000.0
            exception = retry_state.outcome.exception() if retry_state.outcome else None
            logger.warning(
                f"Resolver {label} failed (attempt {retry_state.attempt_number}/"
                f"{config.max_attempts}): {exception}. Retrying in {delay:.3f}s..."
            )

        attempts_made = 0
        try:
            async for attempt in create_retrying(config, _before_sleep, sleep):
                with attempt:
                    result = await _invoke(resolver, payload, arguments, context, metadata)
                attempts_made += 1
                if on_attempt is not None:
                    outcome = attempt.retry_state.outcome
                    if outcome is not None and outcome.failed:
                        record = Attempt(attempts_made, waited["ms"], error=outcome.exception())
                    else:
                        record = Attempt(attempts_made, waited["ms"], result=result)
                    on_attempt(record)
        except Exception as e:
            logger.error(f"Resolver {label} failed after {attempts_made} attempt(s): {e}")
            raise
        return result

    return wrapped
