"""Exponential backoff for resolver retries.

Delays are computed in milliseconds; tenacity waits in seconds.
"""

from __future__ import annotations

import random
from typing import Callable, List

from tenacity import RetryCallState
from tenacity.wait import wait_base

from resolver_retry.domain.config.retry import RetryConfig


def compute_delay(
    attempt_number: int,
    config: RetryConfig,
    rng: Callable[[], float] = random.random,
) -> float:
    """Delay to wait before a given attempt

    Args:
        attempt_number: 1-based number of the attempt about to run
        config: Retry configuration
        rng: Source of uniform floats in [0, 1), used when randomize is set

    Returns:
        Delay in milliseconds, never above max_timeout
    """
    if attempt_number < 2 or config.min_timeout == 0:
        return 0.0

    multiplier = 1 + rng() if config.randomize else 1
    try:
        delay = multiplier * config.min_timeout * config.factor ** (attempt_number - 2)
    except OverflowError:
        return config.max_timeout
    return min(config.max_timeout, delay)


def backoff_schedule(config: RetryConfig) -> List[float]:
    """Delays (ms) before each retry, in order, ignoring randomization"""
    fixed = config.model_copy(update={"randomize": False})
    return [compute_delay(n, fixed) for n in range(2, config.max_attempts + 1)]


class wait_directive_backoff(wait_base):
    """Tenacity wait strategy following the directive's backoff formula"""

    def __init__(self, config: RetryConfig, rng: Callable[[], float] = random.random) -> None:
        self.config = config
        self.rng = rng

    def __call__(self, retry_state: RetryCallState) -> float:
        # attempt_number is the attempt that just failed
        delay_ms = compute_delay(retry_state.attempt_number + 1, self.config, self.rng)
        return delay_ms / 1000.0
