"""Attempt record model"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Attempt:
    """One invocation of a retried resolver

    Attributes:
        index: Attempt number, starting at 1
        delay: Milliseconds waited before this attempt ran (0 for the first)
        result: Resolver result when the attempt succeeded
        error: Exception raised when the attempt failed
    """

    index: int
    delay: float = 0.0
    result: Any = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        """Check if the attempt produced a result"""
        return self.error is None
