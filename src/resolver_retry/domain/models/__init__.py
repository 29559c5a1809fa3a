"""Domain models"""

from resolver_retry.domain.models.attempt import Attempt

__all__ = ["Attempt"]
