"""Shallow configuration merge."""

from typing import Any, Dict, Mapping, Optional


def merge_config(
    base: Mapping[str, Any], override: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Merge two configuration mappings one level deep

    Keys present in ``override`` replace the ones in ``base``. Nested mappings
    are replaced wholesale, never merged.

    Args:
        base: Base configuration
        override: Override configuration (may be None)

    Returns:
        New merged dict, or ``base`` itself when there is no override
    """
    if override is None:
        return base
    result = dict(base)
    result.update(override)
    return result
