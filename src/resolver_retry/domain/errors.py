"""Error types raised by resolver-retry itself.

Resolver failures are never wrapped: the last one is re-raised as is.
"""

from pydantic import ValidationError


class ConfigurationError(ValueError):
    """Retry configuration validation error."""

    pass


def format_validation_error(error: ValidationError, title: str) -> str:
    """Render a pydantic ValidationError as one line per invalid field

    Args:
        error: Validation error raised by a config model
        title: Leading line of the message

    Returns:
        Human-readable error message
    """
    lines = []
    for item in error.errors():
        field = ".".join(str(x) for x in item["loc"]) or "config"
        lines.append(f"  - {field}: {item['msg']}")
    return f"{title}:\n" + "\n".join(lines)
