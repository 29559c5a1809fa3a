"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from resolver_retry.domain.config.retry import RetryConfig


class AppConfig(BaseModel):
    """Main application configuration.

    Attributes:
        directive_name: Schema directive name used in declarations and context keys
        retry: Default retry configuration for every decorated field
    """

    directive_name: str = Field("retry", pattern=r"^[_A-Za-z][_0-9A-Za-z]*$")
    retry: RetryConfig = Field(default_factory=RetryConfig)

    model_config = ConfigDict(
        validate_assignment=True,  # Validate on attribute assignment
        extra="forbid",  # Reject unknown fields
        json_schema_extra={
            "example": {
                "directive_name": "retry",
                "retry": {
                    "retries": 3,
                    "factor": 2,
                    "minTimeout": 100,
                    "maxTimeout": 2000,
                    "randomize": False,
                },
            }
        },
    )
