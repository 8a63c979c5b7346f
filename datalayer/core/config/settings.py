"""Application settings.

All defaults are defined here - no external system owns defaults.
Uses Pydantic Settings for automatic env var loading:

    DATALAYER_LOCATION_SEPARATOR=" / "
    DATALAYER_DEPENDENCY_POLICY=omit
    DATALAYER_SCHEMA_PATHS='["schemas/page.yml", "schemas/product.yml"]'
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from datalayer.core.config.enums import DependencyPolicy, Environment


class Settings(BaseSettings):
    """Datalayer settings with automatic env var loading."""

    model_config = SettingsConfigDict(
        env_prefix="DATALAYER_",
        env_file=".env",
        extra="ignore",
    )

    ENVIRONMENT: Environment = Field(Environment.LOCAL, description="Deployment environment")
    LOG_LEVEL: str = Field("INFO", description="Level for the package logger")

    # Location tracking
    LOCATION_SEPARATOR: str = Field(" > ", description="Joins location names into a path")

    # Validation
    DEPENDENCY_POLICY: DependencyPolicy = Field(
        DependencyPolicy.REJECT,
        description="Reject the record or omit the field when depends_on is not met",
    )
    SCHEMA_PATHS: List[Path] = Field(
        default_factory=list, description="YAML/JSON schema files loaded at startup"
    )

    # Data layer
    HISTORY_SIZE: int = Field(0, description="Pushes kept for debugging (0 disables)")
    LOG_PUSHES: bool = Field(False, description="Attach the logging adapter")

    # PostHog adapter
    ANALYTICS_ENABLED: bool = Field(False, description="Forward records to PostHog")
    POSTHOG_API_KEY: Optional[str] = None
    POSTHOG_HOST: str = "https://app.posthog.com"
    POSTHOG_DISTINCT_ID_FIELD: str = Field(
        "userId", description="Record field used as the PostHog distinct_id"
    )
    POSTHOG_ANONYMOUS_ID: str = Field(
        "anonymous", description="distinct_id used when the record carries none"
    )

    @model_validator(mode="after")
    def validate_config_logic(self) -> "Settings":
        """Validate that setting combinations make sense."""
        if not self.LOCATION_SEPARATOR:
            raise ValueError("LOCATION_SEPARATOR must not be empty")

        if self.HISTORY_SIZE < 0:
            raise ValueError(f"HISTORY_SIZE must be >= 0, got {self.HISTORY_SIZE}")

        if self.ANALYTICS_ENABLED and not self.POSTHOG_API_KEY:
            raise ValueError("ANALYTICS_ENABLED requires POSTHOG_API_KEY")

        return self

    @property
    def posthog_enabled(self) -> bool:
        """Whether the PostHog adapter should be attached."""
        return self.ANALYTICS_ENABLED and self.ENVIRONMENT != Environment.LOCAL
