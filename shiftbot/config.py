"""
Configuration Management

Pydantic-settings based configuration for the ShiftBoard notification bot.
All settings can be overridden via environment variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables are prefixed with SHIFTBOT_ and are case-insensitive.
    Example: SHIFTBOT_TABLE_NAME=shiftboard-bot
    """

    model_config = SettingsConfigDict(
        env_prefix="SHIFTBOT_",
        env_file=[".env.local", ".env"],  # Try .env.local first
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # DynamoDB Configuration
    table_name: str = Field(
        default="shiftboard-bot",
        description="DynamoDB table holding the cached shift snapshot",
    )
    scan_page_size: int = Field(
        default=100,
        ge=1,
        description="Items requested per DynamoDB Scan page",
    )
    batch_write_size: int = Field(
        default=25,
        ge=1,
        le=25,
        description="Items per BatchWriteItem call (DynamoDB limit: 25)",
    )

    # Lambda Configuration
    worker_function: str = Field(
        default="WorkerFunction",
        description="Function that reconciles fetched shifts against the cache",
    )
    notification_function: str = Field(
        default="NotificationFunction",
        description="Function that emails a single change event",
    )

    # SSM Parameter Store Configuration
    api_parameter_path: str = Field(
        default="/shiftboard/api",
        description="SSM path holding email, password and state_filter",
    )
    notification_parameter_path: str = Field(
        default="/shiftboard/notifications",
        description="SSM path holding sender and recipient",
    )

    # ShiftBoard API Configuration
    shiftboard_base_url: str = Field(
        default="https://m.shiftboard.com/api/v1",
        description="Base URL of the ShiftBoard API",
    )
    shiftboard_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout for ShiftBoard API calls",
    )
    fetch_months_back: int = Field(
        default=1,
        ge=0,
        description="Months before today included in the fetch window",
    )
    fetch_months_ahead: int = Field(
        default=6,
        ge=1,
        description="Months after today included in the fetch window",
    )

    # Notification Configuration
    shift_url_base: str = Field(
        default="https://m.shiftboard.com/onlocationexp/schedules/shifts",
        description="Base URL for links to individual shifts",
    )
    notification_signature: str = Field(
        default="ShiftBoard Bot",
        description="Signature line closing every notification",
    )

    # AWS Configuration
    aws_region: str = Field(
        default="us-west-2",
        validation_alias=AliasChoices("SHIFTBOT_AWS_REGION", "AWS_REGION"),
        description="AWS region; falls back to the Lambda runtime's AWS_REGION",
    )
    aws_endpoint_url: str | None = Field(
        default=None,
        description="Endpoint URL override for all AWS clients",
    )
    aws_sam_local: bool = Field(
        default=False,
        validation_alias=AliasChoices("AWS_SAM_LOCAL", "SHIFTBOT_AWS_SAM_LOCAL"),
        description="Set by `sam local`; routes AWS calls to LocalStack",
    )
    local_endpoint_url: str = Field(
        default="http://host.docker.internal:4566",
        description="LocalStack endpoint used when running under sam local",
    )

    # Application Configuration
    environment: Literal["development", "test", "production"] = Field(
        default="production",
        description="Deployment environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def is_local(self) -> bool:
        """Detect if running against LocalStack."""
        return self.aws_sam_local

    @property
    def endpoint_url(self) -> str | None:
        """Effective AWS endpoint, if any."""
        if self.aws_endpoint_url:
            return self.aws_endpoint_url
        if self.is_local:
            return self.local_endpoint_url
        return None

    @property
    def client_config(self) -> dict:
        """boto3 client/resource configuration."""
        config = {"region_name": self.aws_region}
        if self.endpoint_url:
            config["endpoint_url"] = self.endpoint_url
        return config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are loaded only once per container.
    Construct Settings(...) directly in tests to override.
    """
    return Settings()
