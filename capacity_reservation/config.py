"""Configuration management for the capacity reservation handler.

Settings are read from environment variables (or a .env file) with
defaults suitable for running inside the orchestration host.
"""

from typing import Optional
from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Handler settings loaded from environment variables.

    The callback delay and stabilization limit shape the suspend/resume
    protocol; the boto settings apply to every EC2 client the handler
    creates.
    """

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="LOG_LEVEL"
    )

    # AWS Configuration
    aws_region: str = Field(
        default="us-east-1",
        description="Region used when the host does not send one",
        validation_alias=AliasChoices("AWS_REGION", "AWS_DEFAULT_REGION")
    )
    boto_max_attempts: int = Field(
        default=3,
        description="Maximum botocore attempts per EC2 call",
        validation_alias="BOTO_MAX_ATTEMPTS",
        ge=1,
    )
    boto_retry_mode: str = Field(
        default="adaptive",
        description="botocore retry mode (legacy, standard, adaptive)",
        validation_alias="BOTO_RETRY_MODE"
    )

    # Stabilization
    callback_delay_seconds: int = Field(
        default=30,
        description="Delay the host should wait before re-invoking a stabilizing create",
        validation_alias="CALLBACK_DELAY_SECONDS",
        ge=0,
    )
    max_stabilization_attempts: int = Field(
        default=60,
        description="Stabilization checks allowed before a create is failed",
        validation_alias="MAX_STABILIZATION_ATTEMPTS",
        ge=1,
    )

    # CloudWatch Configuration
    cloudwatch_enabled: bool = Field(
        default=False,
        description="Ship handler logs to CloudWatch Logs",
        validation_alias="CLOUDWATCH_ENABLED"
    )
    cloudwatch_log_group: str = Field(
        default="/aws/cloudformation/capacity-reservation",
        description="CloudWatch log group name",
        validation_alias="CLOUDWATCH_LOG_GROUP"
    )
    cloudwatch_log_stream: Optional[str] = Field(
        default=None,
        description="CloudWatch log stream name (auto-generated if not set)",
        validation_alias="CLOUDWATCH_LOG_STREAM"
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """
    Load settings from environment variables and .env file.

    Returns:
        Fresh Settings instance
    """
    return Settings()


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def settings() -> Settings:
    """
    Get the global settings instance.

    Creates the settings instance on first call and caches it.

    Returns:
        Global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
