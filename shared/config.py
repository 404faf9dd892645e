"""
Shared configuration management for the access control layer.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AccessControlConfig(BaseSettings):
    """Configuration for the access control registry."""

    model_config = SettingsConfigDict(
        env_prefix="ACCESS_CONTROL_",
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    service_name: str = Field(default="access_control")
    log_level: str = Field(default="info")
    json_logs: bool = Field(default=True)

    # Observability
    enable_metrics: bool = Field(default=False)


def get_config(**overrides) -> AccessControlConfig:
    """Get access control configuration, environment first then overrides."""
    return AccessControlConfig(**overrides)
