"""Logging configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings


class MonitoringConfig(BaseSettings):
    """Logging configuration.

    Attributes:
        log_level: Logging level.
        service_name: Service name attached to every log entry.
    """

    log_level: str = Field(
        default="WARNING",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    service_name: str = Field(
        default="svm-scale",
        description="Service name attached to log entries",
    )

    class Config:
        """Pydantic configuration."""

        env_prefix = "SVMSCALE_"
