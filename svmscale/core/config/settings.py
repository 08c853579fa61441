"""
Root Settings class composing all domain-specific configurations.

This module provides the main Settings class that brings together the
scaling and monitoring configuration into a single settings object.
"""

from functools import lru_cache
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from svmscale.core.config.monitoring import MonitoringConfig
from svmscale.core.config.scaling import ScalingConfig


class Settings(BaseSettings):
    """Main settings class composing all domain-specific configurations.

    Settings are loaded from environment variables prefixed with
    `SVMSCALE_` (e.g. `SVMSCALE_LOWER=0`, `SVMSCALE_LOG_LEVEL=DEBUG`) and from
    an optional `.env` file.

    Attributes:
        scaling: Target interval and output formatting.
        monitoring: Logging configuration.
    """

    scaling: ScalingConfig = Field(default_factory=ScalingConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    @model_validator(mode="before")
    @classmethod
    def map_flat_fields(cls, values: Any) -> Any:
        """Map flat keyword arguments to nested domain configurations.

        This allows `Settings(lower=0, log_level="DEBUG")` as a shorthand for
        the nested form.
        """
        if not isinstance(values, dict):
            return values

        flat_map = {
            "lower": ("scaling", "lower"),
            "upper": ("scaling", "upper"),
            "value_precision": ("scaling", "value_precision"),
            "range_file_header": ("scaling", "range_file_header"),
            "log_level": ("monitoring", "log_level"),
            "service_name": ("monitoring", "service_name"),
        }

        for flat_key, (domain, field) in flat_map.items():
            if flat_key in values:
                value = values.pop(flat_key)
                if domain not in values:
                    values[domain] = {}
                if isinstance(values[domain], dict):
                    values[domain][field] = value

        return values

    @property
    def log_level(self) -> str:
        return self.monitoring.log_level

    class Config:
        """Pydantic configuration options for the Settings class."""

        env_prefix = "SVMSCALE_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Returns the cached application settings.

    Returns:
        The singleton instance of the application settings.
    """
    return Settings()
