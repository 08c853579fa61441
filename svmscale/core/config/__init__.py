"""
Configuration management package for svmscale.

Domain-specific configuration classes are composed into a root Settings
class loaded from `SVMSCALE_*` environment variables.
"""

from svmscale.core.config.monitoring import MonitoringConfig
from svmscale.core.config.scaling import ScalingConfig
from svmscale.core.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "ScalingConfig",
    "MonitoringConfig",
]
