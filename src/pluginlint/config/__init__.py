"""
Configuration module for pluginlint.

Uses pydantic-settings for environment variable and YAML file loading.
"""

from pluginlint.config.settings import (
    Settings,
    get_config_files,
    get_project_config_path,
    get_user_config_path,
)
from pluginlint.config.types import (
    ConfigBase,
    DiscoveryConfig,
    LoggingConfig,
    OutputConfig,
    RulesConfig,
)

__all__ = [
    "ConfigBase",
    "DiscoveryConfig",
    "LoggingConfig",
    "OutputConfig",
    "RulesConfig",
    "Settings",
    "get_config_files",
    "get_project_config_path",
    "get_user_config_path",
]
