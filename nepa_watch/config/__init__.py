"""Configuration management for NEPA Watch."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AppConfig,
    BrowserConfig,
    FeedConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    OutputConfig,
    QueryConfig,
    SearchDefinition,
    UpstreamConfig,
    parse_adv_search_from_url,
)

__all__ = [
    # Loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "QueryConfig",
    "SearchDefinition",
    "FeedConfig",
    "OutputConfig",
    "UpstreamConfig",
    "BrowserConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "parse_adv_search_from_url",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
