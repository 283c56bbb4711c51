"""Configuration management for the goods return notifier."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_app_config, validate_config_file
from .models import (
    AppConfig,
    EmailConfig,
    LocalizationConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    NotificationConfig,
    SmsConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "parse_app_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "NotificationConfig",
    "EmailConfig",
    "SmsConfig",
    "LocalizationConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
