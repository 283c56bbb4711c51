"""Environment variable loading and validation."""

import os
from typing import Optional
from urllib.parse import urlparse

from .exceptions import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite:///./data/return_notifier.db"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Secrets and endpoints read from the process environment."""

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int,
        smtp_user: Optional[str] = None,
        smtp_pass: Optional[str] = None,
        sms_gateway_url: Optional[str] = None,
        sms_gateway_token: Optional[str] = None,
        log_level: Optional[str] = None,
        database_url: Optional[str] = None,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_pass = smtp_pass
        self.sms_gateway_url = sms_gateway_url
        self.sms_gateway_token = sms_gateway_token
        self.log_level = log_level
        self.database_url = database_url or DEFAULT_DATABASE_URL


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Required:
    - SMTP_HOST: SMTP server hostname
    - SMTP_PORT: SMTP server port (1-65535)

    Optional:
    - SMTP_USER / SMTP_PASS: SMTP credentials (both or neither)
    - SMS_GATEWAY_URL: HTTP(S) endpoint accepting SMS jobs
    - SMS_GATEWAY_TOKEN: Bearer token for the SMS gateway
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
    - DATABASE_URL: reference directory database (default: sqlite:///./data/return_notifier.db)

    Returns:
        EnvironmentConfig with validated values

    Raises:
        ConfigurationError: If variables are missing or invalid
    """
    errors = []

    smtp_host = os.getenv("SMTP_HOST")
    smtp_port_str = os.getenv("SMTP_PORT")
    smtp_user = os.getenv("SMTP_USER")
    smtp_pass = os.getenv("SMTP_PASS")
    sms_gateway_url = os.getenv("SMS_GATEWAY_URL")
    sms_gateway_token = os.getenv("SMS_GATEWAY_TOKEN")
    log_level = os.getenv("LOG_LEVEL")
    database_url = os.getenv("DATABASE_URL")

    if not smtp_host:
        errors.append("Missing required environment variable: SMTP_HOST")

    if not smtp_port_str:
        errors.append("Missing required environment variable: SMTP_PORT")

    smtp_port = None
    if smtp_port_str:
        try:
            smtp_port = int(smtp_port_str)
            if smtp_port < 1 or smtp_port > 65535:
                errors.append(
                    f"Invalid SMTP_PORT: {smtp_port}. Must be between 1 and 65535."
                )
        except ValueError:
            errors.append(
                f"Invalid SMTP_PORT: '{smtp_port_str}'. Must be a valid integer."
            )

    if smtp_user and not smtp_pass:
        errors.append(
            "SMTP_USER is set but SMTP_PASS is not. Both must be set for authentication."
        )
    elif smtp_pass and not smtp_user:
        errors.append(
            "SMTP_PASS is set but SMTP_USER is not. Both must be set for authentication."
        )

    if sms_gateway_url:
        parsed = urlparse(sms_gateway_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(
                f"Invalid SMS_GATEWAY_URL: '{sms_gateway_url}'. Must be an http(s) URL."
            )

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Ensure SMTP_HOST and SMTP_PORT are set",
                "Verify SMTP_PORT is a number between 1 and 65535",
            ],
        )

    return EnvironmentConfig(
        smtp_host=smtp_host,
        smtp_port=smtp_port,
        smtp_user=smtp_user,
        smtp_pass=smtp_pass,
        sms_gateway_url=sms_gateway_url,
        sms_gateway_token=sms_gateway_token,
        log_level=log_level,
        database_url=database_url,
    )
