"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class EmailConfig(BaseModel):
    """SMTP delivery settings."""

    use_tls: bool = Field(True, description="Use STARTTLS (ignored on port 465)")


class NotificationConfig(BaseModel):
    """Event names used when looking up recipients and tagging sends."""

    employee_permit_event: str = Field(
        "tsGoodsReturn",
        min_length=1,
        description="Event name selecting the reseller's permitted employee addresses",
    )
    event_kind: str = Field(
        "changeReturnStatus",
        min_length=1,
        description="Event kind passed to the email and SMS transports",
    )
    email: EmailConfig = Field(default_factory=EmailConfig)

    @field_validator("employee_permit_event", "event_kind")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped


class SmsConfig(BaseModel):
    """Client SMS channel settings."""

    enabled: bool = Field(True, description="Whether client SMS notifications are attempted")
    request_timeout: int = Field(
        10, ge=1, le=120, description="SMS gateway request timeout (seconds)"
    )


class LocalizationConfig(BaseModel):
    """Where message templates are looked up besides the bundled ones."""

    override_dir: Optional[Path] = Field(
        None, description="Directory searched before the bundled message templates"
    )

    @model_validator(mode="after")
    def validate_override_dir(self):
        if self.override_dir is not None and not self.override_dir.is_dir():
            raise ValueError(
                f"localization.override_dir does not exist or is not a directory: {self.override_dir}"
            )
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the goods return notifier."""

    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    sms: SmsConfig = Field(default_factory=SmsConfig)
    localization: LocalizationConfig = Field(default_factory=LocalizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
