"""Notification delivery for goods return events.

- Localizer: Jinja2 message templates with per-reseller overrides
- MessagesClient / SMTPClient: plain-text email over SMTP
- NotificationManager: client SMS through an HTTP gateway
- DispatchResult: per-channel outcome returned by the operation
"""

from .localization import Localizer
from .messages_client import MessagesClient
from .models import (
    ClientSmsResult,
    DispatchResult,
    EmailPayload,
    InvalidRecipientError,
    NotificationError,
    NotificationTemplateError,
    SMTPDeliveryError,
)
from .sms_client import NotificationManager
from .smtp_client import SMTPClient, normalize_address

__all__ = [
    # Components
    "Localizer",
    "MessagesClient",
    "SMTPClient",
    "NotificationManager",
    # Models and results
    "EmailPayload",
    "DispatchResult",
    "ClientSmsResult",
    # Exceptions
    "NotificationError",
    "NotificationTemplateError",
    "SMTPDeliveryError",
    "InvalidRecipientError",
    # Utilities
    "normalize_address",
]
