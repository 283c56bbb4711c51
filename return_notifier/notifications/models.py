"""Data models and exceptions for notification delivery.

This module defines the outgoing email payload, the per-call dispatch result,
and the exceptions raised by localization and the transports.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


class NotificationError(Exception):
    """Base exception for notification-related errors."""

    pass


class NotificationTemplateError(NotificationError):
    """Raised when a message template is missing or fails to render."""

    pass


class SMTPDeliveryError(NotificationError):
    """Raised when the SMTP server rejects or cannot receive a message."""

    pass


class InvalidRecipientError(NotificationError):
    """Raised when an email address fails validation before sending."""

    pass


@dataclass(frozen=True)
class EmailPayload:
    """One outgoing email as handed to MessagesClient.

    Attributes:
        email_from: Sender address (reseller's email-from)
        email_to: Single recipient address
        subject: Localized subject line
        message: Localized plain text body
    """

    email_from: str
    email_to: str
    subject: str
    message: str


@dataclass
class ClientSmsResult:
    """Outcome of the client SMS channel."""

    sent: bool = False
    error_message: str = ""


@dataclass
class DispatchResult:
    """Per-channel outcome of one goods return notification.

    Created fresh for every operation call and filled in as each channel
    completes. ``employee_email_sent`` turns true on the first successful
    employee send and is never reset by later failures.
    """

    employee_email_sent: bool = False
    client_email_sent: bool = False
    client_sms: ClientSmsResult = field(default_factory=ClientSmsResult)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "employeeEmailSent": self.employee_email_sent,
            "clientEmailSent": self.client_email_sent,
            "clientSms": {
                "sent": self.client_sms.sent,
                "errorMessage": self.client_sms.error_message,
            },
        }
