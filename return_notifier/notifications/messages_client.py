"""Email transport used by the notification dispatcher."""

import logging
from email.message import EmailMessage
from email.utils import formatdate, make_msgid
from typing import Iterable, Optional

from return_notifier.config.environment import EnvironmentConfig
from return_notifier.logging import get_logger

from .models import EmailPayload
from .smtp_client import SMTPClient, normalize_address

logger = get_logger(__name__, component="email")


class MessagesClient:
    """Turns EmailPayloads into plain-text messages and delivers them over SMTP.

    Each payload is sent on its own connection, in order. The first failure
    stops the batch and propagates to the caller.
    """

    def __init__(
        self,
        env_config: EnvironmentConfig,
        smtp_client: Optional[SMTPClient] = None,
        use_tls: bool = True,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.env_config = env_config
        self.smtp_client = smtp_client or SMTPClient()
        self.use_tls = use_tls
        self.logger = logger_instance or logger

    def send_messages(
        self,
        messages: Iterable[EmailPayload],
        reseller_id: int,
        event: str,
        client_id: Optional[int] = None,
        status_id: Optional[int] = None,
    ) -> None:
        """Send every payload in ``messages``.

        Args:
            messages: Payloads to deliver
            reseller_id: Reseller the messages are sent for
            event: Event kind, recorded in headers and logs
            client_id: Client the message concerns, for client-facing mail
            status_id: Target status id, for status change mail

        Raises:
            InvalidRecipientError: If a sender or recipient address is invalid
            SMTPDeliveryError: If the SMTP server rejects a message
        """
        for payload in messages:
            message = self.build_message(payload, reseller_id, event)
            self.smtp_client.send(message, self.env_config, self.use_tls)

            self.logger.info(
                f"Email sent to {message['To']}",
                extra={
                    "event": "email.send.success",
                    "notification_event": event,
                    "reseller_id": reseller_id,
                    "client_id": client_id,
                    "status_id": status_id,
                    "recipient": message["To"],
                },
            )

    @staticmethod
    def build_message(payload: EmailPayload, reseller_id: int, event: str) -> EmailMessage:
        """Build the EmailMessage for one payload, validating both addresses."""
        sender = normalize_address(payload.email_from)
        recipient = normalize_address(payload.email_to)

        message = EmailMessage()
        message["Subject"] = payload.subject
        message["From"] = sender
        message["To"] = recipient
        message["Date"] = formatdate(localtime=False)
        message["Message-ID"] = make_msgid(domain=sender.rsplit("@", 1)[-1])
        message["X-Notification-Event"] = event
        message["X-Reseller-Id"] = str(reseller_id)
        message.set_content(payload.message)
        return message
