"""SMTP client wrapper for email delivery.

Thin wrapper around smtplib handling TLS/SSL negotiation, optional
authentication and connection cleanup.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Callable, Optional

from email_validator import EmailNotValidError, validate_email

from return_notifier.config.environment import EnvironmentConfig

from .models import InvalidRecipientError, SMTPDeliveryError

logger = logging.getLogger(__name__)

IMPLICIT_TLS_PORT = 465


class SMTPClient:
    """Sends fully built EmailMessage objects over SMTP.

    The smtplib constructors are injectable so tests can substitute mocks.
    """

    def __init__(
        self,
        smtp_factory: Optional[Callable] = None,
        smtp_ssl_factory: Optional[Callable] = None,
    ):
        self.smtp_factory = smtp_factory or smtplib.SMTP
        self.smtp_ssl_factory = smtp_ssl_factory or smtplib.SMTP_SSL

    def send(
        self,
        message: EmailMessage,
        env_config: EnvironmentConfig,
        use_tls: bool = True,
    ) -> None:
        """Deliver one message.

        Port 465 uses implicit TLS; any other port upgrades with STARTTLS when
        ``use_tls`` is set. Credentials are used only when both are present.

        Args:
            message: Fully constructed EmailMessage
            env_config: Environment configuration with SMTP settings
            use_tls: Whether to upgrade plain connections with STARTTLS

        Raises:
            SMTPDeliveryError: If delivery fails for any reason
        """
        smtp = None
        try:
            if env_config.smtp_port == IMPLICIT_TLS_PORT:
                logger.debug(
                    f"Connecting to {env_config.smtp_host}:{env_config.smtp_port} with implicit TLS"
                )
                smtp = self.smtp_ssl_factory(
                    env_config.smtp_host,
                    env_config.smtp_port,
                    context=ssl.create_default_context(),
                )
            else:
                logger.debug(f"Connecting to {env_config.smtp_host}:{env_config.smtp_port}")
                smtp = self.smtp_factory(env_config.smtp_host, env_config.smtp_port)

                if use_tls:
                    logger.debug("Upgrading connection with STARTTLS")
                    smtp.starttls(context=ssl.create_default_context())

            if env_config.smtp_user and env_config.smtp_pass:
                logger.debug(f"Authenticating as {env_config.smtp_user}")
                smtp.login(env_config.smtp_user, env_config.smtp_pass)

            smtp.send_message(message)
            logger.debug(f"Message sent successfully to {message['To']}")

        except smtplib.SMTPException as e:
            error_msg = f"SMTP error during message delivery: {e}"
            logger.error(error_msg)
            raise SMTPDeliveryError(error_msg) from e
        except OSError as e:
            error_msg = f"Network error during SMTP connection: {e}"
            logger.error(error_msg)
            raise SMTPDeliveryError(error_msg) from e
        except Exception as e:
            error_msg = f"Unexpected error during SMTP delivery: {e}"
            logger.error(error_msg)
            raise SMTPDeliveryError(error_msg) from e
        finally:
            if smtp is not None:
                try:
                    smtp.quit()
                except Exception as e:
                    logger.warning(f"Error closing SMTP connection: {e}")


def normalize_address(address: str) -> str:
    """Validate one email address and return its normalized form.

    Raises:
        InvalidRecipientError: If the address is empty or malformed
    """
    candidate = (address or "").strip()
    if not candidate:
        raise InvalidRecipientError("Email address is empty")

    try:
        return validate_email(candidate, check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise InvalidRecipientError(f"Invalid email address '{candidate}': {e}") from e
