"""Client SMS channel backed by an HTTP SMS gateway.

The gateway receives the reseller, client, event kind, target status and the
template data, and resolves the client's phone number and message text on its
side. This client never raises for delivery problems; every failure is
reported as ``(False, reason)``.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

import requests

from return_notifier.logging import get_logger

logger = get_logger(__name__, component="sms")

SmsOutcome = Tuple[bool, Optional[str]]


class NotificationManager:
    """Sends client SMS notifications through the gateway.

    Attributes:
        gateway_url: Endpoint accepting SMS jobs (None disables sending)
        timeout: Request timeout in seconds
        enabled: Whether SMS sending is switched on
    """

    def __init__(
        self,
        gateway_url: Optional[str],
        token: Optional[str] = None,
        timeout: int = 10,
        enabled: bool = True,
        session: Optional[requests.Session] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.gateway_url = gateway_url
        self.timeout = timeout
        self.enabled = enabled
        self.logger = logger_instance or logger

        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        if token:
            self._session.headers.update({"Authorization": f"Bearer {token}"})

    def send(
        self,
        reseller_id: int,
        client_id: int,
        event: str,
        status_id: int,
        template_data: Mapping[str, Any],
    ) -> SmsOutcome:
        """Ask the gateway to notify a client by SMS.

        Args:
            reseller_id: Reseller sending the notification
            client_id: Client to notify
            event: Event kind (e.g. "changeReturnStatus")
            status_id: Status the return position moved to
            template_data: Flat template payload for the SMS text

        Returns:
            Tuple of (sent, error message or None)
        """
        if not self.enabled:
            return False, "SMS notifications are disabled"

        if not self.gateway_url:
            self.logger.warning(
                "SMS gateway is not configured",
                extra={"event": "sms.send.skipped", "client_id": client_id},
            )
            return False, "SMS gateway is not configured"

        body = {
            "resellerId": reseller_id,
            "clientId": client_id,
            "event": event,
            "statusId": status_id,
            "templateData": dict(template_data),
        }

        try:
            response = self._session.post(self.gateway_url, json=body, timeout=self.timeout)
        except requests.exceptions.Timeout:
            error = f"SMS gateway timed out after {self.timeout} seconds"
            self._log_failure(error, client_id, "Timeout")
            return False, error
        except requests.exceptions.RequestException as e:
            error = f"SMS gateway request failed: {e}"
            self._log_failure(error, client_id, type(e).__name__)
            return False, error

        if response.status_code >= 400:
            error = f"SMS gateway returned HTTP {response.status_code}"
            self._log_failure(error, client_id, "HTTPError")
            return False, error

        sent, error = self._parse_response(response)

        if sent:
            self.logger.info(
                f"SMS accepted for client {client_id}",
                extra={
                    "event": "sms.send.success",
                    "client_id": client_id,
                    "status_id": status_id,
                },
            )
        else:
            self._log_failure(error or "SMS gateway rejected the message", client_id, "Rejected")

        return sent, error

    @staticmethod
    def _parse_response(response: requests.Response) -> SmsOutcome:
        """Read ``{"sent": bool, "error": str}``; a non-JSON 2xx counts as sent."""
        try:
            data: Dict[str, Any] = response.json()
        except ValueError:
            return True, None

        if not isinstance(data, dict):
            return True, None

        error = data.get("error") or None
        return bool(data.get("sent", error is None)), (str(error) if error else None)

    def _log_failure(self, error: str, client_id: int, error_type: str) -> None:
        self.logger.warning(
            f"SMS not sent for client {client_id}: {error}",
            extra={
                "event": "sms.send.failure",
                "client_id": client_id,
                "error_type": error_type,
            },
        )
