"""Per-channel notification dispatch for goods returns.

Three channels are attempted in order: employee email, client email and
client SMS. Each is independent. A failing channel is logged and recorded in
the DispatchResult; it never raises and never stops the next channel.
"""

import logging
from typing import Optional

from return_notifier.domain.models import NotificationType, ReturnNotificationRequest, TemplateData
from return_notifier.logging import get_logger
from return_notifier.logging.context import log_context
from return_notifier.notifications.localization import (
    CLIENT_EMAIL_BODY,
    CLIENT_EMAIL_SUBJECT,
    EMPLOYEE_EMAIL_BODY,
    EMPLOYEE_EMAIL_SUBJECT,
    Localizer,
)
from return_notifier.notifications.messages_client import MessagesClient
from return_notifier.notifications.models import DispatchResult, EmailPayload, NotificationError
from return_notifier.notifications.sms_client import NotificationManager

from .resolver import ResolvedEntities

logger = get_logger(__name__, component="dispatch")

DEFAULT_PERMIT_EVENT = "tsGoodsReturn"
DEFAULT_EVENT_KIND = "changeReturnStatus"


class NotificationDispatcher:
    """Sends the employee email, client email and client SMS for one return."""

    def __init__(
        self,
        localizer: Localizer,
        messages_client: MessagesClient,
        sms_manager: NotificationManager,
        permit_event: str = DEFAULT_PERMIT_EVENT,
        event_kind: str = DEFAULT_EVENT_KIND,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize the dispatcher.

        Args:
            localizer: Renders subjects and bodies
            messages_client: Email transport
            sms_manager: SMS transport
            permit_event: Event name selecting the reseller's employee addresses
            event_kind: Event kind passed to both transports
            logger_instance: Logger instance (uses module logger if None)
        """
        self.localizer = localizer
        self.messages_client = messages_client
        self.sms_manager = sms_manager
        self.permit_event = permit_event
        self.event_kind = event_kind
        self.logger = logger_instance or logger

    def dispatch(
        self,
        request: ReturnNotificationRequest,
        entities: ResolvedEntities,
        template_data: TemplateData,
    ) -> DispatchResult:
        """Attempt every applicable channel and report what was sent.

        The client channels only apply to CHANGE notifications that carry a
        target status.
        """
        result = DispatchResult()

        with log_context(channel="employee_email"):
            self._notify_employees(entities, template_data, result)

        target_status_id = request.target_status_id
        if request.notification_type == NotificationType.CHANGE and target_status_id:
            with log_context(channel="client_email"):
                self._notify_client_by_email(entities, template_data, target_status_id, result)

            with log_context(channel="client_sms"):
                self._notify_client_by_sms(entities, template_data, target_status_id, result)
        else:
            self.logger.debug(
                "Client channels skipped: no status change to report",
                extra={"event": "dispatch.client.skipped"},
            )

        self.logger.info(
            "Notification dispatch complete",
            extra={"event": "dispatch.completed", **result.to_dict()},
        )
        return result

    def _notify_employees(
        self,
        entities: ResolvedEntities,
        template_data: TemplateData,
        result: DispatchResult,
    ) -> None:
        reseller = entities.reseller
        email_from = reseller.email_from
        recipients = reseller.emails_by_permit(self.permit_event)

        if not email_from or not recipients:
            self.logger.info(
                "Employee email skipped: sender or permitted recipients missing",
                extra={
                    "event": "dispatch.employee_email.skipped",
                    "has_email_from": bool(email_from),
                    "recipient_count": len(recipients),
                },
            )
            return

        try:
            subject = self.localizer.localize(EMPLOYEE_EMAIL_SUBJECT, template_data, reseller.id)
            body = self.localizer.localize(EMPLOYEE_EMAIL_BODY, template_data, reseller.id)
        except NotificationError as e:
            self._log_failure("employee_email", e)
            return

        for recipient in recipients:
            payload = EmailPayload(
                email_from=email_from, email_to=recipient, subject=subject, message=body
            )
            try:
                self.messages_client.send_messages([payload], reseller.id, self.event_kind)
            except NotificationError as e:
                # Earlier successes stand; the flag is never reset
                self._log_failure("employee_email", e, recipient=recipient)
                continue
            result.employee_email_sent = True

    def _notify_client_by_email(
        self,
        entities: ResolvedEntities,
        template_data: TemplateData,
        target_status_id: int,
        result: DispatchResult,
    ) -> None:
        reseller = entities.reseller
        client = entities.client

        if not reseller.email_from or not client.email:
            self.logger.info(
                "Client email skipped: sender or client address missing",
                extra={
                    "event": "dispatch.client_email.skipped",
                    "has_email_from": bool(reseller.email_from),
                    "has_client_email": bool(client.email),
                },
            )
            return

        try:
            payload = EmailPayload(
                email_from=reseller.email_from,
                email_to=client.email,
                subject=self.localizer.localize(CLIENT_EMAIL_SUBJECT, template_data, reseller.id),
                message=self.localizer.localize(CLIENT_EMAIL_BODY, template_data, reseller.id),
            )
            self.messages_client.send_messages(
                [payload],
                reseller.id,
                self.event_kind,
                client_id=client.id,
                status_id=target_status_id,
            )
        except NotificationError as e:
            self._log_failure("client_email", e, recipient=client.email)
            return

        result.client_email_sent = True

    def _notify_client_by_sms(
        self,
        entities: ResolvedEntities,
        template_data: TemplateData,
        target_status_id: int,
        result: DispatchResult,
    ) -> None:
        client = entities.client

        if not client.mobile:
            self.logger.info(
                "Client SMS skipped: no mobile number",
                extra={"event": "dispatch.client_sms.skipped"},
            )
            return

        sent, error = self.sms_manager.send(
            entities.reseller.id,
            client.id,
            self.event_kind,
            target_status_id,
            template_data,
        )

        if sent:
            result.client_sms.sent = True
        if error:
            result.client_sms.error_message = error

    def _log_failure(self, channel: str, error: Exception, **extra) -> None:
        self.logger.warning(
            f"{channel} notification failed: {error}",
            extra={
                "event": f"dispatch.{channel}.failure",
                "error_type": type(error).__name__,
                **extra,
            },
        )
