"""Goods return notification operation."""

import time
from typing import Any, Dict, Mapping

from return_notifier.domain.ports import ReferenceDirectory
from return_notifier.logging import get_logger
from return_notifier.logging.context import log_context
from return_notifier.notifications.localization import Localizer
from return_notifier.notifications.models import DispatchResult, NotificationTemplateError

from .base import ReferencesOperation
from .differences import format_differences
from .dispatcher import NotificationDispatcher
from .exceptions import InvalidRequest, OperationError
from .resolver import EntityResolver
from .template_data import build_template_data, validate_template_data
from .validation import parse_request

logger = get_logger(__name__, component="operation")


class TsReturnOperation(ReferencesOperation):
    """Notify employees and the client about a goods return.

    Runs validation, entity resolution, difference formatting and template
    assembly. Any failure in those stages raises an OperationError before a
    single message is sent. Dispatch itself never raises.
    """

    def __init__(
        self,
        request: Mapping[str, Any],
        directory: ReferenceDirectory,
        localizer: Localizer,
        dispatcher: NotificationDispatcher,
    ):
        """Initialize the operation.

        Args:
            request: Request envelope; the payload lives under ``"data"``
            directory: Reference data lookups
            localizer: Renders the DIFFERENCES text
            dispatcher: Sends the notifications
        """
        self.request = request
        self.directory = directory
        self.localizer = localizer
        self.dispatcher = dispatcher
        self.resolver = EntityResolver(directory)

    def get_request_data(self, name: str) -> Dict[str, Any]:
        """Return one section of the request envelope.

        Raises:
            InvalidRequest: If the section is present but not an object
        """
        section = self.request.get(name)
        if section is None:
            return {}
        if not isinstance(section, Mapping):
            raise InvalidRequest(f"Request section '{name}' must be an object")
        return dict(section)

    def do_operation(self) -> DispatchResult:
        """Run the operation and report per-channel delivery.

        Raises:
            OperationError: On invalid input, unknown references or empty
                template data
            NotificationTemplateError: If the DIFFERENCES text cannot be
                rendered
        """
        start_time = time.time()

        with log_context(operation="tsGoodsReturn"):
            try:
                request = parse_request(self.get_request_data("data"))

                with log_context(reseller_id=request.reseller_id, client_id=request.client_id):
                    logger.info(
                        "Processing goods return notification",
                        extra={
                            "event": "operation.started",
                            "notification_type": request.notification_type,
                            "complaint_id": request.complaint_id,
                        },
                    )

                    entities = self.resolver.resolve(request)
                    differences = format_differences(request, self.localizer, self.directory)
                    template_data = build_template_data(request, entities, differences)
                    validate_template_data(template_data)

                    result = self.dispatcher.dispatch(request, entities, template_data)
            except OperationError as e:
                logger.warning(
                    f"Goods return notification rejected: {e.message}",
                    extra={
                        "event": "operation.rejected",
                        "error_type": type(e).__name__,
                        "status_code": e.status_code,
                    },
                )
                raise
            except NotificationTemplateError as e:
                logger.error(
                    f"Goods return notification failed: {e}",
                    extra={"event": "operation.failed", "error_type": type(e).__name__},
                )
                raise

            logger.info(
                "Goods return notification completed",
                extra={
                    "event": "operation.completed",
                    "duration_seconds": round(time.time() - start_time, 3),
                    **result.to_dict(),
                },
            )
            return result
