"""Narrative text describing what changed on a return position."""

from return_notifier.domain.models import NotificationType, ReturnNotificationRequest
from return_notifier.domain.ports import ReferenceDirectory
from return_notifier.notifications.localization import (
    NEW_POSITION_ADDED,
    POSITION_STATUS_HAS_CHANGED,
    Localizer,
)


def format_differences(
    request: ReturnNotificationRequest,
    localizer: Localizer,
    directory: ReferenceDirectory,
) -> str:
    """Build the DIFFERENCES text for a request.

    NEW renders the "new position added" message. CHANGE with differences
    renders the "status changed" message with both status names. Anything else
    yields an empty string, which template validation later rejects.
    """
    if request.notification_type == NotificationType.NEW:
        return localizer.localize(NEW_POSITION_ADDED, None, request.reseller_id)

    if request.notification_type == NotificationType.CHANGE and request.differences is not None:
        return localizer.localize(
            POSITION_STATUS_HAS_CHANGED,
            {
                "FROM": directory.get_status_name(request.differences.from_status),
                "TO": directory.get_status_name(request.differences.to_status),
            },
            request.reseller_id,
        )

    return ""
