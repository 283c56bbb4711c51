"""Input validation for goods return notification requests."""

import math
import re
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from return_notifier.domain.models import Differences, ReturnNotificationRequest

from .exceptions import InvalidRequest

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Largest id the reference store can hold (signed 64-bit INTEGER)
MAX_ID = 2**63 - 1


def parse_request(data: Mapping[str, Any]) -> ReturnNotificationRequest:
    """Validate the raw request map and build a typed request.

    Values are coerced leniently, the way form-encoded input arrives: numeric
    strings become ints, missing or non-numeric ids become 0 and missing
    strings become "". Only the identifiers are checked here; the remaining
    fields are checked once the template data is assembled.

    Raises:
        InvalidRequest: If resellerId, notificationType, clientId, creatorId or
            expertId is empty/zero or out of range, or differences is not an
            object
    """
    reseller_id = as_int(data.get("resellerId"))
    if reseller_id <= 0:
        raise InvalidRequest("Empty resellerId")

    notification_type = as_int(data.get("notificationType"))
    if notification_type <= 0:
        raise InvalidRequest("Empty notificationType")

    client_id = as_int(data.get("clientId"))
    creator_id = as_int(data.get("creatorId"))
    expert_id = as_int(data.get("expertId"))
    if client_id <= 0 or creator_id <= 0 or expert_id <= 0:
        raise InvalidRequest("Missing required data")

    for field, value in (
        ("resellerId", reseller_id),
        ("notificationType", notification_type),
        ("clientId", client_id),
        ("creatorId", creator_id),
        ("expertId", expert_id),
    ):
        if value > MAX_ID:
            raise InvalidRequest(f"Invalid {field}")

    try:
        return ReturnNotificationRequest(
            reseller_id=reseller_id,
            notification_type=notification_type,
            client_id=client_id,
            creator_id=creator_id,
            expert_id=expert_id,
            complaint_id=as_int(data.get("complaintId")),
            complaint_number=as_str(data.get("complaintNumber")),
            consumption_id=as_int(data.get("consumptionId")),
            consumption_number=as_str(data.get("consumptionNumber")),
            agreement_number=as_str(data.get("agreementNumber")),
            date=as_str(data.get("date")),
            differences=_parse_differences(data.get("differences")),
        )
    except ValidationError as e:
        raise InvalidRequest(f"Malformed request: {e}") from e


def _parse_differences(raw: Any) -> Optional[Differences]:
    if not raw:
        return None

    if not isinstance(raw, Mapping):
        raise InvalidRequest("differences must be an object with 'from' and 'to'")

    return Differences(
        from_status=_status_id(raw.get("from")), to_status=_status_id(raw.get("to"))
    )


def _status_id(value: Any) -> int:
    # Ids the store cannot hold are treated as unknown statuses
    status_id = as_int(value)
    return status_id if -MAX_ID - 1 <= status_id <= MAX_ID else 0


def as_int(value: Any) -> int:
    """Coerce a request value to int; anything without a leading number is 0."""
    if value is None:
        return 0
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def as_str(value: Any) -> str:
    """Coerce a request value to str; None becomes an empty string."""
    if value is None:
        return ""
    return str(value)
