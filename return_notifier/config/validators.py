"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect the raw configuration for settings that are valid but suspicious.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    sms = config_dict.get("sms", {})
    if isinstance(sms, dict) and sms.get("enabled") is False:
        warning_messages.append(
            "Client SMS notifications are disabled; clientSms.sent will always be false"
        )

    notifications = config_dict.get("notifications", {})
    if isinstance(notifications, dict):
        permit_event = notifications.get("employee_permit_event")
        if isinstance(permit_event, str) and permit_event.strip() not in ("", "tsGoodsReturn"):
            warning_messages.append(
                f"employee_permit_event overridden to '{permit_event.strip()}'; "
                "resellers must have addresses permitted for this event"
            )

        email = notifications.get("email", {})
        if isinstance(email, dict) and email.get("use_tls") is False:
            warning_messages.append("SMTP TLS is disabled; emails are sent in clear text")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
