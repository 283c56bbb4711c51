"""Domain models for the goods return notifier."""

from .models import (
    TEMPLATE_FIELDS,
    Contractor,
    ContractorType,
    Differences,
    Employee,
    NotificationType,
    Reseller,
    ReturnNotificationRequest,
    Status,
    TemplateData,
)

__all__ = [
    "ReturnNotificationRequest",
    "Differences",
    "NotificationType",
    "Reseller",
    "Contractor",
    "ContractorType",
    "Employee",
    "Status",
    "TemplateData",
    "TEMPLATE_FIELDS",
]
