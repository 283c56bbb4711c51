"""Core domain models for goods return notifications.

This module defines the data structures the notification operation works on:
- ReturnNotificationRequest: validated inbound request
- Differences: status transition carried by CHANGE notifications
- Reseller, Contractor, Employee, Status: read-only reference entities
- TemplateData: flat payload handed to message localization
"""

from enum import IntEnum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class NotificationType(IntEnum):
    """Kind of goods return notification."""

    NEW = 1
    CHANGE = 2


class ContractorType(IntEnum):
    """Contractor kinds. Only customers receive return notifications."""

    CUSTOMER = 0


TemplateValue = Union[int, str]
TemplateData = Dict[str, TemplateValue]

# Keys of TemplateData, in the order they are assembled and validated
TEMPLATE_FIELDS = (
    "COMPLAINT_ID",
    "COMPLAINT_NUMBER",
    "CREATOR_ID",
    "CREATOR_NAME",
    "EXPERT_ID",
    "EXPERT_NAME",
    "CLIENT_ID",
    "CLIENT_NAME",
    "CONSUMPTION_ID",
    "CONSUMPTION_NUMBER",
    "AGREEMENT_NUMBER",
    "DATE",
    "DIFFERENCES",
)


class Differences(BaseModel):
    """Status transition of a return position (``{"from": id, "to": id}``)."""

    from_status: int = Field(0, alias="from", description="Previous status id")
    to_status: int = Field(0, alias="to", description="New status id")

    model_config = {"populate_by_name": True, "frozen": True}


class ReturnNotificationRequest(BaseModel):
    """Typed goods return notification request.

    Built by the input validator from the raw request map; field aliases match
    the camelCase wire names of that map.
    """

    reseller_id: int = Field(..., gt=0, alias="resellerId")
    notification_type: int = Field(..., gt=0, alias="notificationType")
    client_id: int = Field(..., gt=0, alias="clientId")
    creator_id: int = Field(..., gt=0, alias="creatorId")
    expert_id: int = Field(..., gt=0, alias="expertId")
    complaint_id: int = Field(0, alias="complaintId")
    complaint_number: str = Field("", alias="complaintNumber")
    consumption_id: int = Field(0, alias="consumptionId")
    consumption_number: str = Field("", alias="consumptionNumber")
    agreement_number: str = Field("", alias="agreementNumber")
    date: str = Field("", alias="date")
    differences: Optional[Differences] = Field(None, alias="differences")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def target_status_id(self) -> int:
        """Status the position moved to, or 0 when there is none."""
        if self.differences is None:
            return 0
        return self.differences.to_status


class Reseller(BaseModel):
    """Reseller on whose behalf notifications are sent."""

    id: int = Field(..., description="Reseller id")
    name: str = Field("", description="Display name")
    email_from: Optional[str] = Field(None, description="Sender address for outgoing emails")
    notification_emails: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Permitted employee addresses keyed by event name",
    )

    model_config = {"frozen": True}

    def emails_by_permit(self, event: str) -> List[str]:
        """Addresses permitted to receive notifications for ``event``."""
        return [email for email in self.notification_emails.get(event, []) if email]


class Contractor(BaseModel):
    """Client (contractor) attached to a complaint."""

    id: int = Field(..., description="Contractor id")
    type: int = Field(ContractorType.CUSTOMER, description="Contractor type")
    name: str = Field("", description="Registered name")
    first_name: Optional[str] = Field(None, description="Contact first name")
    last_name: Optional[str] = Field(None, description="Contact last name")
    email: Optional[str] = Field(None, description="Contact email")
    mobile: Optional[str] = Field(None, description="Contact mobile number")

    model_config = {"frozen": True}

    @field_validator("email", "mobile", "first_name", "last_name")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat whitespace-only contact fields as absent."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def is_customer(self) -> bool:
        return self.type == ContractorType.CUSTOMER


class Employee(BaseModel):
    """Staff member attributed to a complaint (creator or expert)."""

    id: int = Field(..., description="Employee id")
    first_name: str = Field("", description="First name")
    last_name: str = Field("", description="Last name")

    model_config = {"frozen": True}

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Status(BaseModel):
    """Return position status."""

    id: int = Field(..., description="Status id")
    name: str = Field(..., min_length=1, description="Human-readable status name")

    model_config = {"frozen": True}
