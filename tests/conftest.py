"""Shared fixtures for goods return notifier tests."""

import pytest

from return_notifier.domain.models import Contractor, Employee, Reseller
from return_notifier.logging.context import clear_log_context
from return_notifier.notifications.localization import Localizer

from tests.helpers import InMemoryDirectory, RecordingMessagesClient, StubSmsManager

# Ids shared by the reference fixtures. The client id equals the reseller id
# because the resolver requires it.
RESELLER_ID = 7
CREATOR_ID = 21
EXPERT_ID = 22
STATUS_OPEN = 1
STATUS_APPROVED = 2


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock required environment variables for testing."""
    monkeypatch.setenv("SMTP_HOST", "smtp.test.com")
    monkeypatch.setenv("SMTP_PORT", "587")
    monkeypatch.setenv("SMTP_USER", "user@test.com")
    monkeypatch.setenv("SMTP_PASS", "testpass123")
    for name in ("SMS_GATEWAY_URL", "SMS_GATEWAY_TOKEN", "LOG_LEVEL", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def clean_log_context():
    """Keep context fields from leaking between tests."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def reseller():
    return Reseller(
        id=RESELLER_ID,
        name="Acme Returns",
        email_from="returns@acme.com",
        notification_emails={
            "tsGoodsReturn": ["desk@acme.com", "manager@acme.com"],
            "otherEvent": ["other@acme.com"],
        },
    )


@pytest.fixture
def client():
    return Contractor(
        id=RESELLER_ID,
        type=0,
        name="Doe Trading",
        first_name="Jane",
        last_name="Doe",
        email="jane@example.com",
        mobile="+15550100",
    )


@pytest.fixture
def creator():
    return Employee(id=CREATOR_ID, first_name="Ann", last_name="Lee")


@pytest.fixture
def expert():
    return Employee(id=EXPERT_ID, first_name="Bob", last_name="Stone")


@pytest.fixture
def directory(reseller, client, creator, expert):
    return InMemoryDirectory(
        sellers=[reseller],
        contractors=[client],
        employees=[creator, expert],
        statuses={STATUS_OPEN: "Open", STATUS_APPROVED: "Approved"},
    )


@pytest.fixture
def localizer():
    return Localizer()


@pytest.fixture
def messages_client():
    return RecordingMessagesClient()


@pytest.fixture
def sms_manager():
    return StubSmsManager()


@pytest.fixture
def change_payload():
    """A valid CHANGE request payload moving a position from Open to Approved."""
    return {
        "resellerId": RESELLER_ID,
        "notificationType": 2,
        "clientId": RESELLER_ID,
        "creatorId": CREATOR_ID,
        "expertId": EXPERT_ID,
        "complaintId": 501,
        "complaintNumber": "RT-501",
        "consumptionId": 900,
        "consumptionNumber": "CN-900",
        "agreementNumber": "AG-12",
        "date": "2024-05-01",
        "differences": {"from": STATUS_OPEN, "to": STATUS_APPROVED},
    }


@pytest.fixture
def new_payload(change_payload):
    """A valid NEW request payload."""
    payload = dict(change_payload)
    payload["notificationType"] = 1
    payload.pop("differences")
    return payload
