"""Unit tests for persistence layer."""

from pathlib import Path

import pytest
from sqlalchemy import text

from return_notifier.domain.models import Contractor, Employee, Reseller, Status
from return_notifier.persistence import (
    ContractorRepository,
    DatabaseConnectionError,
    EmployeeRepository,
    ReferenceDataError,
    SellerRepository,
    SqlReferenceDirectory,
    StatusRepository,
    close_database,
    get_session,
    init_database,
    load_reference_data,
)
from return_notifier.persistence.database import _redact_url
from return_notifier.persistence.schema import (
    ContractorModel,
    SellerModel,
    SellerNotificationEmailModel,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def in_memory_database():
    """Initialize an in-memory database for one test."""
    init_database("sqlite:///:memory:")
    yield
    close_database()


def create_test_reseller(**overrides):
    values = dict(
        id=7,
        name="Acme Returns",
        email_from="returns@acme.com",
        notification_emails={"tsGoodsReturn": ["desk@acme.com", "manager@acme.com"]},
    )
    values.update(overrides)
    return Reseller(**values)


class TestDatabaseInitialization:
    """Tests for database initialization."""

    def test_init_database_creates_file_and_parents(self, tmp_path):
        db_file = tmp_path / "nested" / "reference.db"

        init_database(f"sqlite:///{db_file}")
        try:
            assert db_file.exists()
            with get_session() as session:
                tables = [
                    row[0]
                    for row in session.execute(
                        text("SELECT name FROM sqlite_master WHERE type='table'")
                    ).fetchall()
                ]
        finally:
            close_database()

        assert {"sellers", "seller_notification_emails", "contractors", "employees", "statuses"} <= set(tables)

    def test_init_database_is_idempotent(self, tmp_path):
        db_url = f"sqlite:///{tmp_path / 'reference.db'}"

        init_database(db_url)
        init_database(db_url)

        with get_session() as session:
            assert session.execute(text("SELECT COUNT(*) FROM sellers")).scalar() == 0
        close_database()

    def test_init_database_invalid_url_raises_error(self):
        with pytest.raises(DatabaseConnectionError):
            init_database("")

        with pytest.raises(DatabaseConnectionError):
            init_database(None)

    def test_get_session_without_init_raises_error(self):
        close_database()

        with pytest.raises(DatabaseConnectionError, match="Database not initialized"):
            with get_session():
                pass

    def test_redact_url(self):
        assert _redact_url("postgresql://app:secret@db:5432/ref") == "postgresql://app:***@db:5432/ref"
        assert _redact_url("sqlite:///./data/x.db") == "sqlite:///./data/x.db"


class TestSessionManagement:
    """Tests for session management."""

    def test_session_commits_on_success(self, in_memory_database):
        with get_session() as session:
            session.add(ContractorModel.from_domain(Contractor(id=1, name="Client")))

        with get_session() as session:
            assert session.get(ContractorModel, 1) is not None

    def test_session_rolls_back_on_exception(self, in_memory_database):
        with pytest.raises(ValueError):
            with get_session() as session:
                session.add(ContractorModel.from_domain(Contractor(id=1, name="Client")))
                raise ValueError("Test exception")

        with get_session() as session:
            assert session.get(ContractorModel, 1) is None


class TestORMModelConversions:
    """Tests for ORM model to domain model conversions."""

    def test_seller_from_domain_flattens_addresses(self):
        reseller = create_test_reseller(
            notification_emails={
                "tsGoodsReturn": ["desk@acme.com", "desk@acme.com", ""],
                "otherEvent": ["other@acme.com"],
            }
        )

        model = SellerModel.from_domain(reseller)

        rows = [(row.event, row.email) for row in model.notification_emails]
        assert rows == [("tsGoodsReturn", "desk@acme.com"), ("otherEvent", "other@acme.com")]

    def test_contractor_round_trip_keeps_contacts(self):
        contractor = Contractor(id=3, type=0, name="Doe", email="jane@example.com", mobile="+1555")

        assert ContractorModel.from_domain(contractor).to_domain() == contractor


class TestRepositories:
    """Tests for the reference repositories."""

    def test_seller_upsert_and_get(self, in_memory_database):
        with get_session() as session:
            SellerRepository(session).upsert(create_test_reseller())

        with get_session() as session:
            found = SellerRepository(session).get_by_id(7)

        assert found is not None
        assert found.email_from == "returns@acme.com"
        assert found.emails_by_permit("tsGoodsReturn") == ["desk@acme.com", "manager@acme.com"]

    def test_seller_upsert_replaces_addresses(self, in_memory_database):
        with get_session() as session:
            SellerRepository(session).upsert(create_test_reseller())

        with get_session() as session:
            SellerRepository(session).upsert(
                create_test_reseller(notification_emails={"tsGoodsReturn": ["new@acme.com"]})
            )

        with get_session() as session:
            found = SellerRepository(session).get_by_id(7)
            row_count = session.query(SellerNotificationEmailModel).count()

        assert found.emails_by_permit("tsGoodsReturn") == ["new@acme.com"]
        assert row_count == 1

    def test_get_missing_returns_none(self, in_memory_database):
        with get_session() as session:
            assert SellerRepository(session).get_by_id(404) is None
            assert ContractorRepository(session).get_by_id(404) is None
            assert EmployeeRepository(session).get_by_id(404) is None
            assert StatusRepository(session).get_name(404) == ""

    def test_employee_upsert_updates_existing(self, in_memory_database):
        with get_session() as session:
            EmployeeRepository(session).upsert(Employee(id=21, first_name="Ann", last_name="Lee"))

        with get_session() as session:
            EmployeeRepository(session).upsert(Employee(id=21, first_name="Ann", last_name="Moss"))

        with get_session() as session:
            assert EmployeeRepository(session).get_by_id(21).full_name == "Ann Moss"

    def test_status_name_lookup(self, in_memory_database):
        with get_session() as session:
            StatusRepository(session).upsert(Status(id=2, name="Approved"))

        with get_session() as session:
            repo = StatusRepository(session)
            assert repo.get_name(2) == "Approved"
            assert repo.get_name(99) == ""


class TestSqlReferenceDirectory:
    """Tests for the directory facade over a seeded database."""

    @pytest.fixture(autouse=True)
    def seeded(self, in_memory_database):
        with get_session() as session:
            load_reference_data(FIXTURES_DIR / "reference_data.yaml", session)

    def test_lookups(self):
        with get_session() as session:
            directory = SqlReferenceDirectory(session)

            assert directory.get_seller(7).name == "Acme Returns"
            assert directory.get_seller(8).email_from is None
            assert directory.get_contractor(7).mobile == "+15550100"
            assert directory.get_contractor(8).is_customer is False
            assert directory.get_employee(22).full_name == "Bob Stone"
            assert directory.get_status_name(1) == "Open"

    def test_unknown_ids(self):
        with get_session() as session:
            directory = SqlReferenceDirectory(session)

            assert directory.get_seller(99) is None
            assert directory.get_contractor(99) is None
            assert directory.get_employee(99) is None
            assert directory.get_status_name(99) == ""


class TestReferenceDataSeeding:
    """Tests for YAML seeding."""

    def test_load_reference_data_counts(self, in_memory_database):
        with get_session() as session:
            counts = load_reference_data(FIXTURES_DIR / "reference_data.yaml", session)

        assert counts == {"sellers": 2, "contractors": 2, "employees": 2, "statuses": 2}

    def test_seeding_twice_is_idempotent(self, in_memory_database):
        for _ in range(2):
            with get_session() as session:
                load_reference_data(FIXTURES_DIR / "reference_data.yaml", session)

        with get_session() as session:
            assert session.query(SellerModel).count() == 2
            assert session.query(SellerNotificationEmailModel).count() == 3

    def test_invalid_record_rolls_back(self, in_memory_database):
        with pytest.raises(ReferenceDataError, match="statuses\\[0\\]"):
            with get_session() as session:
                load_reference_data(FIXTURES_DIR / "invalid_reference_data.yaml", session)

    def test_missing_file(self, in_memory_database, tmp_path):
        with pytest.raises(ReferenceDataError, match="Failed to read"):
            with get_session() as session:
                load_reference_data(tmp_path / "missing.yaml", session)

    def test_section_must_be_list(self, in_memory_database, tmp_path):
        seed = tmp_path / "seed.yaml"
        seed.write_text("sellers:\n  id: 1\n")

        with pytest.raises(ReferenceDataError, match="must be a list"):
            with get_session() as session:
                load_reference_data(seed, session)
