"""Data access layer (repositories) for reference data.

Repositories wrap a caller-owned session and return domain models rather than
ORM models. They never commit; ``get_session()`` does that.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from return_notifier.domain.models import Contractor, Employee, Reseller, Status

from .exceptions import DataIntegrityError, PersistenceError
from .schema import ContractorModel, EmployeeModel, SellerModel, StatusModel

logger = logging.getLogger(__name__)


class _Repository:
    """Shared get/upsert plumbing for the id-keyed reference tables."""

    model = None
    entity_name = "record"

    def __init__(self, session: Session):
        self.session = session

    def _get(self, record_id: int):
        try:
            return self.session.get(self.model, record_id)
        except SQLAlchemyError as e:
            logger.error(
                f"Error retrieving {self.entity_name} {record_id}: {e}", exc_info=True
            )
            raise PersistenceError(f"Failed to retrieve {self.entity_name}: {e}") from e

    def _merge(self, instance, record_id: int):
        try:
            merged = self.session.merge(instance)
            self.session.flush()
            return merged
        except IntegrityError as e:
            logger.error(
                f"Integrity error upserting {self.entity_name} {record_id}: {e}", exc_info=True
            )
            raise DataIntegrityError(
                f"Failed to upsert {self.entity_name} due to constraint violation: {e}"
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Error upserting {self.entity_name} {record_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to upsert {self.entity_name}: {e}") from e


class SellerRepository(_Repository):
    """Resellers and their permitted notification addresses."""

    model = SellerModel
    entity_name = "seller"

    def get_by_id(self, seller_id: int) -> Optional[Reseller]:
        model = self._get(seller_id)
        return model.to_domain() if model is not None else None

    def upsert(self, reseller: Reseller) -> Reseller:
        """Insert or replace a reseller together with its address list."""
        existing = self._get(reseller.id)
        if existing is not None:
            # Replace the address list wholesale so removed addresses disappear
            existing.notification_emails.clear()
            self.session.flush()
        return self._merge(SellerModel.from_domain(reseller), reseller.id).to_domain()


class ContractorRepository(_Repository):
    """Contractors (clients)."""

    model = ContractorModel
    entity_name = "contractor"

    def get_by_id(self, contractor_id: int) -> Optional[Contractor]:
        model = self._get(contractor_id)
        return model.to_domain() if model is not None else None

    def upsert(self, contractor: Contractor) -> Contractor:
        return self._merge(ContractorModel.from_domain(contractor), contractor.id).to_domain()


class EmployeeRepository(_Repository):
    """Employees (complaint creators and experts)."""

    model = EmployeeModel
    entity_name = "employee"

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        model = self._get(employee_id)
        return model.to_domain() if model is not None else None

    def upsert(self, employee: Employee) -> Employee:
        return self._merge(EmployeeModel.from_domain(employee), employee.id).to_domain()


class StatusRepository(_Repository):
    """Return position statuses."""

    model = StatusModel
    entity_name = "status"

    def get_name(self, status_id: int) -> str:
        """Status name, or an empty string when the id is unknown."""
        try:
            name = self.session.execute(
                select(StatusModel.name).where(StatusModel.id == status_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving status name {status_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve status: {e}") from e

        return name or ""

    def upsert(self, status: Status) -> Status:
        return self._merge(StatusModel.from_domain(status), status.id).to_domain()
