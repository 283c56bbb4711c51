"""SQL-backed reference directory used by the notification operation."""

from typing import Optional

from sqlalchemy.orm import Session

from return_notifier.domain.models import Contractor, Employee, Reseller
from return_notifier.domain.ports import ReferenceDirectory

from .repositories import (
    ContractorRepository,
    EmployeeRepository,
    SellerRepository,
    StatusRepository,
)


class SqlReferenceDirectory(ReferenceDirectory):
    """ReferenceDirectory over the repositories of one session."""

    def __init__(self, session: Session):
        self.sellers = SellerRepository(session)
        self.contractors = ContractorRepository(session)
        self.employees = EmployeeRepository(session)
        self.statuses = StatusRepository(session)

    def get_seller(self, seller_id: int) -> Optional[Reseller]:
        return self.sellers.get_by_id(seller_id)

    def get_contractor(self, contractor_id: int) -> Optional[Contractor]:
        return self.contractors.get_by_id(contractor_id)

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        return self.employees.get_by_id(employee_id)

    def get_status_name(self, status_id: int) -> str:
        return self.statuses.get_name(status_id)
