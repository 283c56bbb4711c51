"""Lookup interface the notification operation resolves entities through."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import Contractor, Employee, Reseller


class ReferenceDirectory(ABC):
    """Read-only access to resellers, contractors, employees and statuses.

    Every ``get_*`` method returns ``None`` when the entity does not exist;
    deciding whether a missing entity is an error is left to the caller.
    """

    @abstractmethod
    def get_seller(self, seller_id: int) -> Optional[Reseller]:
        pass

    @abstractmethod
    def get_contractor(self, contractor_id: int) -> Optional[Contractor]:
        pass

    @abstractmethod
    def get_employee(self, employee_id: int) -> Optional[Employee]:
        pass

    @abstractmethod
    def get_status_name(self, status_id: int) -> str:
        """Human-readable status name, or an empty string for unknown ids."""
        pass
