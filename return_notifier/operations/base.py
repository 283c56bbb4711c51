"""Abstract base for reference operations."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class ReferencesOperation(ABC):
    """Contract shared by reference operations.

    An operation is constructed with its request already parsed; it reads
    request sections through ``get_request_data`` and does its work in
    ``do_operation``.
    """

    @abstractmethod
    def do_operation(self) -> Any:
        pass

    @abstractmethod
    def get_request_data(self, name: str) -> Dict[str, Any]:
        pass
