"""Persistence layer for the reference directory (resellers, clients, staff, statuses).

Public API:
    - init_database(database_url) / get_session() / close_database()
    - SellerRepository, ContractorRepository, EmployeeRepository, StatusRepository
    - SqlReferenceDirectory: lookups used by the notification operation
    - load_reference_data(path, session): YAML seeding for local runs

Example usage:
    >>> init_database("sqlite:///./data/return_notifier.db")
    >>> with get_session() as session:
    ...     directory = SqlReferenceDirectory(session)
    ...     reseller = directory.get_seller(1)
"""

from .database import close_database, get_session, init_database
from .directory import SqlReferenceDirectory
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
    ReferenceDataError,
)
from .repositories import (
    ContractorRepository,
    EmployeeRepository,
    SellerRepository,
    StatusRepository,
)
from .seed import load_reference_data

__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    # Repositories
    "SellerRepository",
    "ContractorRepository",
    "EmployeeRepository",
    "StatusRepository",
    "SqlReferenceDirectory",
    "load_reference_data",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "DataIntegrityError",
    "ReferenceDataError",
]
