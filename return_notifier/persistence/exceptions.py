"""Persistence layer exceptions."""


class PersistenceError(Exception):
    """Base exception for reference directory storage errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when the database cannot be initialized or reached."""

    pass


class DataIntegrityError(PersistenceError):
    """Raised when a write violates a database constraint."""

    pass


class ReferenceDataError(PersistenceError):
    """Raised when a reference data seed file is unreadable or malformed."""

    pass
