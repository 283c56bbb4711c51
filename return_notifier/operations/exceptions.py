"""Errors that abort a reference operation before anything is sent."""

from typing import Optional


class OperationError(Exception):
    """Base class for terminal operation failures.

    ``status_code`` follows HTTP semantics: 4xx for bad input or references,
    5xx for data the service could not complete.
    """

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "statusCode": self.status_code,
        }


class InvalidRequest(OperationError):
    """A required request field is missing, zero or malformed."""

    status_code = 400


class EntityNotFound(OperationError):
    """A referenced reseller or employee does not exist."""

    status_code = 400

    def __init__(self, entity: str, message: Optional[str] = None):
        super().__init__(message or f"{entity.capitalize()} not found!")
        self.entity = entity


class ClientMismatch(OperationError):
    """The client is missing, not a customer, or not tied to the reseller."""

    status_code = 400

    def __init__(self, message: str = "Client not found or mismatch!"):
        super().__init__(message)


class EmptyTemplateField(OperationError):
    """An assembled template value is empty."""

    status_code = 500

    def __init__(self, field: str):
        super().__init__(f"Template Data ({field}) is empty!")
        self.field = field
