"""Goods return notification operation and its stages."""

from .base import ReferencesOperation
from .differences import format_differences
from .dispatcher import NotificationDispatcher
from .exceptions import (
    ClientMismatch,
    EmptyTemplateField,
    EntityNotFound,
    InvalidRequest,
    OperationError,
)
from .resolver import EntityResolver, ResolvedEntities
from .return_operation import TsReturnOperation
from .template_data import build_template_data, validate_template_data
from .validation import as_int, as_str, parse_request

__all__ = [
    "ReferencesOperation",
    "TsReturnOperation",
    "NotificationDispatcher",
    "EntityResolver",
    "ResolvedEntities",
    "format_differences",
    "build_template_data",
    "validate_template_data",
    "parse_request",
    "as_int",
    "as_str",
    "OperationError",
    "InvalidRequest",
    "EntityNotFound",
    "ClientMismatch",
    "EmptyTemplateField",
]
