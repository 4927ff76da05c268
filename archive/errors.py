"""Domain errors raised by the services.

Every failure a client can act on is a ``ServiceError`` with an explicit
``kind``; the HTTP layer maps the kind to a status code and nothing else
inspects the exception type.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    BUSINESS_LOGIC = "business_logic"


HTTP_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.BUSINESS_LOGIC: 409,
}


class ServiceError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]


class ValidationError(ServiceError):
    """Malformed or out-of-range input."""

    def __init__(self, message: str):
        super().__init__(ErrorKind.VALIDATION, message)


class EntityNotFoundError(ServiceError):
    """A referenced row is missing during a multi-step operation."""

    def __init__(self, entity: str, entity_id):
        super().__init__(ErrorKind.NOT_FOUND, f"{entity} with ID {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class BusinessLogicError(ServiceError):
    """Duplicate unique field, live references, inactive owner and the like."""

    def __init__(self, message: str):
        super().__init__(ErrorKind.BUSINESS_LOGIC, message)
