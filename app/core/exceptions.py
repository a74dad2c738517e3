"""
Custom exceptions for the service layer.

Each expected failure of an event operation has its own type so the HTTP
layer can render a distinct status code. Store faults are not wrapped here;
they surface as SQLAlchemy errors and are rendered as an opaque server error.
"""

from typing import Any


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnauthenticatedError(ServiceError):
    """Raised when the caller presents no usable bearer credential."""


class NotFoundError(ServiceError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found.")


class ForbiddenError(ServiceError):
    """Raised when the caller may not mutate an existing resource."""

    def __init__(self, action: str, resource: str = "event"):
        self.action = action
        self.resource = resource
        super().__init__(f"You are not authorized to {action} this {resource}.")


class ValidationError(ServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
