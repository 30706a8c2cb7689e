"""Domain exceptions.

Raised by services and request validators, rendered into the
``{status, message, data}`` envelope by the handlers registered in ``main.py``.
"""

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400

    def __init__(self, message: str = "", errors: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class RequestValidationFailure(DomainError):
    """Raised when request data is missing, malformed or violates a domain rule."""

    status_code = 422


class NotFoundError(DomainError):
    status_code = 404


class PermissionDenied(DomainError):
    status_code = 403


class InvalidTransition(DomainError):
    """Raised when a timesheet cannot move from its current status to the requested one."""

    status_code = 409
