from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``status_code`` is what the outer transport layer should answer with.
    """

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or a state transition is not allowed (bad request)."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or nobody is logged in."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a principal lacks a permission (forbidden)."""

    status_code = 403

    def __init__(self, permission: Optional[str] = None, *, message: Optional[str] = None):
        self.permission = permission
        if message:
            super().__init__(message)
        elif permission:
            super().__init__(f"Access forbidden: requires the '{permission}' permission")
        else:
            super().__init__("Access forbidden")


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ServerError(DomainError):
    """Raised when storage fails; unrecoverable for the current request."""

    status_code = 500


class CatalogError(ServerError):
    """Raised when the permission catalog is inconsistent or queried with an unknown identifier."""
