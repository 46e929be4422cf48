"""Exceptions raised by the service layer.

Each carries the HTTP status the API reports it with. ``NotFound`` covers both
"does not exist" and "exists but belongs to someone else".
"""

from fastapi import status


class ProofLogError(Exception):
    """Base class for errors that are safe to report to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Something went wrong"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(ProofLogError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class InvalidId(ValidationError):
    default_detail = "Invalid entry id"


class NotAuthenticated(ProofLogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class InvalidSession(NotAuthenticated):
    """Session token is malformed, wrongly signed or expired."""


class NotFound(ProofLogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(ProofLogError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Already exists"
