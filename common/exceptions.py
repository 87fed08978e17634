"""Error taxonomy shared by the data-access and auth layers.

Data-access failures are DRF exceptions so they propagate to the calling view
and are rendered by DRF's exception handler. Auth failures never leave the
session context as exceptions; they are converted to `AuthResult` values.
"""

from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError

__all__ = ["NotFound", "ValidationError", "Conflict", "AuthError", "ConsistencyError"]


class Conflict(APIException):
    """A unique constraint would be violated (e.g. duplicate store email)."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"


class AuthError(Exception):
    """Sign-in, sign-up or password update failed; carries a readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConsistencyError(Exception):
    """An authenticated identity has no profile row."""
