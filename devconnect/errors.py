"""
Error taxonomy shared by the storage layer and the HTTP handlers.

API errors carry their own status code and JSON body; the exception
handlers in ``backend.app.error_handlers`` turn them into responses.
Storage errors are raised by repositories and remapped (or not) by routes.
"""

from typing import Any


class ApiError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = 500

    def __init__(self, msg: str, status_code: int | None = None):
        super().__init__(msg)
        self.msg = msg
        if status_code is not None:
            self.status_code = status_code

    def payload(self) -> dict[str, Any]:
        return {"msg": self.msg}


class Unauthenticated(ApiError):
    """Raised when a private route is called without a credential."""

    status_code = 401

    def __init__(self, msg: str = "No token, authorization denied"):
        super().__init__(msg)


class InvalidCredential(ApiError):
    """Raised when a credential fails verification."""

    status_code = 401

    def __init__(self, msg: str = "Token is not valid"):
        super().__init__(msg)


class NotFound(ApiError):
    """Route-specific "not found"; the status code varies per route."""

    status_code = 404


class ServerError(ApiError):
    """Catch-all failure. Rendered as a plain-text body."""

    status_code = 500

    def __init__(self, msg: str = "Server Error"):
        super().__init__(msg)


# =============================================================================
# Storage errors
# =============================================================================


class StorageError(Exception):
    """Base class for repository-level failures."""


class InvalidReferenceError(StorageError):
    """An identifier is not a well-formed reference."""

    def __init__(self, value: Any):
        super().__init__(f"Malformed identifier: {value!r}")
        self.value = value


class ProfileNotFoundError(StorageError, LookupError):
    """A profile was required for an operation but does not exist."""

    def __init__(self, user_id: int):
        super().__init__(f"No profile for user {user_id}")
        self.user_id = user_id


__all__ = [
    "ApiError",
    "Unauthenticated",
    "InvalidCredential",
    "NotFound",
    "ServerError",
    "StorageError",
    "InvalidReferenceError",
    "ProfileNotFoundError",
]
