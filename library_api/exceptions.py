"""
Application Exceptions

Services report expected outcomes (not found, conflicts, bad input) by
returning a failed ServiceResult, never by raising. The exceptions below
are for the layers in front of the services: request validation and
authentication/authorisation dependencies. They can only stop a request,
so raising is the natural way out of a FastAPI dependency.

Exception Hierarchy:
    ApiError (base, carries status + message)
    ├── RequestValidationFailed   → 400 Bad Request
    ├── AuthenticationError       → 401 Unauthorized
    └── PermissionDeniedError     → 403 Forbidden

The handler registered in create_app() turns any ApiError into the
standard response envelope.
"""

from fastapi import status


class ApiError(Exception):
    """
    Base class for errors that end a request with an envelope response.

    Attributes:
        message: User-facing description, returned as the envelope message
        status_code: HTTP status of the response
        headers: Extra response headers (e.g. WWW-Authenticate)
    """

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.headers = headers
        super().__init__(message)


class RequestValidationFailed(ApiError):
    """A request part did not match its schema."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ApiError):
    """Missing, malformed or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Could not validate credentials") -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class PermissionDeniedError(ApiError):
    """The caller is authenticated but not allowed to do this."""

    status_code = status.HTTP_403_FORBIDDEN
