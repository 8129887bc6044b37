"""Application exception types."""

from portfolio_api.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to the ``{"error": ...}`` payload."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        self.payload = ErrorResponse(error=message)
        super().__init__(message)


class ValidationError(ApiError):
    """User input rejected before it reaches the store."""

    status_code = 400


class AuthenticationError(ApiError):
    """Missing or invalid session, or bad credentials."""

    status_code = 401


class AuthorizationError(ApiError):
    """Valid session whose identity is not an administrator."""

    status_code = 403


class NotFoundError(ApiError):
    status_code = 404


class StoreError(ApiError):
    """Any other failure reported by the persistence layer."""


class NetworkError(ApiError):
    """The identity service could not be reached."""


__all__ = [
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "NetworkError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
]
