"""Remote API error taxonomy."""

from __future__ import annotations


class ApiError(Exception):
    """Raised when the Baasix server rejects or cannot serve a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(ApiError):
    """Missing, expired or rejected credentials (HTTP 401 or failed login)."""


class ForbiddenError(ApiError):
    """Authenticated, but not allowed to perform the request (HTTP 403)."""


class EndpointNotFoundError(ApiError):
    """The server does not expose the requested endpoint (HTTP 404)."""


class ServerUnreachableError(ApiError):
    """The server could not be reached at all."""


class MalformedResponseError(ApiError):
    """The server answered with something that is not the expected JSON shape."""
