"""Remote API access exports."""

from .api_client import DEFAULT_TIMEOUT_SECONDS, BaasixApiClient
from .api_errors import (
    ApiError,
    EndpointNotFoundError,
    ForbiddenError,
    MalformedResponseError,
    ServerUnreachableError,
    UnauthorizedError,
)
from .api_models import MigrationCommandResult, MigrationRecord

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "ApiError",
    "BaasixApiClient",
    "EndpointNotFoundError",
    "ForbiddenError",
    "MalformedResponseError",
    "MigrationCommandResult",
    "MigrationRecord",
    "ServerUnreachableError",
    "UnauthorizedError",
]
