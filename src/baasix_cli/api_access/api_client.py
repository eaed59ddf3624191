"""HTTP client for the Baasix REST API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any

import httpx

from baasix_cli.configuration.connection_settings import ConnectionSettings

from .api_errors import (
    ApiError,
    EndpointNotFoundError,
    ForbiddenError,
    MalformedResponseError,
    ServerUnreachableError,
    UnauthorizedError,
)
from .api_models import MigrationCommandResult, MigrationRecord

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class BaasixApiClient:
    """Authenticated access to the schema and migration endpoints.

    An ``httpx.Client`` may be injected; otherwise one is created from the
    connection settings and closed by :meth:`close`.
    """

    def __init__(
        self,
        settings: ConnectionSettings,
        *,
        client: httpx.Client | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._settings = settings
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=settings.url,
            timeout=timeout_seconds,
            headers={"Content-Type": "application/json"},
        )
        self._token: str | None = settings.token

    def __enter__(self) -> BaasixApiClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @property
    def token(self) -> str | None:
        return self._token

    def fetch_schemas(self) -> list[Any]:
        """Return every collection schema entry exposed by the server."""
        payload = self._request("GET", "/schemas", params={"limit": -1})
        return _data_list(payload, "/schemas")

    def fetch_migrations(self) -> list[MigrationRecord]:
        payload = self._request("GET", "/migrations")
        entries = _data_list(payload, "/migrations")
        return [
            MigrationRecord.from_payload(entry) for entry in entries if isinstance(entry, Mapping)
        ]

    def run_migrations(
        self, *, step: int | None = None, dry_run: bool = False
    ) -> MigrationCommandResult:
        body: dict[str, Any] = {}
        if step is not None:
            body["step"] = step
        if dry_run:
            body["dryRun"] = True
        payload = self._request("POST", "/migrations/run", json=body)
        return MigrationCommandResult.from_payload(_require_mapping(payload, "/migrations/run"))

    def rollback_migrations(
        self, *, step: int | None = None, batch: int | None = None
    ) -> MigrationCommandResult:
        body: dict[str, Any] = {}
        if step is not None:
            body["step"] = step
        if batch is not None:
            body["batch"] = batch
        payload = self._request("POST", "/migrations/rollback", json=body)
        return MigrationCommandResult.from_payload(
            _require_mapping(payload, "/migrations/rollback")
        )

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        self._ensure_authenticated()
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else None
        LOGGER.debug("%s %s%s", method, self._settings.url, endpoint)
        response = self._send(method, endpoint, headers=headers, **kwargs)
        _raise_for_status(response, endpoint)
        return _parse_json(response, endpoint)

    def _ensure_authenticated(self) -> None:
        if self._token or not self._settings.has_credentials:
            return
        response = self._send(
            "POST",
            "/auth/login",
            json={"email": self._settings.email, "password": self._settings.password},
        )
        if response.is_error:
            raise UnauthorizedError(
                f"Failed to authenticate as {self._settings.email} "
                f"(HTTP {response.status_code}).",
                status_code=response.status_code,
            )
        payload = _require_mapping(_parse_json(response, "/auth/login"), "/auth/login")
        token = payload.get("token")
        if not isinstance(token, str) or not token:
            raise MalformedResponseError("Login response did not include a token.")
        self._token = token
        LOGGER.debug("Authenticated as %s", self._settings.email)

    def _send(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._client.request(method, endpoint, **kwargs)
        except httpx.TransportError as exc:
            raise ServerUnreachableError(
                f"Could not reach Baasix server at {self._settings.url}: {exc}"
            ) from exc


def _raise_for_status(response: httpx.Response, endpoint: str) -> None:
    if not response.is_error:
        return
    status = response.status_code
    detail = _error_detail(response)
    message = f"{endpoint} failed with HTTP {status}" + (f": {detail}" if detail else ".")
    if status == 401:
        raise UnauthorizedError(message, status_code=status)
    if status == 403:
        raise ForbiddenError(message, status_code=status)
    if status == 404:
        raise EndpointNotFoundError(message, status_code=status)
    raise ApiError(message, status_code=status)


def _error_detail(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] or None
    if isinstance(payload, Mapping):
        error = payload.get("error")
        if isinstance(error, Mapping):
            return str(error.get("message") or "") or None
        message = payload.get("message") or error
        return str(message) if message else None
    return None


def _parse_json(response: httpx.Response, endpoint: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        content_type = response.headers.get("content-type", "unknown")
        raise MalformedResponseError(
            f"{endpoint} returned a non-JSON response "
            f"(status {response.status_code}, content-type {content_type})."
        ) from exc


def _require_mapping(payload: Any, endpoint: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise MalformedResponseError(f"{endpoint} returned an unexpected payload shape.")
    return payload


def _data_list(payload: Any, endpoint: str) -> list[Any]:
    data = _require_mapping(payload, endpoint).get("data")
    if data is None:
        return []
    if not isinstance(data, list):
        raise MalformedResponseError(f"{endpoint} returned a non-list 'data' field.")
    return data
