"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SERVER_URL = "http://localhost:8056"


@dataclass(frozen=True)
class ConnectionSettings:
    """Where the Baasix server lives and how to authenticate against it."""

    url: str = DEFAULT_SERVER_URL
    email: str | None = None
    password: str | None = None
    token: str | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.email and self.password)
