"""Connection settings loader service."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values

from .connection_settings import DEFAULT_SERVER_URL, ConnectionSettings

LOGGER = logging.getLogger(__name__)

ENV_FILENAME = ".env"
CONFIG_FILENAMES: tuple[str, ...] = ("baasix.config.yaml", "baasix.config.yml")

_ENV_ALIASES: dict[str, tuple[str, ...]] = {
    "url": ("BAASIX_URL", "API_URL"),
    "email": ("BAASIX_EMAIL", "ADMIN_EMAIL"),
    "password": ("BAASIX_PASSWORD", "ADMIN_PASSWORD"),
    "token": ("BAASIX_TOKEN", "BAASIX_AUTH_TOKEN"),
}


class ConfigurationError(Exception):
    """Raised when a configuration source is invalid."""


def load_connection_settings(
    cwd: Path | str,
    *,
    url_override: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConnectionSettings:
    """Resolve connection settings for a project directory.

    Sources, highest precedence first: ``url_override``, the process
    environment, ``<cwd>/.env``, ``<cwd>/baasix.config.yaml``.
    """
    project_dir = Path(cwd)
    merged: dict[str, Any] = dict(load_config_file(project_dir) or {})
    for source in (_read_env_file(project_dir), environ if environ is not None else os.environ):
        for key, names in _ENV_ALIASES.items():
            value = _first_present(source, names)
            if value is not None:
                merged[key] = value

    settings = ConnectionSettings(
        url=_optional_string(merged.get("url"), "url") or DEFAULT_SERVER_URL,
        email=_optional_string(merged.get("email"), "email"),
        password=_optional_string(merged.get("password"), "password"),
        token=_optional_string(merged.get("token"), "token"),
    )
    if url_override:
        settings = replace(settings, url=url_override)
    LOGGER.debug("Resolved server url %s for %s", settings.url, project_dir)
    return settings


def load_config_file(cwd: Path | str) -> Mapping[str, Any] | None:
    """Load the optional YAML project config file, if one exists."""
    for filename in CONFIG_FILENAMES:
        path = Path(cwd) / filename
        if not path.exists():
            continue
        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Failed to parse {path}: {exc}") from exc
        if parsed is None:
            return {}
        if not isinstance(parsed, Mapping):
            raise ConfigurationError(f"{path} root must be a mapping.")
        LOGGER.debug("Loaded project config file %s", path)
        return parsed
    return None


def _read_env_file(project_dir: Path) -> Mapping[str, str | None]:
    env_path = project_dir / ENV_FILENAME
    if not env_path.exists():
        return {}
    LOGGER.debug("Reading environment file %s", env_path)
    return dotenv_values(env_path)


def _first_present(source: Mapping[str, str | None], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = source.get(name)
        if value:
            return value
    return None


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
