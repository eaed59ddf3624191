"""Generation run use-case service."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from baasix_cli.api_access import ApiError, BaasixApiClient
from baasix_cli.configuration import (
    ConfigurationError,
    ConnectionSettings,
    load_connection_settings,
)
from baasix_cli.schema_management import SchemaError, parse_schema_descriptors
from baasix_cli.type_generation import generate_sdk_types, generate_types

from .generation_contracts import GenerationOutcome, GenerationRequest, GenerationTarget

LOGGER = logging.getLogger(__name__)

ClientFactory = Callable[[ConnectionSettings], BaasixApiClient]


class GenerationError(Exception):
    """Raised when a generation run cannot be completed."""


def fetch_generation_input(
    request: GenerationRequest, *, client_factory: ClientFactory | None = None
) -> list[Any]:
    """Fetch the raw schema entries for the request's server.

    Remote failures propagate as ``ApiError`` subclasses so callers can tell
    unauthorized, forbidden and unreachable apart.
    """
    resolved_client_factory = client_factory or BaasixApiClient
    try:
        settings = load_connection_settings(request.cwd, url_override=request.url)
    except ConfigurationError as exc:
        raise GenerationError(str(exc)) from exc
    with resolved_client_factory(settings) as client:
        raw_schemas = client.fetch_schemas()
    LOGGER.debug("Fetched %d schemas from %s", len(raw_schemas), settings.url)
    return raw_schemas


def render_generation_output(
    target: GenerationTarget,
    raw_schemas: Sequence[Any],
    *,
    generated_at: datetime | None = None,
) -> str:
    """Render the requested artifact from raw schema entries."""
    if target is GenerationTarget.SCHEMA_JSON:
        return json.dumps(list(raw_schemas), indent=2, ensure_ascii=False)
    try:
        schemas = parse_schema_descriptors(raw_schemas)
    except SchemaError as exc:
        raise GenerationError(f"Invalid schema from server: {exc}") from exc
    if target is GenerationTarget.SDK_TYPES:
        return generate_sdk_types(schemas, generated_at=generated_at)
    return generate_types(schemas, generated_at=generated_at)


def write_generated_output(destination: Path, text: str) -> Path:
    """Persist generated text, creating parent directories as needed."""
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise GenerationError(f"Failed to write {destination}: {exc}") from exc
    return destination


def execute_generation_run(
    request: GenerationRequest,
    *,
    client_factory: ClientFactory | None = None,
    confirm_overwrite: Callable[[Path], bool] | None = None,
) -> GenerationOutcome:
    """Fetch, render and write in one go; nothing is written for zero schemas."""
    raw_schemas = fetch_generation_input(request, client_factory=client_factory)
    if not raw_schemas:
        return GenerationOutcome(destination=None, schema_count=0, target=request.target)

    output = render_generation_output(request.target, raw_schemas)
    destination = request.destination
    if destination.exists() and confirm_overwrite and not confirm_overwrite(destination):
        return GenerationOutcome(
            destination=None, schema_count=len(raw_schemas), target=request.target
        )
    write_generated_output(destination, output)
    return GenerationOutcome(
        destination=destination, schema_count=len(raw_schemas), target=request.target
    )
