"""Render hook and endpoint extension skeletons into ``extensions/``."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from baasix_cli.template_rendering import render_template

from .extension_models import ExtensionRequest, ExtensionType

LOGGER = logging.getLogger(__name__)

EXTENSIONS_DIRNAME = "extensions"

_EXTENSION_NAME = re.compile(r"^[a-z0-9_-]+$", re.IGNORECASE)


class ExtensionScaffoldError(Exception):
    """Raised when an extension request is invalid."""


def validate_extension_name(name: str) -> str:
    stripped = name.strip()
    if not stripped:
        raise ExtensionScaffoldError("Extension name is required.")
    if not _EXTENSION_NAME.match(stripped):
        raise ExtensionScaffoldError("Name must be alphanumeric with dashes or underscores.")
    return stripped


def extension_directory(cwd: Path | str, request: ExtensionRequest) -> Path:
    return Path(cwd) / EXTENSIONS_DIRNAME / request.directory_name


def write_extension(
    cwd: Path | str, request: ExtensionRequest, *, overwrite: bool = False
) -> Path:
    """Write ``index.<js|ts>`` and ``README.md`` and return the extension directory.

    Raises:
      ExtensionScaffoldError: If the name is invalid or a hook lacks a collection.
      FileExistsError: If the directory exists and ``overwrite`` is false.
    """
    validate_extension_name(request.name)
    if request.extension_type is ExtensionType.HOOK and not (request.collection or "").strip():
        raise ExtensionScaffoldError("Hook extensions require a collection name.")

    target = extension_directory(cwd, request)
    if target.exists():
        if not overwrite:
            raise FileExistsError(f"Extension {request.directory_name} already exists.")
        LOGGER.debug("Replacing existing extension directory %s", target)
        shutil.rmtree(target)
    target.mkdir(parents=True)

    index_text, readme_text = _render_extension(request)
    (target / f"index.{request.file_extension}").write_text(index_text, encoding="utf-8")
    (target / "README.md").write_text(readme_text, encoding="utf-8")
    return target


def _render_extension(request: ExtensionRequest) -> tuple[str, str]:
    context = {
        "name": request.name,
        "collection": (request.collection or "").strip(),
        "typescript": request.typescript,
        "extension": request.file_extension,
    }
    if request.extension_type is ExtensionType.HOOK:
        index = render_template(
            "extension/hook_index.j2",
            payload_type=": HookPayload" if request.typescript else "",
            **context,
        )
        return index, render_template("extension/hook_readme.md.j2", **context)

    index = render_template(
        "extension/endpoint_index.j2",
        request_type=": RequestWithAccountability" if request.typescript else "",
        reply_type=": FastifyReply" if request.typescript else "",
        **context,
    )
    return index, render_template("extension/endpoint_readme.md.j2", **context)
