"""Tests for repository toolchain baseline configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _pyproject() -> dict:
    pyproject_path = _project_root() / "pyproject.toml"
    return tomllib.loads(pyproject_path.read_text(encoding="utf-8"))


def test_project_uses_python_311_baseline_in_pyproject() -> None:
    pyproject = _pyproject()

    assert pyproject["project"]["requires-python"] == ">=3.11"
    assert pyproject["tool"]["ruff"]["target-version"] == "py311"
    assert pyproject["tool"]["mypy"]["python_version"] == "3.11"


def test_project_uses_uv_style_metadata_without_poetry() -> None:
    pyproject = _pyproject()
    dev_dependencies = pyproject["dependency-groups"]["dev"]

    assert "black" not in dev_dependencies
    assert "black" not in pyproject["tool"]
    assert "poetry" not in pyproject["tool"]
    assert pyproject["build-system"]["build-backend"] != "poetry.core.masonry.api"


def test_console_script_points_at_cli_main() -> None:
    assert _pyproject()["project"]["scripts"] == {"baasix": "baasix_cli.cli:main"}


def test_runtime_dependencies_cover_imported_libraries() -> None:
    requirements = _pyproject()["project"]["dependencies"]
    declared = {requirement.split(">=")[0].lower() for requirement in requirements}

    assert {"click", "httpx", "jinja2", "python-dotenv", "pyyaml"} <= declared


def test_scaffold_templates_ship_inside_the_package() -> None:
    templates = _project_root() / "src" / "baasix_cli" / "template_rendering" / "templates"

    for relative in (
        "migration/migration.js.j2",
        "extension/hook_index.j2",
        "extension/endpoint_index.j2",
        "project/api/server.js.j2",
        "project/nextjs/page.tsx.j2",
    ):
        assert (templates / relative).is_file(), relative
