"""Write API and Next.js starter projects to disk."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from baasix_cli.template_rendering import render_template

from .env_content import (
    build_env_content,
    build_env_example,
    build_nextjs_env_content,
    generate_secret,
)
from .project_models import ProjectSettings, StorageDriver

LOGGER = logging.getLogger(__name__)

_PROJECT_NAME = re.compile(r"^[a-z0-9_-]+$", re.IGNORECASE)

_API_PACKAGE_JSON: dict[str, Any] = {
    "version": "0.1.0",
    "type": "module",
    "scripts": {"dev": "tsx watch server.js", "start": "tsx server.js"},
    "dependencies": {"@tspvivek/baasix": "latest", "dotenv": "^16.3.1"},
    "devDependencies": {"tsx": "^4.16.0"},
}

_NEXTJS_PACKAGE_JSON: dict[str, Any] = {
    "version": "0.1.0",
    "private": True,
    "scripts": {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
        "lint": "next lint",
    },
    "dependencies": {
        "@tspvivek/baasix-sdk": "latest",
        "next": "^14.0.0",
        "react": "^18.2.0",
        "react-dom": "^18.2.0",
    },
    "devDependencies": {
        "@types/node": "^20.0.0",
        "@types/react": "^18.2.0",
        "@types/react-dom": "^18.2.0",
        "typescript": "^5.0.0",
    },
}


class ProjectScaffoldError(Exception):
    """Raised when project settings cannot be turned into a project."""


def validate_project_name(name: str) -> str:
    stripped = name.strip()
    if not stripped:
        raise ProjectScaffoldError("Project name is required.")
    if not _PROJECT_NAME.match(stripped):
        raise ProjectScaffoldError(
            "Project name must be alphanumeric with dashes or underscores."
        )
    return stripped


def create_project(project_path: Path | str, settings: ProjectSettings) -> Path:
    """Create the project directory tree for ``settings.template``.

    Existing files are overwritten; asking the user first is the caller's job.

    Returns:
      The resolved project directory.

    Raises:
      ProjectScaffoldError: If the project name or storage settings are invalid.
      OSError: If any directory or file cannot be written.
    """
    validate_project_name(settings.project_name)
    if settings.storage_driver is StorageDriver.S3 and settings.s3 is None:
        raise ProjectScaffoldError("S3 storage requires S3 settings.")
    root = Path(project_path).resolve()
    root.mkdir(parents=True, exist_ok=True)
    if settings.template.is_nextjs:
        _create_nextjs_project(root, settings)
    else:
        _create_api_project(root, settings)
    LOGGER.debug("Created %s project at %s", settings.template.value, root)
    return root


def _create_api_project(root: Path, settings: ProjectSettings) -> None:
    local_storage = settings.storage_driver is StorageDriver.LOCAL
    _write_json(root / "package.json", {"name": settings.project_name, **_API_PACKAGE_JSON})
    _write(root / "server.js", render_template("project/api/server.js.j2"))
    _write(root / ".env", build_env_content(settings, generate_secret(64)))
    _write(root / ".env.example", build_env_example(settings))
    _write(root / ".gitignore", render_template("project/api/gitignore.j2"))
    _write(root / "extensions" / ".gitkeep", "# Place your Baasix extensions here\n")
    if local_storage:
        _write(root / "uploads" / ".gitkeep", "")
    _write(root / "migrations" / ".gitkeep", "")
    _write(
        root / "README.md",
        render_template(
            "project/api/README.md.j2",
            settings=settings,
            status=_status_label,
            auth_methods=", ".join(service.value for service in settings.auth_services),
            local_storage=local_storage,
        ),
    )


def _create_nextjs_project(root: Path, settings: ProjectSettings) -> None:
    app_router = settings.template.uses_app_router
    _write_json(root / "package.json", {"name": settings.project_name, **_NEXTJS_PACKAGE_JSON})
    _write(root / ".env.local", build_nextjs_env_content())
    _write_json(root / "tsconfig.json", _tsconfig(app_router))
    _write(root / "next.config.mjs", render_template("project/nextjs/next.config.mjs.j2"))

    source_root = root / "src" if app_router else root
    client_module = source_root / "lib" / "baasix.ts"
    _write(client_module, render_template("project/nextjs/baasix_client.ts.j2"))
    page = render_template(
        "project/nextjs/page.tsx.j2", project_name=settings.project_name, app_router=app_router
    )
    globals_css = render_template("project/nextjs/globals.css.j2")
    if app_router:
        app_dir = source_root / "app"
        _write(
            app_dir / "layout.tsx",
            render_template("project/nextjs/layout.tsx.j2", project_name=settings.project_name),
        )
        _write(app_dir / "globals.css", globals_css)
        _write(app_dir / "page.tsx", page)
    else:
        _write(root / "pages" / "_app.tsx", render_template("project/nextjs/_app.tsx.j2"))
        _write(root / "styles" / "globals.css", globals_css)
        _write(root / "pages" / "index.tsx", page)

    _write(root / ".gitignore", render_template("project/nextjs/gitignore.j2"))
    _write(
        root / "README.md",
        render_template(
            "project/nextjs/README.md.j2",
            project_name=settings.project_name,
            app_router=app_router,
            client_module=client_module.relative_to(root).as_posix(),
        ),
    )


def _tsconfig(app_router: bool) -> dict[str, Any]:
    return {
        "compilerOptions": {
            "target": "es5",
            "lib": ["dom", "dom.iterable", "esnext"],
            "allowJs": True,
            "skipLibCheck": True,
            "strict": True,
            "noEmit": True,
            "esModuleInterop": True,
            "module": "esnext",
            "moduleResolution": "bundler",
            "resolveJsonModule": True,
            "isolatedModules": True,
            "jsx": "preserve",
            "incremental": True,
            "plugins": [{"name": "next"}],
            "paths": {"@/*": ["./src/*" if app_router else "./*"]},
        },
        "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx", ".next/types/**/*.ts"],
        "exclude": ["node_modules"],
    }


def _status_label(enabled: bool) -> str:
    return "✅ Enabled" if enabled else "❌ Disabled"


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    _write(path, json.dumps(payload, indent=2) + "\n")


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
