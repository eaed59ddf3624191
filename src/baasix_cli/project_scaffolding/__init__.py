"""Project scaffolding exports."""

from .env_content import (
    build_env_content,
    build_env_example,
    build_nextjs_env_content,
    generate_secret,
)
from .package_manager import (
    CommandRunner,
    PackageInstallError,
    PackageManager,
    detect_package_manager,
    install_command,
    install_dependencies,
)
from .project_models import (
    DEFAULT_DATABASE_URL,
    DEFAULT_PROJECT_NAME,
    DEFAULT_REDIS_URL,
    AuthService,
    CacheAdapter,
    ProjectSettings,
    ProjectTemplate,
    S3Settings,
    StorageDriver,
    default_project_settings,
)
from .project_writer import ProjectScaffoldError, create_project, validate_project_name

__all__ = [
    "DEFAULT_DATABASE_URL",
    "DEFAULT_PROJECT_NAME",
    "DEFAULT_REDIS_URL",
    "AuthService",
    "CacheAdapter",
    "CommandRunner",
    "PackageInstallError",
    "PackageManager",
    "ProjectScaffoldError",
    "ProjectSettings",
    "ProjectTemplate",
    "S3Settings",
    "StorageDriver",
    "build_env_content",
    "build_env_example",
    "build_nextjs_env_content",
    "create_project",
    "default_project_settings",
    "detect_package_manager",
    "generate_secret",
    "install_command",
    "install_dependencies",
    "validate_project_name",
]
