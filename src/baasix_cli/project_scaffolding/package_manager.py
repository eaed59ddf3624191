"""Node package manager detection and dependency installation."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path

CommandRunner = Callable[[tuple[str, ...], Path], None]

_LOCKFILES: tuple[tuple[str, str], ...] = (
    ("bun.lockb", "bun"),
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
)


class PackageManager(str, Enum):
    NPM = "npm"
    PNPM = "pnpm"
    BUN = "bun"
    YARN = "yarn"


class PackageInstallError(Exception):
    """Raised when installing project dependencies fails."""


def detect_package_manager(cwd: Path | str) -> PackageManager:
    """Pick the package manager whose lockfile is present, defaulting to npm."""
    directory = Path(cwd)
    for lockfile, manager in _LOCKFILES:
        if (directory / lockfile).exists():
            return PackageManager(manager)
    return PackageManager.NPM


def install_command(
    package_manager: PackageManager, dependencies: Sequence[str] = (), *, dev: bool = False
) -> tuple[str, ...]:
    """Build the install command; with no dependencies it installs from package.json."""
    if package_manager is PackageManager.NPM:
        command: tuple[str, ...] = ("npm", "install")
        dev_flag = "--save-dev"
    else:
        command = (package_manager.value, "add" if dependencies else "install")
        dev_flag = "-D"
    if dev and dependencies:
        command += (dev_flag,)
    return command + tuple(dependencies)


def install_dependencies(
    project_path: Path | str,
    package_manager: PackageManager,
    dependencies: Sequence[str] = (),
    *,
    dev: bool = False,
    run_command: CommandRunner | None = None,
) -> None:
    """Run the package manager inside ``project_path``.

    Raises:
      PackageInstallError: If the executable is missing or exits non-zero.
    """
    command_runner = run_command or _run_checked_command
    command_runner(install_command(package_manager, dependencies, dev=dev), Path(project_path))


def _run_checked_command(command: tuple[str, ...], cwd: Path) -> None:
    try:
        subprocess.run(list(command), cwd=cwd, check=True, capture_output=True, text=True)
    except FileNotFoundError as exc:
        raise PackageInstallError(f"Package manager not found: {shlex.join(command)}") from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit code {exc.returncode}"
        raise PackageInstallError(f"{shlex.join(command)} failed: {detail}") from exc
