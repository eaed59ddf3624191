"""Package manager detection and installation tests."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest
from baasix_cli.project_scaffolding import (
    PackageInstallError,
    PackageManager,
    detect_package_manager,
    install_command,
    install_dependencies,
)
from baasix_cli.project_scaffolding import package_manager as package_manager_module


@pytest.mark.parametrize(
    ("lockfile", "expected"),
    [
        ("bun.lockb", PackageManager.BUN),
        ("pnpm-lock.yaml", PackageManager.PNPM),
        ("yarn.lock", PackageManager.YARN),
        ("package-lock.json", PackageManager.NPM),
    ],
)
def test_detect_package_manager_from_lockfile(
    tmp_path: Path, lockfile: str, expected: PackageManager
) -> None:
    (tmp_path / lockfile).write_text("", encoding="utf-8")

    assert detect_package_manager(tmp_path) is expected


def test_detect_package_manager_prefers_bun_then_pnpm(tmp_path: Path) -> None:
    for lockfile in ("yarn.lock", "pnpm-lock.yaml", "bun.lockb"):
        (tmp_path / lockfile).write_text("", encoding="utf-8")

    assert detect_package_manager(tmp_path) is PackageManager.BUN


def test_detect_package_manager_defaults_to_npm(tmp_path: Path) -> None:
    assert detect_package_manager(tmp_path) is PackageManager.NPM


@pytest.mark.parametrize(
    ("manager", "dependencies", "dev", "expected"),
    [
        (PackageManager.NPM, (), False, ("npm", "install")),
        (PackageManager.NPM, ("zod",), True, ("npm", "install", "--save-dev", "zod")),
        (PackageManager.PNPM, (), False, ("pnpm", "install")),
        (PackageManager.PNPM, ("zod", "ky"), False, ("pnpm", "add", "zod", "ky")),
        (PackageManager.YARN, ("zod",), True, ("yarn", "add", "-D", "zod")),
        (PackageManager.BUN, (), True, ("bun", "install")),
    ],
)
def test_install_command(
    manager: PackageManager,
    dependencies: tuple[str, ...],
    dev: bool,
    expected: tuple[str, ...],
) -> None:
    assert install_command(manager, dependencies, dev=dev) == expected


def test_install_dependencies_runs_in_project_directory(tmp_path: Path) -> None:
    calls: list[tuple[tuple[str, ...], Path]] = []

    install_dependencies(
        tmp_path,
        PackageManager.PNPM,
        run_command=lambda command, cwd: calls.append((command, cwd)),
    )

    assert calls == [(("pnpm", "install"), tmp_path)]


def test_missing_executable_is_reported(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def missing(*_args: Any, **_kwargs: Any) -> None:
        raise FileNotFoundError("bun")

    monkeypatch.setattr(package_manager_module.subprocess, "run", missing)

    with pytest.raises(PackageInstallError, match="Package manager not found: bun install"):
        install_dependencies(tmp_path, PackageManager.BUN)


def test_failed_install_reports_stderr(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def failing(command: list[str], **_kwargs: Any) -> None:
        raise subprocess.CalledProcessError(1, command, stderr="ERR_PNPM_FETCH_404\n")

    monkeypatch.setattr(package_manager_module.subprocess, "run", failing)

    with pytest.raises(PackageInstallError, match="pnpm install failed: ERR_PNPM_FETCH_404"):
        install_dependencies(tmp_path, PackageManager.PNPM)
