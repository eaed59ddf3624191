"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import NoReturn

import click

from baasix_cli.api_access import (
    ApiError,
    BaasixApiClient,
    EndpointNotFoundError,
    ForbiddenError,
    MalformedResponseError,
    MigrationCommandResult,
    ServerUnreachableError,
    UnauthorizedError,
)
from baasix_cli.configuration import ConfigurationError, load_connection_settings
from baasix_cli.extension_scaffolding import (
    ExtensionRequest,
    ExtensionScaffoldError,
    ExtensionType,
    extension_directory,
    validate_extension_name,
    write_extension,
)
from baasix_cli.generation_run import (
    GenerationError,
    GenerationRequest,
    GenerationTarget,
    execute_generation_run,
)
from baasix_cli.migration_management import (
    MigrateAction,
    MigrationApi,
    MigrationError,
    build_migration_listing,
    build_migration_status,
    create_migration_file,
    fetch_executed_migrations,
    list_local_migrations,
    pending_migrations,
    reset_step_count,
    select_rollback,
    validate_migration_name,
)
from baasix_cli.project_scaffolding import (
    DEFAULT_DATABASE_URL,
    DEFAULT_PROJECT_NAME,
    DEFAULT_REDIS_URL,
    AuthService,
    CacheAdapter,
    PackageInstallError,
    ProjectScaffoldError,
    ProjectSettings,
    ProjectTemplate,
    S3Settings,
    StorageDriver,
    create_project,
    default_project_settings,
    detect_package_manager,
    install_dependencies,
    validate_project_name,
)

LOGGER = logging.getLogger("baasix_cli")
LOGGER.addHandler(logging.NullHandler())

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_API_ERROR_HINTS: tuple[tuple[type[ApiError], str], ...] = (
    (UnauthorizedError, "Check BAASIX_EMAIL/BAASIX_PASSWORD or BAASIX_TOKEN in your .env file."),
    (ForbiddenError, "The configured user needs administrator access to this endpoint."),
    (ServerUnreachableError, "Make sure the Baasix server is running or pass --url."),
    (EndpointNotFoundError, "This Baasix server does not expose the endpoint; check its version."),
    (MalformedResponseError, "Check that --url points at a Baasix server."),
)

_CWD_OPTION = click.option(
    "--cwd",
    "cwd",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Working directory",
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="baasix-cli")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """Baasix project scaffolding, type generation and migrations."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format=_LOG_FORMAT)


@cli.command(name="init")
@_CWD_OPTION
@click.option(
    "--template",
    "-t",
    "template",
    type=click.Choice([template.value for template in ProjectTemplate]),
    help="Project template",
)
@click.option("--name", "-n", "name", help="Project name")
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation prompts")
def init(cwd: Path, template: str | None, name: str | None, yes: bool) -> None:
    """Initialize a new Baasix project."""
    project_name = _validated(
        validate_project_name,
        name or click.prompt("What is your project name?", default=DEFAULT_PROJECT_NAME),
        ProjectScaffoldError,
    )
    project_template = ProjectTemplate(
        template
        or click.prompt(
            "Select a project template",
            type=click.Choice([choice.value for choice in ProjectTemplate]),
            default=ProjectTemplate.API.value,
        )
    )
    settings = (
        default_project_settings(project_name, project_template)
        if yes
        else _prompt_project_settings(project_name, project_template)
    )

    base_dir = cwd.resolve()
    project_path = base_dir / project_name
    if project_path.exists() and not yes:
        _confirm_or_cancel(f"Directory {project_name} already exists. Overwrite?", default=False)

    try:
        create_project(project_path, settings)
    except (ProjectScaffoldError, OSError) as exc:
        raise CliError(f"Failed to create project: {exc}") from exc
    click.echo(click.style("Project structure created", fg="green"))

    package_manager = detect_package_manager(base_dir)
    if yes or click.confirm(f"Install dependencies with {package_manager.value}?", default=True):
        try:
            install_dependencies(project_path, package_manager)
        except PackageInstallError as exc:
            LOGGER.debug("Dependency installation failed: %s", exc)
            click.echo(
                click.style("Failed to install dependencies. ", fg="yellow")
                + f"Run `cd {project_name} && {package_manager.value} install` to install manually",
                err=True,
            )
        else:
            click.echo("Dependencies installed")

    click.echo(click.style("Project created successfully!", fg="green"))
    click.echo()
    click.echo(click.style("Next steps:", bold=True))
    click.echo(f"  cd {project_name}")
    if project_template.is_nextjs:
        click.echo(f"  {package_manager.value} run dev  # Start Next.js frontend")
        click.echo()
        click.echo("  Note: This is a frontend-only project. You need a separate Baasix API.")
        click.echo("  To create an API: baasix init --template api")
    else:
        click.echo("  # Review and update your .env file")
        click.echo(f"  {package_manager.value} run dev")


@cli.command(name="generate")
@_CWD_OPTION
@click.option("--output", "-o", "output_path", help="Output file path")
@click.option(
    "--target",
    "-t",
    "target",
    type=click.Choice([target.value for target in GenerationTarget]),
    help="Generation target",
)
@click.option("--url", "url", help="Baasix server URL")
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation prompts")
def generate(
    cwd: Path, output_path: str | None, target: str | None, url: str | None, yes: bool
) -> None:
    """Generate TypeScript types from Baasix schemas."""
    generation_target = GenerationTarget(
        target
        or click.prompt(
            "What would you like to generate?",
            type=click.Choice([choice.value for choice in GenerationTarget]),
            default=GenerationTarget.TYPES.value,
        )
    )
    output = output_path or click.prompt(
        "Output file path", default=generation_target.default_output
    )
    request = GenerationRequest(
        cwd=cwd.resolve(), output_path=output, target=generation_target, url=url
    )

    def confirm_overwrite(destination: Path) -> bool:
        return click.confirm(f"File {destination.name} already exists. Overwrite?", default=True)

    try:
        outcome = execute_generation_run(
            request,
            client_factory=BaasixApiClient,
            confirm_overwrite=None if yes else confirm_overwrite,
        )
    except ApiError as exc:
        raise _api_failure(exc) from exc
    except GenerationError as exc:
        raise CliError(str(exc)) from exc

    if outcome.schema_count == 0:
        click.echo(click.style("No schemas found in your Baasix instance.", fg="yellow"), err=True)
        return
    if outcome.destination is None:
        _cancel()

    click.echo(
        click.style(f"Generated {output}", fg="green")
        + f" ({outcome.schema_count} collections)"
    )
    if generation_target.is_typescript:
        module_path = output.removesuffix(".d.ts").removesuffix(".ts")
        click.echo()
        click.echo(click.style("Usage:", bold=True))
        click.echo("  // Import types in your TypeScript files")
        click.echo(f'  import type {{ Products, Users }} from "./{module_path}";')


cli.add_command(generate, name="gen")


@cli.command(name="extension")
@_CWD_OPTION
@click.option(
    "--type",
    "-t",
    "extension_type",
    type=click.Choice([choice.value for choice in ExtensionType]),
    help="Extension type",
)
@click.option("--name", "-n", "name", help="Extension name")
@click.option("--collection", "collection", help="Collection name (for hooks)")
@click.option(
    "--typescript/--no-typescript",
    "typescript",
    default=None,
    help="Use TypeScript or JavaScript",
)
def extension(
    cwd: Path,
    extension_type: str | None,
    name: str | None,
    collection: str | None,
    typescript: bool | None,
) -> None:
    """Generate a new Baasix extension (hook or endpoint)."""
    kind = ExtensionType(
        extension_type
        or click.prompt(
            "What type of extension do you want to create?",
            type=click.Choice([choice.value for choice in ExtensionType]),
            default=ExtensionType.HOOK.value,
        )
    )
    extension_name = _validated(
        validate_extension_name,
        name or click.prompt("What is your extension name?", default=f"my-{kind.value}"),
        ExtensionScaffoldError,
    )
    if kind is ExtensionType.HOOK and not collection:
        collection = click.prompt("Which collection should this hook apply to?")
    if typescript is None:
        typescript = click.confirm("Use TypeScript?", default=False)

    request = ExtensionRequest(
        extension_type=kind, name=extension_name, collection=collection, typescript=typescript
    )
    overwrite = False
    if extension_directory(cwd, request).exists():
        _confirm_or_cancel(
            f"Extension {request.directory_name} already exists. Overwrite?", default=False
        )
        overwrite = True

    try:
        write_extension(cwd, request, overwrite=overwrite)
    except (ExtensionScaffoldError, OSError) as exc:
        raise CliError(f"Failed to create extension: {exc}") from exc

    relative_dir = f"extensions/{request.directory_name}"
    click.echo(click.style(f"Extension created at {relative_dir}/", fg="green"))
    click.echo()
    click.echo(click.style("Next steps:", bold=True))
    click.echo(f"  1. Edit {relative_dir}/index.{request.file_extension}")
    click.echo("  2. Restart your Baasix server to load the extension")


cli.add_command(extension, name="ext")


@cli.command(name="migrate")
@click.argument(
    "action",
    required=False,
    type=click.Choice([choice.value for choice in MigrateAction]),
)
@_CWD_OPTION
@click.option("--url", "url", help="Baasix server URL")
@click.option("--name", "-n", "name", help="Migration name (for create)")
@click.option(
    "--steps",
    "-s",
    "steps",
    default=1,
    show_default=True,
    type=click.IntRange(min=1),
    help="Number of batches to rollback",
)
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation prompts")
def migrate(
    action: str | None, cwd: Path, url: str | None, name: str | None, steps: int, yes: bool
) -> None:
    """Run or manage database migrations."""
    migrate_action = MigrateAction(
        action
        or click.prompt(
            "What migration action do you want to perform?",
            type=click.Choice([choice.value for choice in MigrateAction]),
            default=MigrateAction.STATUS.value,
        )
    )
    base_dir = cwd.resolve()
    if migrate_action is MigrateAction.CREATE:
        _create_migration(base_dir, name)
        return

    try:
        settings = load_connection_settings(base_dir, url_override=url)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc

    try:
        with BaasixApiClient(settings) as client:
            if migrate_action is MigrateAction.STATUS:
                _show_status(client, base_dir)
            elif migrate_action is MigrateAction.LIST:
                _list_migrations(client, base_dir)
            elif migrate_action is MigrateAction.RUN:
                _run_migrations(client, base_dir, yes=yes)
            elif migrate_action is MigrateAction.ROLLBACK:
                _rollback_migrations(client, steps, yes=yes)
            else:
                _reset_migrations(client, yes=yes)
    except ApiError as exc:
        raise _api_failure(exc) from exc


def _show_status(client: MigrationApi, cwd: Path) -> None:
    status = build_migration_status(list_local_migrations(cwd), fetch_executed_migrations(client))
    click.echo(click.style("Migration Status", bold=True))
    click.echo("-" * 50)
    click.echo(f"  Total migrations:    {status.total}")
    click.echo(f"  Executed:            {status.executed}")
    click.echo(f"  Pending:             {len(status.pending)}")
    click.echo()
    if not status.pending:
        click.echo(click.style("All migrations have been executed.", fg="green"))
        return
    click.echo(click.style("Pending migrations:", bold=True))
    for migration in status.pending:
        click.echo(f"  o {migration}")
    click.echo()
    click.echo("Run `baasix migrate run` to execute pending migrations.")


def _list_migrations(client: MigrationApi, cwd: Path) -> None:
    listing = build_migration_listing(
        list_local_migrations(cwd), fetch_executed_migrations(client)
    )
    click.echo(click.style("All Migrations", bold=True))
    click.echo("-" * 70)
    if not listing:
        click.echo("  No migrations found.")
        return
    for entry in listing:
        if entry.record is None:
            click.echo(f"  o {entry.name} (pending)")
            continue
        executed_on = (
            entry.record.executed_at.date().isoformat()
            if entry.record.executed_at
            else "unknown date"
        )
        batch = entry.record.batch if entry.record.batch is not None else "?"
        click.echo(
            click.style("  ✓ ", fg="green") + f"{entry.name} (batch {batch}, {executed_on})"
        )


def _run_migrations(client: MigrationApi, cwd: Path, *, yes: bool) -> None:
    pending = pending_migrations(list_local_migrations(cwd), fetch_executed_migrations(client))
    if not pending:
        click.echo("All migrations have already been executed.")
        return
    click.echo(click.style("Migrations to run:", bold=True))
    for name in pending:
        click.echo(f"  -> {name}")
    click.echo()
    if not yes:
        _confirm_or_cancel(f"Run {len(pending)} migration(s)?", default=True)
    _report_command_result(client.run_migrations(step=len(pending)))


def _rollback_migrations(client: MigrationApi, steps: int, *, yes: bool) -> None:
    executed = fetch_executed_migrations(client)
    if not executed:
        click.echo("No migrations have been executed.")
        return
    selected = select_rollback(executed, steps)
    click.echo(click.style("Migrations to rollback:", bold=True))
    for record in selected:
        batch = record.batch if record.batch is not None else "?"
        click.echo(f"  <- {record.name} (batch {batch})")
    click.echo()
    if not yes:
        _confirm_or_cancel(f"Rollback {len(selected)} migration(s)?", default=False)
    _report_command_result(client.rollback_migrations(step=steps))


def _reset_migrations(client: MigrationApi, *, yes: bool) -> None:
    executed = fetch_executed_migrations(client)
    if not executed:
        click.echo("No migrations have been executed.")
        return
    click.echo(click.style("This will rollback ALL migrations!", fg="red", bold=True), err=True)
    if not yes:
        _confirm_or_cancel(
            f"Reset all {len(executed)} migration(s)? This cannot be undone!", default=False
        )
        click.prompt("Type 'reset' to confirm", value_proc=_require_reset_word)
    _report_command_result(client.rollback_migrations(step=reset_step_count(executed)))


def _create_migration(cwd: Path, name: str | None) -> None:
    migration_name = _validated(
        validate_migration_name, name or click.prompt("Migration name"), MigrationError
    )
    try:
        destination = create_migration_file(cwd, migration_name)
    except (MigrationError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(click.style(f"Created migration: {destination.name}", fg="green"))
    click.echo(f"  Edit: {destination.relative_to(cwd)}")


def _report_command_result(result: MigrationCommandResult) -> None:
    if not result.success:
        raise CliError(result.message or "Migration command failed.")
    click.echo(click.style(result.message or "Done.", fg="green"))


def _require_reset_word(value: str) -> str:
    if value.strip() != "reset":
        raise click.BadParameter("Please type 'reset' to confirm")
    return value


def _validated(
    validator: Callable[[str], str], value: str, error_type: type[Exception]
) -> str:
    try:
        return validator(value)
    except error_type as exc:
        raise CliError(str(exc)) from exc


def _prompt_project_settings(
    project_name: str, template: ProjectTemplate
) -> ProjectSettings:
    if template.is_nextjs:
        # Frontend projects only point at an API; nothing else to ask.
        return default_project_settings(project_name, template)

    database_url = click.prompt("PostgreSQL connection URL", default=DEFAULT_DATABASE_URL)
    multi_tenant = click.confirm("Enable multi-tenancy?", default=False)
    public_registration = click.confirm("Allow public user registration?", default=True)
    socket_enabled = click.confirm("Enable real-time features (WebSocket)?", default=False)
    storage_driver = StorageDriver(
        click.prompt(
            "Select storage driver",
            type=click.Choice([choice.value for choice in StorageDriver]),
            default=StorageDriver.LOCAL.value,
        )
    )
    s3 = None
    if storage_driver is StorageDriver.S3:
        s3 = S3Settings(
            endpoint=click.prompt("S3 endpoint", default="s3.amazonaws.com"),
            bucket=click.prompt("S3 bucket name"),
            access_key=click.prompt("S3 Access Key ID"),
            secret_key=click.prompt("S3 Secret Access Key", hide_input=True),
            region=click.prompt("S3 Region", default="us-east-1"),
        )
    cache_adapter = CacheAdapter(
        click.prompt(
            "Select cache adapter",
            type=click.Choice([choice.value for choice in CacheAdapter]),
            default=CacheAdapter.MEMORY.value,
        )
    )
    redis_url = None
    if cache_adapter is CacheAdapter.REDIS:
        redis_url = click.prompt("Redis connection URL", default=DEFAULT_REDIS_URL)
    auth_services = click.prompt(
        "Select authentication methods (comma separated: "
        + ", ".join(service.value for service in AuthService)
        + ")",
        default=AuthService.LOCAL.value,
        value_proc=_parse_auth_services,
    )
    openapi_enabled = click.confirm("Enable OpenAPI documentation (Swagger)?", default=True)
    mail_enabled = click.confirm("Configure email sending?", default=False)
    return ProjectSettings(
        project_name=project_name,
        template=template,
        database_url=database_url,
        socket_enabled=socket_enabled,
        multi_tenant=multi_tenant,
        public_registration=public_registration,
        storage_driver=storage_driver,
        s3=s3,
        cache_adapter=cache_adapter,
        redis_url=redis_url,
        auth_services=auth_services,
        mail_enabled=mail_enabled,
        openapi_enabled=openapi_enabled,
    )


def _parse_auth_services(value: str) -> tuple[AuthService, ...]:
    services: list[AuthService] = []
    for token in value.split(","):
        label = token.strip().upper()
        if not label:
            continue
        try:
            service = AuthService(label)
        except ValueError as exc:
            raise click.BadParameter(f"Unknown authentication method: {label}") from exc
        if service not in services:
            services.append(service)
    if not services:
        raise click.BadParameter("Select at least one authentication method")
    return tuple(services)


def _confirm_or_cancel(message: str, *, default: bool) -> None:
    if not click.confirm(message, default=default):
        _cancel()


def _cancel() -> NoReturn:
    click.echo("Operation cancelled")
    click.get_current_context().exit(0)


def _api_failure(exc: ApiError) -> CliError:
    for error_type, hint in _API_ERROR_HINTS:
        if isinstance(exc, error_type):
            return CliError(f"{exc}\n{hint}")
    return CliError(str(exc))


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        result = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
