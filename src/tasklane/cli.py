"""Command-line interface for Tasklane.

Seeds and wipes the authorization graph, inspects a user's access and
runs the HTTP adapter.
"""

import asyncio
from typing import NoReturn

import click

from tasklane.core.config import Settings, get_settings
from tasklane.core.logging import configure_logging, get_logger
from tasklane.infrastructure.persistence.database import (
    DatabaseManager,
    ensure_sqlite_directory,
    get_db_manager,
)


def _load_settings(ctx: click.Context) -> Settings:
    """Settings with the group-level log level override applied."""
    settings = get_settings()
    log_level = (ctx.obj or {}).get("log_level")
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)
    return settings


async def _connect(db: DatabaseManager) -> None:
    """Abort with exit code 1 if the database is unreachable."""
    ensure_sqlite_directory(db.database_url)
    if not await db.check_connection():
        click.echo("ERROR: Could not connect to the database.", err=True)
        raise SystemExit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="Tasklane")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides TASKLANE_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Tasklane - role-based access control for task boards."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level


@cli.command()
@click.option(
    "--no-users",
    is_flag=True,
    default=False,
    help="Seed permissions and roles only, skip the sample users",
)
@click.pass_context
def seed(ctx: click.Context, no_users: bool) -> None:
    """Seed permissions, roles and sample users.

    Safe to run repeatedly: existing permissions and roles are updated in
    place and every role ends up with exactly its catalog permissions.
    """
    from tasklane.infrastructure.persistence.rbac_seeder import AuthorizationSeeder

    settings = _load_settings(ctx)
    logger = get_logger(__name__)
    include_users = settings.seed_sample_users and not no_users

    async def run() -> None:
        db = get_db_manager()
        try:
            await _connect(db)
            if not settings.is_production:
                await db.create_tables()
            async with db.session() as session:
                summary = await AuthorizationSeeder(session).seed(
                    include_users=include_users,
                    sample_password=settings.sample_user_password,
                )
        finally:
            await db.disconnect()

        click.echo(
            f"Seeded {summary.permission_count} permissions, "
            f"{summary.role_count} roles, "
            f"{summary.users_created + summary.users_updated} users."
        )
        for role_name, count in summary.role_permission_counts.items():
            click.echo(f"  {role_name:<16} {count} permissions")

    try:
        asyncio.run(run())
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        click.echo(f"ERROR: Seeding failed: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.option("--force", is_flag=True, help="Allow running in production")
@click.pass_context
def clean(ctx: click.Context, yes: bool, force: bool) -> None:
    """Delete ALL users, roles and permissions.

    This is irreversible and not limited to seeded data.
    """
    from tasklane.infrastructure.persistence.rbac_seeder import AuthorizationSeeder

    settings = _load_settings(ctx)
    logger = get_logger(__name__)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Refusing to clean a production database without --force.",
            err=True,
        )
        raise SystemExit(1)

    if not yes:
        click.confirm(
            "This will delete every user, role and permission. Continue?",
            abort=True,
            default=False,
        )

    async def run() -> None:
        db = get_db_manager()
        try:
            await _connect(db)
            async with db.session() as session:
                summary = await AuthorizationSeeder(session).clean()
        finally:
            await db.disconnect()

        click.echo(
            f"Deleted {summary.users_deleted} users, {summary.roles_deleted} roles, "
            f"{summary.permissions_deleted} permissions."
        )

    try:
        asyncio.run(run())
    except Exception as e:
        logger.error("Cleanup failed", error=str(e))
        click.echo(f"ERROR: Cleanup failed: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create all database tables.

    Use this in development; production deployments run migrations.
    """
    _load_settings(ctx)
    logger = get_logger(__name__)

    async def run() -> None:
        db = get_db_manager()
        try:
            await _connect(db)
            await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    try:
        asyncio.run(run())
    except Exception as e:
        logger.error("Database initialization failed", error=str(e))
        click.echo(f"ERROR: Database initialization failed: {e}", err=True)
        raise SystemExit(1)


@cli.command()
@click.argument("user")
@click.option(
    "--permission",
    "permission_name",
    default=None,
    help="Only report whether the user holds this permission",
)
@click.pass_context
def check(ctx: click.Context, user: str, permission_name: str | None) -> None:
    """Show the roles and effective permissions of USER (id or email).

    With --permission, exits 0 if the user holds it and 1 otherwise.
    """
    from tasklane.domain.services import AuthorizationService
    from tasklane.infrastructure.persistence.repositories import UserRepository

    _load_settings(ctx)

    async def run() -> bool:
        db = get_db_manager()
        try:
            await _connect(db)
            async with db.session() as session:
                repo = UserRepository(session)
                if "@" in user:
                    model = await repo.get_by_email_with_roles(user)
                else:
                    model = await repo.get_by_id_with_roles(user)
                if model is None:
                    click.echo(f"User not found: {user}", err=True)
                    return False

                service = AuthorizationService(session)
                if permission_name is not None:
                    granted = await service.has_permission(model.id, permission_name)
                    click.echo(f"{permission_name}: {'granted' if granted else 'denied'}")
                    return granted

                roles = sorted(model.role_names)
                permissions = sorted(await service.effective_permissions(model.id))
                click.echo(f"User:        {model.id} ({model.email})")
                click.echo(f"Roles:       {', '.join(roles) or '(none)'}")
                click.echo(f"Permissions: {len(permissions)}")
                for name in permissions:
                    click.echo(f"  {name}")
                return True
        finally:
            await db.disconnect()

    if not asyncio.run(run()):
        raise SystemExit(1)


@cli.command()
@click.argument("email")
@click.option(
    "--expires-minutes",
    type=int,
    default=None,
    help="Token lifetime (defaults to TASKLANE_ACCESS_TOKEN_EXPIRE_MINUTES)",
)
@click.pass_context
def token(ctx: click.Context, email: str, expires_minutes: int | None) -> None:
    """Issue an access token for the user with EMAIL.

    Meant for exercising the API locally.
    """
    from datetime import timedelta

    from tasklane.infrastructure.auth import jwt_service
    from tasklane.infrastructure.persistence.repositories import UserRepository

    _load_settings(ctx)

    async def run() -> str | None:
        db = get_db_manager()
        try:
            await _connect(db)
            async with db.session() as session:
                model = await UserRepository(session).get_by_email_with_roles(email)
                return model.id if model is not None else None
        finally:
            await db.disconnect()

    user_id = asyncio.run(run())
    if user_id is None:
        click.echo(f"User not found: {email}", err=True)
        raise SystemExit(1)

    expires_delta = timedelta(minutes=expires_minutes) if expires_minutes else None
    click.echo(jwt_service.create_access_token(user_id, email, expires_delta=expires_delta))


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool) -> None:
    """Start the Tasklane HTTP server."""
    import uvicorn

    settings = _load_settings(ctx)
    bind_host = host or settings.host
    bind_port = port or settings.port

    logger = get_logger(__name__)
    logger.info(
        "Starting Tasklane server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "tasklane.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
def info() -> None:
    """Display Tasklane configuration."""
    settings = get_settings()

    click.echo(f"""
Tasklane v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Security:
  Token Expire: {settings.access_token_expire_minutes} minutes

Seeding:
  Sample Users: {settings.seed_sample_users}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `tasklane` console script and by `python -m tasklane`.
    """
    cli()


if __name__ == "__main__":
    main()
