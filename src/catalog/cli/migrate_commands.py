"""Database migration CLI commands."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.services.database import DbSessionService, MigrationError, MigrationRunner
from src.catalog.core.services.database.migrations import create_migration_files, discover
from src.catalog.runtime.config.config_data import load_config

console = Console()

DEFAULT_MIGRATIONS_DIR = Path("migrations")

migrate_app = typer.Typer(
    help="Manage the catalog database schema",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

MigrationsDir = typer.Option(
    DEFAULT_MIGRATIONS_DIR,
    "--dir",
    "-d",
    help="Directory holding NNNNNN_<name>.up.sql / .down.sql files",
    file_okay=False,
)


def get_runner(migrations_dir: Path) -> tuple[MigrationRunner, DbSessionService]:
    """Connect to the configured database, or exit when none is configured."""
    config = load_config()
    log = configure_logging(config)

    if not config.database.enabled:
        log.warning("Database not configured, skipping migrations")
        console.print("[yellow]⚠️  DB_HOST is not set, nothing to migrate[/yellow]")
        raise typer.Exit(code=0)

    database = DbSessionService(config, log)
    if not database.health_check():
        database.close()
        console.print("[red]❌ Failed to connect to the database[/red]")
        raise typer.Exit(code=1)

    log.info("Database connection established for migrations")
    return MigrationRunner(database.engine, migrations_dir, log), database


@migrate_app.command("up")
def migrate_up(migrations_dir: Path = MigrationsDir) -> None:
    """Apply all pending migrations."""
    runner, database = get_runner(migrations_dir)
    try:
        applied = runner.up()
    except MigrationError as e:
        console.print(f"[red]❌ Failed to run migrations: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        database.close()

    if not applied:
        console.print("[green]✅ No new migrations to apply[/green]")
        return
    for migration in applied:
        console.print(f"[green]✅ Applied {migration.label}[/green]")


@migrate_app.command("down")
def migrate_down(migrations_dir: Path = MigrationsDir) -> None:
    """Roll back the latest applied migration."""
    runner, database = get_runner(migrations_dir)
    try:
        rolled_back = runner.down()
    except MigrationError as e:
        console.print(f"[red]❌ Failed to roll back migration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        database.close()

    if rolled_back is None:
        console.print("[yellow]Nothing to roll back[/yellow]")
    else:
        console.print(f"[green]✅ Rolled back {rolled_back.label}[/green]")


@migrate_app.command("create")
def migrate_create(
    name: str = typer.Argument(..., help="Short snake_case name for the migration"),
    migrations_dir: Path = MigrationsDir,
) -> None:
    """Create an empty up/down migration pair with the next version number."""
    try:
        up, down = create_migration_files(name, migrations_dir)
    except MigrationError as e:
        console.print(f"[red]❌ Failed to create migration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    console.print("[green]✅ Created migration files:[/green]")
    console.print(f"   UP:   {up}")
    console.print(f"   DOWN: {down}")


@migrate_app.command("status")
def migrate_status(migrations_dir: Path = MigrationsDir) -> None:
    """Show applied and pending migrations."""
    runner, database = get_runner(migrations_dir)
    try:
        version, dirty = runner.current_version()
    finally:
        database.close()

    table = Table(title="Migrations")
    table.add_column("Version", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Status", style="yellow")

    for migration in discover(migrations_dir):
        if version is not None and migration.version < version:
            status = "applied"
        elif migration.version == version:
            status = "dirty" if dirty else "applied"
        else:
            status = "pending"
        table.add_row(f"{migration.version:06d}", migration.name, status)

    console.print(table)
