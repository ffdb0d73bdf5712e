"""Catalog command line tools."""

import typer

from .migrate_commands import migrate_app

app = typer.Typer(
    help="🛠️  Catalog API CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(migrate_app, name="migrate")


def main() -> None:
    """Entry point for ``catalog``."""
    app()


def migrate() -> None:
    """Entry point for ``catalog-migrate``."""
    migrate_app()


if __name__ == "__main__":
    main()
