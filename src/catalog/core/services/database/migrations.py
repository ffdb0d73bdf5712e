"""Linear up/down SQL migrations.

Migration files live in one directory and follow the naming convention
``NNNNNN_<name>.up.sql`` / ``NNNNNN_<name>.down.sql`` where ``NNNNNN`` is a
six-digit version. The applied version is kept in a single-row
``schema_migrations`` table together with a ``dirty`` flag that stays set
when a migration fails half-way.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

if TYPE_CHECKING:
    from loguru import Logger

MIGRATION_FILE = re.compile(r"^(?P<version>\d{6})_(?P<name>[\w-]+)\.(?P<direction>up|down)\.sql$")

_CREATE_VERSION_TABLE = (
    "CREATE TABLE IF NOT EXISTS schema_migrations "
    "(version BIGINT NOT NULL PRIMARY KEY, dirty BOOLEAN NOT NULL)"
)


class MigrationError(Exception):
    """A migration could not be planned or applied."""


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    up: Path | None = None
    down: Path | None = None

    @property
    def label(self) -> str:
        return f"{self.version:06d}_{self.name}"


def split_statements(sql: str) -> list[str]:
    """Split a script into statements on semicolons that end a line.

    Full-line ``--`` comments are dropped. This is enough for schema scripts;
    it does not understand dollar-quoted function bodies.
    """
    statements: list[str] = []
    current: list[str] = []
    for line in sql.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("--"):
            continue
        current.append(line)
        if stripped.endswith(";"):
            statement = "\n".join(current).strip().rstrip(";").strip()
            if statement:
                statements.append(statement)
            current = []
    tail = "\n".join(current).strip()
    if tail:
        statements.append(tail)
    return statements


def discover(directory: Path) -> list[Migration]:
    """Pair up/down files by version, ordered by version."""
    found: dict[int, dict[str, object]] = {}
    for path in sorted(directory.glob("*.sql")):
        match = MIGRATION_FILE.match(path.name)
        if match is None:
            continue
        version = int(match["version"])
        entry = found.setdefault(version, {"name": match["name"]})
        if entry["name"] != match["name"]:
            raise MigrationError(f"conflicting names for version {version:06d}")
        entry[match["direction"]] = path

    return [
        Migration(version=v, name=str(e["name"]), up=e.get("up"), down=e.get("down"))  # type: ignore[arg-type]
        for v, e in sorted(found.items())
    ]


class MigrationRunner:
    def __init__(self, engine: Engine, directory: Path, log: Logger) -> None:
        self._engine = engine
        self._directory = directory
        self._log = log.bind(component="migrations")

    def _ensure_table(self, conn: Connection) -> None:
        conn.execute(text(_CREATE_VERSION_TABLE))

    def _read_version(self, conn: Connection) -> tuple[int | None, bool]:
        row = conn.execute(text("SELECT version, dirty FROM schema_migrations")).first()
        if row is None:
            return None, False
        return int(row.version), bool(row.dirty)

    def _write_version(self, conn: Connection, version: int | None, dirty: bool) -> None:
        conn.execute(text("DELETE FROM schema_migrations"))
        if version is not None:
            conn.execute(
                text("INSERT INTO schema_migrations (version, dirty) VALUES (:version, :dirty)"),
                {"version": version, "dirty": dirty},
            )

    def current_version(self) -> tuple[int | None, bool]:
        """The applied version (None for an empty schema) and its dirty flag."""
        with self._engine.begin() as conn:
            self._ensure_table(conn)
            return self._read_version(conn)

    def pending(self) -> list[Migration]:
        version, _ = self.current_version()
        return [m for m in discover(self._directory) if version is None or m.version > version]

    def _run_script(self, migration: Migration, script: Path, target: int | None) -> None:
        statements = split_statements(script.read_text(encoding="utf-8"))
        with self._engine.begin() as conn:
            self._write_version(conn, migration.version, dirty=True)
        try:
            with self._engine.begin() as conn:
                for statement in statements:
                    conn.execute(text(statement))
                self._write_version(conn, target, dirty=False)
        except Exception as e:
            raise MigrationError(f"migration {script.name} failed: {e}") from e

    def _check_clean(self) -> int | None:
        version, dirty = self.current_version()
        if dirty:
            raise MigrationError(
                f"database is dirty at version {version:06d}; fix it manually before migrating"
            )
        return version

    def up(self) -> list[Migration]:
        """Apply every pending up script in version order."""
        self._check_clean()
        applied: list[Migration] = []
        for migration in self.pending():
            if migration.up is None:
                raise MigrationError(f"missing up script for {migration.label}")
            self._log.info("Applying migration", migration=migration.label)
            self._run_script(migration, migration.up, migration.version)
            applied.append(migration)

        if applied:
            self._log.info("Migrations applied successfully", count=len(applied))
        else:
            self._log.info("No new migrations to apply")
        return applied

    def down(self) -> Migration | None:
        """Roll back exactly the latest applied migration."""
        version = self._check_clean()
        if version is None:
            self._log.info("No migration to roll back")
            return None

        migrations = discover(self._directory)
        current = next((m for m in migrations if m.version == version), None)
        if current is None or current.down is None:
            raise MigrationError(f"missing down script for version {version:06d}")

        earlier = [m.version for m in migrations if m.version < version]
        target = earlier[-1] if earlier else None
        self._log.info("Rolling back migration", migration=current.label)
        self._run_script(current, current.down, target)
        self._log.info("Migration rolled back successfully", version=target)
        return current

    def create(self, name: str) -> tuple[Path, Path]:
        up, down = create_migration_files(name, self._directory)
        self._log.info("Created migration files", up=str(up), down=str(down))
        return up, down


def next_version(directory: Path) -> int:
    versions = [m.version for m in discover(directory)] if directory.exists() else []
    return max(versions, default=0) + 1


def create_migration_files(name: str, directory: Path) -> tuple[Path, Path]:
    """Write an empty up/down pair for the next version."""
    if not re.fullmatch(r"[\w-]+", name):
        raise MigrationError(f"invalid migration name {name!r}")

    directory.mkdir(parents=True, exist_ok=True)
    version = next_version(directory)
    created = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    paths = []
    for direction in ("up", "down"):
        path = directory / f"{version:06d}_{name}.{direction}.sql"
        path.write_text(
            f"-- Migration: {name}\n-- Created: {created}\n\n"
            f"-- Write your {direction.upper()} migration here\n",
            encoding="utf-8",
        )
        paths.append(path)
    return paths[0], paths[1]
