"""Database engine and session factory shared by the relational repositories."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from src.catalog.runtime.config.config_data import ConfigData

if TYPE_CHECKING:
    from loguru import Logger


_POOL_COUNTERS = {
    "size": "size",
    "checked_in": "checkedin",
    "checked_out": "checkedout",
    "overflow": "overflow",
}


class DbSessionService:
    def __init__(self, config: ConfigData, log: "Logger", engine: Engine | None = None):
        """Create (or adopt) the engine shared by every relational repository."""
        self._log = log.bind(component="database")
        self._config = config
        db_config = config.database

        if engine is not None:
            self._engine = engine
        else:
            self._engine = create_engine(
                db_config.connection_string, **self._engine_kwargs(config)
            )

        if self._engine.dialect.name == "sqlite":
            # SQLite only enforces foreign keys when asked to, per connection.
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)

        url = make_url(db_config.connection_string)
        self._log.info(
            "Database engine initialized",
            backend=self._engine.dialect.name,
            host=url.host,
            database=url.database,
            pool_mode=db_config.pool_mode or None,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def dialect(self) -> str:
        return self._engine.dialect.name

    def _engine_kwargs(self, config: ConfigData) -> dict[str, Any]:
        db_config = config.database
        url = make_url(db_config.connection_string)

        if url.get_backend_name() == "sqlite":
            kwargs: dict[str, Any] = {
                "echo": False,
                "connect_args": {"check_same_thread": False, "timeout": 20},
            }
            if url.database in (None, "", ":memory:"):
                # One shared connection, otherwise every checkout sees an empty database
                kwargs["poolclass"] = StaticPool
            if config.app.environment == "production":
                self._log.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
            return kwargs

        return {
            "pool_size": db_config.pool_size,
            "max_overflow": db_config.max_overflow,
            "pool_timeout": db_config.pool_timeout,
            "pool_recycle": db_config.pool_recycle,
            "pool_pre_ping": True,
            "echo": False,
            "connect_args": {"connect_timeout": db_config.connect_timeout},
        }

    def get_session(self) -> Session:
        """New session on the shared engine; objects stay usable after commit."""
        return Session(self._engine, expire_on_commit=False, autoflush=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on any exception."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except BaseException as e:
            session.rollback()
            self._log.debug("Transaction rolled back after {}", type(e).__name__)
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """Round-trip a trivial query; False when the database is unreachable."""
        try:
            with self._engine.connect() as conn:
                conn.scalar(text("SELECT 1"))
            return True
        except Exception as e:
            self._log.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def get_pool_status(self) -> dict[str, int]:
        """Connection pool counters; pools without a counter (SQLite) report 0."""
        pool = self._engine.pool
        status = {}
        for key, method in _POOL_COUNTERS.items():
            counter = getattr(pool, method, None)
            status[key] = int(counter()) if callable(counter) else 0
        return status

    def close(self) -> None:
        """Dispose of the connection pool."""
        self._engine.dispose()
        self._log.info("Database connection closed")


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
