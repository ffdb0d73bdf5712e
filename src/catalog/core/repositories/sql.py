"""Relational repository backend built on SQLModel sessions."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from sqlmodel import Session

from src.catalog.core.context import ExecutionContext
from src.catalog.core.errors import (
    ConstraintError,
    NotFoundError,
    RepositoryError,
    StorageError,
)

if TYPE_CHECKING:
    from src.catalog.core.services.database.db_session import DbSessionService


class SqlRepository:
    """Shared plumbing for the relational repositories.

    Each operation runs in its own short session: statements are committed
    together on success and rolled back on failure. Driver errors are
    translated into the repository error hierarchy; ``RepositoryError``
    raised by the operation itself passes through untouched.
    """

    entity_name = "entity"

    def __init__(self, database: DbSessionService) -> None:
        self._database = database

    @contextmanager
    def _session(self, ctx: ExecutionContext, entity_id: int | None = None) -> Iterator[Session]:
        ctx.check()
        try:
            with self._database.session_scope() as session:
                self._apply_deadline(session, ctx)
                yield session
        except RepositoryError:
            raise
        except NoResultFound as e:
            raise NotFoundError(self.entity_name, entity_id or 0) from e
        except IntegrityError as e:
            raise ConstraintError(f"{self.entity_name} violates a constraint") from e
        except SQLAlchemyError as e:
            raise StorageError(f"{self.entity_name} storage failure: {type(e).__name__}") from e

    def _apply_deadline(self, session: Session, ctx: ExecutionContext) -> None:
        remaining = ctx.remaining()
        if remaining is None or self._database.dialect != "postgresql":
            return
        timeout_ms = max(1, int(remaining * 1000))
        # SET does not accept bind parameters; the value is an integer we computed.
        session.execute(text(f"SET LOCAL statement_timeout = {timeout_ms}"))
