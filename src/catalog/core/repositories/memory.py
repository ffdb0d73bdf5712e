"""In-memory repository backend.

Entities live in a list ordered by identity and guarded by a reader/writer
lock. Identities come from a counter that starts at 1 and is never rewound,
so an identity is never reused after deletion.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Generic, TypeVar

from src.catalog.core.context import ExecutionContext
from src.catalog.core.errors import NotFoundError

if TYPE_CHECKING:
    from src.catalog.entities._base import Entity

E = TypeVar("E", bound="Entity")


class ReadWriteLock:
    """Lock allowing many concurrent readers or a single writer.

    Writers are preferred: once a writer is waiting, new readers block until
    it has finished.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class InMemoryRepository(Generic[E]):
    """Generic list-backed repository used by the in-memory entity stores.

    Subclasses set ``entity_name`` and may override ``_check_write`` and
    ``_check_delete`` (called before the write lock is taken) and
    ``_decorate`` (called on every copy after the lock is released). Hooks
    run outside the lock so that cross-repository lookups never nest locks.
    """

    entity_name = "entity"

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._items: list[E] = []
        self._counter = 0

    def _check_write(self, entity: E, ctx: ExecutionContext) -> None:
        pass

    def _check_delete(self, entity_id: int, ctx: ExecutionContext) -> None:
        pass

    def _decorate(self, entity: E, ctx: ExecutionContext) -> E:
        return entity

    def _index_of(self, entity_id: int) -> int:
        for index, existing in enumerate(self._items):
            if existing.id == entity_id:
                return index
        raise NotFoundError(self.entity_name, entity_id)

    def create(self, entity: E, ctx: ExecutionContext) -> E:
        ctx.check()
        self._check_write(entity, ctx)
        stored = entity.model_copy(deep=True)
        with self._lock.write():
            self._counter += 1
            now = datetime.now(UTC)
            stored.id = self._counter
            stored.created_at = now
            stored.updated_at = now
            # The counter only grows, so appending keeps the list ordered by id.
            self._items.append(stored)
            result = stored.model_copy(deep=True)
        return self._decorate(result, ctx)

    def update(self, entity: E, ctx: ExecutionContext) -> E:
        ctx.check()
        if not self.count_by_id(entity.id, ctx):
            raise NotFoundError(self.entity_name, entity.id)
        self._check_write(entity, ctx)
        stored = entity.model_copy(deep=True)
        with self._lock.write():
            index = self._index_of(entity.id)
            stored.created_at = self._items[index].created_at
            stored.updated_at = datetime.now(UTC)
            self._items[index] = stored
            result = stored.model_copy(deep=True)
        return self._decorate(result, ctx)

    def delete(self, entity_id: int, ctx: ExecutionContext) -> None:
        ctx.check()
        if not self.count_by_id(entity_id, ctx):
            raise NotFoundError(self.entity_name, entity_id)
        self._check_delete(entity_id, ctx)
        with self._lock.write():
            # Ordered removal keeps find_all sorted by identity.
            del self._items[self._index_of(entity_id)]

    def find_by_id(self, entity_id: int, ctx: ExecutionContext) -> E:
        ctx.check()
        with self._lock.read():
            result = self._items[self._index_of(entity_id)].model_copy(deep=True)
        return self._decorate(result, ctx)

    def find_all(self, ctx: ExecutionContext) -> list[E]:
        ctx.check()
        with self._lock.read():
            results = [item.model_copy(deep=True) for item in self._items]
        return [self._decorate(item, ctx) for item in results]

    def count_by_id(self, entity_id: int, ctx: ExecutionContext) -> int:
        ctx.check()
        with self._lock.read():
            return int(any(item.id == entity_id for item in self._items))

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._items)
