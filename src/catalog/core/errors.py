"""Error types shared across the catalog layers.

Repositories raise subclasses of :class:`RepositoryError`. Services translate
those into :class:`UseCaseError`, whose :class:`ErrorKind` tells the HTTP
layer which status code to send.
"""

from __future__ import annotations

from enum import Enum


class RepositoryError(Exception):
    """Base class for persistence failures."""


class NotFoundError(RepositoryError):
    """No entity exists with the requested identity."""

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConstraintError(RepositoryError):
    """A write would violate referential or schema integrity."""


class StorageError(RepositoryError):
    """The storage backend failed (connection lost, bad statement, ...)."""


class OperationCancelledError(RepositoryError):
    """The execution context was cancelled or its deadline passed."""


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class UseCaseError(Exception):
    """Failure surfaced by a service to the delivery layer.

    ``message`` is safe to show to clients; the underlying cause, if any,
    is chained and only ever logged.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def bad_request(cls, message: str) -> UseCaseError:
        return cls(ErrorKind.BAD_REQUEST, message)

    @classmethod
    def not_found(cls, message: str) -> UseCaseError:
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def internal(cls, message: str) -> UseCaseError:
        return cls(ErrorKind.INTERNAL, message)
