"""Response envelope shared by every API endpoint."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class WebResponse(BaseModel, Generic[T]):
    """Uniform ``{data, errors}`` wrapper.

    ``errors`` is omitted from the serialized body when there is no error.
    """

    data: T | None = None
    errors: str | None = None

    def to_body(self) -> dict[str, Any]:
        body = self.model_dump(mode="json")
        if body.get("errors") is None:
            body.pop("errors", None)
        return body
