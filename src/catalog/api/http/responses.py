"""Helpers that render results in the ``{data, errors}`` envelope."""

import re
from typing import Any

from fastapi import status
from starlette.responses import JSONResponse

from src.catalog.core.errors import ErrorKind, UseCaseError
from src.catalog.core.models.web import WebResponse

_ID_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

# Identities are stored as signed 64-bit integers
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1

STATUS_BY_KIND = {
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class InvalidPathIdError(Exception):
    """A path identity segment is not an integer."""

    def __init__(self, resource: str, raw: str) -> None:
        super().__init__(f"Invalid {resource} ID")
        self.resource = resource
        self.raw = raw


def parse_id(raw: str, resource: str) -> int:
    """Parse an integer path identity, rejecting anything else with a 400."""
    if not _ID_PATTERN.fullmatch(raw):
        raise InvalidPathIdError(resource, raw)
    value = int(raw)
    if not ID_MIN <= value <= ID_MAX:
        raise InvalidPathIdError(resource, raw)
    return value


def write_json(status_code: int, data: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=WebResponse(data=data).to_body())


def write_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=WebResponse(errors=message).to_body()
    )


def write_use_case_error(error: UseCaseError) -> JSONResponse:
    return write_error(STATUS_BY_KIND[error.kind], error.message)
