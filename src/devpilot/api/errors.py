"""Utilities for translating command failures into HTTP responses."""

from __future__ import annotations

from fastapi import status
from fastapi.responses import JSONResponse

from ..providers import (
    ConfigurationError,
    InvalidResponseError,
    NetworkError,
    ProtocolError,
    ProviderError,
)
from ..services.workspace import CommandError

# Every failure crosses the boundary as plain text; the status keeps the category.
_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (ConfigurationError, status.HTTP_424_FAILED_DEPENDENCY),
    (NetworkError, status.HTTP_502_BAD_GATEWAY),
    (ProtocolError, status.HTTP_502_BAD_GATEWAY),
    (InvalidResponseError, status.HTTP_502_BAD_GATEWAY),
    (ProviderError, status.HTTP_502_BAD_GATEWAY),
    (CommandError, status.HTTP_400_BAD_REQUEST),
    (OSError, status.HTTP_400_BAD_REQUEST),
)


def map_exception(exc: Exception) -> JSONResponse:
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, mapped_status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            http_status = mapped_status
            break
    return JSONResponse(status_code=http_status, content={"error": str(exc)})
