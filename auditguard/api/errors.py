"""Map persistence-policy errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from auditguard.domain.exceptions import (
    DataError,
    InvalidActorError,
    InvalidChangeError,
    NotFoundError,
    ReadOnlyEntityError,
    ReadOnlyScopeViolationError,
    StorageError,
)

_STATUS_CODES = (
    (NotFoundError, 404),
    (ReadOnlyScopeViolationError, 409),
    (ReadOnlyEntityError, 409),
    (InvalidActorError, 422),
    (InvalidChangeError, 422),
    (StorageError, 503),
    (DataError, 400),
)


def _handler(status_code: int):
    async def handle(request: Request, exc: DataError) -> JSONResponse:
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    return handle


def register_exception_handlers(app: FastAPI) -> None:
    """Install one handler per error type; the most specific handler wins."""
    for exc_type, status_code in _STATUS_CODES:
        app.add_exception_handler(exc_type, _handler(status_code))
