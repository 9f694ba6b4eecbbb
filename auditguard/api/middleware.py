"""API middleware: correlation ID, acting-user identity, read-only request scope."""

import logging
import uuid
from typing import Any, Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from auditguard.core.context import actor_id_ctx, correlation_id_ctx
from auditguard.security.read_only_scope import ReadOnlyScope

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
USER_HEADER = "X-User-ID"
SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Generate or preserve correlation ID; attach to request.state, response header, and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        correlation_id_ctx.set(correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class ActorIdentityMiddleware(BaseHTTPMiddleware):
    """Parse X-User-ID into the request-scoped actor context; 400 if it cannot be parsed."""

    def __init__(self, app, parse: Callable[[str], Any] = uuid.UUID) -> None:
        super().__init__(app)
        self._parse = parse

    async def dispatch(self, request: Request, call_next) -> Response:
        raw = request.headers.get(USER_HEADER)
        actor_id: Optional[Any] = None
        if raw and raw.strip():
            try:
                actor_id = self._parse(raw.strip())
            except ValueError:
                return JSONResponse(
                    status_code=400,
                    content={"detail": f"{USER_HEADER} header is not a valid user id"},
                )
        request.state.actor_id = actor_id
        actor_id_ctx.set(actor_id)
        return await call_next(request)


class ReadOnlyRequestMiddleware(BaseHTTPMiddleware):
    """Run safe-method requests (GET, HEAD, OPTIONS) inside a ReadOnlyScope."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method not in SAFE_METHODS:
            return await call_next(request)
        with ReadOnlyScope():
            logger.debug("read_only_request", extra={"path": request.url.path})
            return await call_next(request)
