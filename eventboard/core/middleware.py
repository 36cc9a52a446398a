"""
HTTP middleware stack: CORS, request ids and per-request access logging.
"""

import time
from typing import Callable

import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from eventboard.config import Settings

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
# Health checks would drown the access log at INFO
QUIET_PATHS = frozenset({"/health"})


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access-log line per request, with the request context bound for every log call inside it."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        structlog.contextvars.bind_contextvars(method=request.method, path=request.url.path)
        try:
            # Unhandled errors are logged by the global exception handler
            response = await call_next(request)
            log = logger.debug if request.url.path in QUIET_PATHS else logger.info
            log(
                "Request handled",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
                client_ip=request.client.host if request.client else None,
            )
            return response
        finally:
            structlog.contextvars.unbind_contextvars("method", "path")


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Install middleware. Starlette runs the last one added outermost."""
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware, header_name=REQUEST_ID_HEADER)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
