"""
Global exception handling for the application.
Every failure leaves the API in the same envelope:
{"error": {"code", "message", "details", "path"}}.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""

    code = "AppError"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        code: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        if code:
            self.code = code
        super().__init__(self.message)


class ApiError(AppError):
    """Error with an explicit HTTP status."""

    code = "ApiError"

    def __init__(self, status_code: int, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code, details)


class ValidationError(AppError):
    """Request data failed validation. `details` maps field name to message."""

    code = "ValidationError"

    def __init__(self, errors: Dict[str, str], message: str = "Validation failed."):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, dict(errors))

    @property
    def errors(self) -> Dict[str, str]:
        return self.details


class UnauthorizedError(AppError):
    """Authentication failure error."""

    code = "Unauthorized"

    def __init__(
        self,
        message: str = "Authentication failed. Access denied.",
        code: Optional[str] = None,
    ):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, code=code)


class ForbiddenError(AppError):
    """Authorization failure error."""

    code = "Forbidden"

    def __init__(
        self,
        message: str = "Permission denied. You do not have rights to access or modify this resource.",
    ):
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class NotFoundError(AppError):
    """Resource not found error."""

    code = "NotFound"

    def __init__(self, resource_name: str = "Resource", message: Optional[str] = None):
        super().__init__(message or f"{resource_name} not found.", status.HTTP_404_NOT_FOUND)


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "path": request.url.path,
            }
        },
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Request rejected",
        path=request.url.path,
        status_code=exc.status_code,
        code=exc.code,
        error_message=exc.message,
    )
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return _error_response(request, exc.status_code, exc.code, exc.message, exc.details, headers)


def _label(field: str) -> str:
    return field.replace("_", " ").capitalize()


def field_errors(items: Iterable[Mapping[str, Any]]) -> Dict[str, str]:
    """Flatten pydantic error items into a field -> message map, first message per field."""
    errors: Dict[str, str] = {}
    for item in items:
        loc = [str(part) for part in item.get("loc", ()) if part not in ("body", "query", "path")]
        field = (item.get("ctx") or {}).get("field") or ".".join(loc)
        message = item.get("msg", "Invalid value.")
        kind = item.get("type")
        if kind == "json_invalid":
            field, message = "body", "Request body must be valid JSON."
        elif kind == "missing":
            message = f"{_label(field)} is required." if field else "Request body is required."
            field = field or "body"
        elif not field:
            # Errors against the body as a whole: a list, a string, a number...
            field, message = "body", "Request body must be a JSON object."
        errors.setdefault(field, message)
    return errors


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Translate FastAPI's body/query parsing errors into the validation shape."""
    return await app_error_handler(request, ValidationError(field_errors(exc.errors()), "Request validation failed."))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"Endpoint {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    return _error_response(
        request,
        exc.status_code,
        "HTTPError",
        message,
        headers=getattr(exc, "headers", None),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    # Driver messages never reach the client.
    logger.warning("Integrity error escaped a service", path=request.url.path, error=str(exc.orig))
    return await app_error_handler(
        request,
        ValidationError({"general": "The request conflicts with existing data."}, "Database validation failed."),
    )


def build_global_exception_handler(production: bool):
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle all uncaught exceptions globally."""
        if isinstance(exc, AppError):
            return await app_error_handler(request, exc)

        logger.exception("Unexpected error occurred", path=request.url.path, method=request.method)

        details: Dict[str, Any] = {}
        if not production:
            details["exception"] = exc.__class__.__name__
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "InternalServerError",
            "Internal Server Error. An unexpected issue occurred.",
            details,
        )

    return global_exception_handler


def register_exception_handlers(app: FastAPI, production: bool) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, build_global_exception_handler(production))
