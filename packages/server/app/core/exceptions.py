"""
Service exception hierarchy and the FastAPI handlers that render it.

Services raise these types; they never build HTTP responses themselves.
Every error reaches the caller as

    {"error": {"code": "<ErrorCode>", "message": "...", "status": <int>}}

Usage:
    from app.core.exceptions import ForeignKeyError, ValidationError

    raise ValidationError("role is not in the role catalog")
    raise ForeignKeyError(resource="User", resource_id=user_id)
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pms_shared.schemas.common import ErrorCode

log = structlog.get_logger()


class AssignmentServiceError(Exception):
    """Base class. Subclasses fix the error code and HTTP status."""

    code: ErrorCode = ErrorCode.STORAGE_ERROR
    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AssignmentServiceError):
    """Missing or blank required field, unknown role, malformed body."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400


class ForeignKeyError(AssignmentServiceError):
    """A project or user id does not resolve to an existing record.

    Args:
        resource: Entity name, e.g. "Project" or "User".
        resource_id: The id that was looked up.
    """

    code = ErrorCode.FOREIGN_KEY_ERROR
    status_code = 422

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"Invalid {resource.lower()}Id: {resource_id!r} does not exist")


class NotFoundError(AssignmentServiceError):
    """Delete-by-id target is absent."""

    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class StorageError(AssignmentServiceError):
    """Transaction or store failure, including timeouts and aborted reconciliations."""

    code = ErrorCode.STORAGE_ERROR
    status_code = 503


# ---------------------------------------------------------------------------
# HTTP mapping
# ---------------------------------------------------------------------------


def error_response(code: ErrorCode, message: str, status: int, detail=None) -> JSONResponse:
    content: dict = {"error": {"code": code.value, "message": message, "status": status}}
    if detail is not None:
        content["detail"] = detail
    return JSONResponse(status_code=status, content=content)


async def _service_error_handler(request: Request, exc: AssignmentServiceError) -> JSONResponse:
    log_method = log.error if isinstance(exc, StorageError) else log.warning
    log_method(
        "request.failed",
        code=exc.code.value,
        status=exc.status_code,
        error=exc.message,
    )
    return error_response(exc.code, exc.message, exc.status_code)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.warning("request.invalid", errors=len(exc.errors()))
    return error_response(
        ErrorCode.VALIDATION_ERROR,
        "Malformed request",
        400,
        detail=jsonable_errors(exc),
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Strip the non-serializable parts (ctx, input) of pydantic error entries."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


_HTTP_STATUS_CODES = {
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
}


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    code = _HTTP_STATUS_CODES.get(exc.status_code)
    if code is None:
        return await http_exception_handler(request, exc)
    response = error_response(code, str(exc.detail), exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AssignmentServiceError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
