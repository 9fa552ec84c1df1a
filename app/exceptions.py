from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.log import get_logger

log = get_logger(__name__)


class AppError(Exception):
    """Base application error, rendered as ``{"error": {...}}``."""

    def __init__(
        self,
        message: str,
        code: str = "ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class BadRequestError(AppError):
    def __init__(self, message: str = "Bad request", details: dict[str, Any] | None = None):
        super().__init__(message, code="BAD_REQUEST", status_code=status.HTTP_400_BAD_REQUEST, details=details)


class InvalidPaginationInput(AppError):
    """Raised when ``page`` or ``limit`` is not a usable positive integer."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid '{field}' parameter: {reason}",
            code="INVALID_PAGINATION_INPUT",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": field, "value": value},
        )
        self.field = field
        self.value = value


def _error_body(request: Request, message: str, code: str, details: dict[str, Any]) -> dict[str, Any]:
    body: dict[str, Any] = {
        "error": {
            "message": message,
            "code": code,
            "details": details,
        }
    }
    if hasattr(request.state, "request_id"):
        body["request_id"] = request.state.request_id
    return body


async def app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
    log.info("app_error", code=exc.code, message=exc.message, path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(_error_body(request, exc.message, exc.code, exc.details)),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(
            _error_body(request, "Validation error", "VALIDATION_ERROR", {"errors": exc.errors()})
        ),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled_exception", path=request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, "Internal server error", "INTERNAL_ERROR", {}),
    )
