"""Exception handlers producing structured error bodies."""
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import AppError
from .logging import get_logger

logger = get_logger(__name__)


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    code: int = Field(..., description="HTTP status code")
    type: str = Field(..., description="Error class name")
    message: str = Field(..., description="Human-readable message")
    formatted_message: str = Field(..., description="Message formatted for display")
    extra_data: Dict[str, Any] = Field(default_factory=dict)
    success: bool = False


def error_response(
    code: int,
    error_type: str,
    message: str,
    extra_data: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        code=code,
        type=error_type,
        message=message,
        formatted_message=message,
        extra_data=extra_data or {},
    )
    return JSONResponse(status_code=code, content=body.model_dump(mode="json"))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "app_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        status=exc.status_code,
        message=exc.message,
    )
    return error_response(exc.status_code, type(exc).__name__, exc.message, exc.details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.info("request_validation_failed", path=request.url.path, errors=len(errors))
    return error_response(
        422,
        "ValidationError",
        "Request validation failed.",
        {"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, "HTTPException", str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
        exc_info=True,
    )
    return error_response(500, type(exc).__name__, "An internal error occurred.")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
