"""Global exception handlers for the FastAPI application.

Every error leaving the API is rendered as an ``ErrorResponse``. Registry
errors map to HTTP status codes by category:

- ValidationError -> 400
- NotFoundError -> 404
- ConflictError -> 409
- any other RegistryError -> 500
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from src.api.constants import HTTP_422_UNPROCESSABLE, HTTP_500_INTERNAL_SERVER_ERROR
from src.api.schemas.errors import ErrorResponse, ServiceInfo
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.context import RequestContext, generate_request_id
from src.core.error_context import sanitize_dict, sanitize_error_context
from src.core.exceptions import (
    ConflictError,
    ErrorCode,
    NotFoundError,
    RegistryError,
    Severity,
    ValidationError,
)


def get_service_info(settings: Settings) -> ServiceInfo:
    """Create ServiceInfo from application settings."""
    return ServiceInfo(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


def _status_for(exc: RegistryError) -> int:
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(
    settings: Settings,
    *,
    status_code: int,
    error_code: str,
    message: str,
    severity: str,
    details: dict[str, object] | None = None,
    debug_info: dict[str, object] | None = None,
) -> Response:
    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        correlation_id=RequestContext.get_correlation_id(),
        request_id=RequestContext.get_request_id() or generate_request_id(),
        severity=severity,
        service_info=get_service_info(settings),
        debug_info=debug_info,
    )
    return ORJSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


async def registry_error_handler(request: Request, exc: Exception) -> Response:
    """Handle RegistryError exceptions.

    Args:
        request: The request that caused the exception
        exc: The RegistryError to handle

    Returns:
        Response: ORJSONResponse with the error kind and sanitized details

    Raises:
        TypeError: If exc is not a RegistryError instance
    """
    if not isinstance(exc, RegistryError):
        raise TypeError(f"Expected RegistryError, got {type(exc).__name__}")

    settings = get_settings()
    status_code = _status_for(exc)

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
            "error_code": exc.error_code,
        },
    )
    logger.warning(
        "Handling {exception_type}: {message}",
        exception_type=type(exc).__name__,
        message=exc.message,
        status_code=status_code,
        **error_context,
    )

    debug_info = None
    if settings.environment == "development":
        debug_info = {
            "stack_trace": exc.stack_trace,
            "exception_type": type(exc).__name__,
        }
        if exc.cause:
            debug_info["cause"] = {
                "type": type(exc.cause).__name__,
                "message": str(exc.cause),
            }

    return _error_response(
        settings,
        status_code=status_code,
        error_code=exc.error_code,
        message=exc.message,
        severity=exc.severity.value,
        details=sanitize_dict(exc.context) if exc.context else None,
        debug_info=debug_info,
    )


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle FastAPI RequestValidationError exceptions.

    Malformed bodies (missing fields, unknown role, wrong types) are grouped
    by field and returned with status 422.

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # ('body', 'email') -> 'email'
        field_path = error.get("loc", ())
        field_name = ".".join(str(loc) for loc in field_path[1:]) or "root"
        field_errors.setdefault(field_name, []).append(
            error.get("msg", "Invalid value")
        )

    logger.warning(
        "Request validation failed",
        status_code=HTTP_422_UNPROCESSABLE,
        path=str(request.url.path),
        method=request.method,
        validation_errors=field_errors,
    )

    return _error_response(
        get_settings(),
        status_code=HTTP_422_UNPROCESSABLE,
        error_code=ErrorCode.VALIDATION_ERROR.value,
        message="Request validation failed",
        severity=Severity.LOW.value,
        details={"validation_errors": field_errors},
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException (unknown routes, wrong methods).

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    error_code = ErrorCode.INTERNAL_ERROR.value
    severity = Severity.MEDIUM.value
    if exc.status_code == status.HTTP_400_BAD_REQUEST:
        error_code = ErrorCode.VALIDATION_ERROR.value
        severity = Severity.LOW.value
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        error_code = ErrorCode.NOT_FOUND.value
        severity = Severity.LOW.value
    elif exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        severity = Severity.HIGH.value

    logger.warning(
        "HTTP exception",
        status_code=exc.status_code,
        path=str(request.url.path),
        method=request.method,
        detail=exc.detail,
    )

    return _error_response(
        get_settings(),
        status_code=exc.status_code,
        error_code=error_code,
        message=str(exc.detail),
        severity=severity,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle any exception not covered by a more specific handler.

    Internal details are hidden from clients in production.
    """
    settings = get_settings()

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
        },
    )
    logger.exception(
        "Unhandled exception: {exception_type}",
        exception_type=type(exc).__name__,
        **error_context,
    )

    if settings.environment == "production":
        message = "An internal server error occurred"
        details = None
        debug_info = None
    else:
        message = f"Internal server error: {type(exc).__name__}"
        details = {"error": str(exc), "type": type(exc).__name__}
        debug_info = {
            "stack_trace": traceback.format_tb(exc.__traceback__),
            "exception_type": type(exc).__name__,
        }

    return _error_response(
        settings,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code=ErrorCode.INTERNAL_ERROR.value,
        message=message,
        severity=Severity.CRITICAL.value,
        details=details,
        debug_info=debug_info,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers registered")
