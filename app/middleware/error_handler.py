import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from app.utils.exceptions import AppException, ErrorCode

logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of the offending field name
_LOCATIONS = {"body", "query", "path", "header"}


def _envelope(status_code: int, message: str, code: str, details=None, field=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error": {"code": code, "details": details, "field": field},
        },
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Business rule violations raised by services and auth dependencies."""
    error = exc.detail.get("error", {"code": ErrorCode.INTERNAL_SERVER_ERROR})
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {error.get('code')}")
    return _envelope(
        exc.status_code,
        exc.detail.get("message", "An error occurred"),
        error.get("code", ErrorCode.INTERNAL_SERVER_ERROR),
        error.get("details"),
        error.get("field"),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Request validation errors (422), one detail per failing field.
    ``("body", "quantity")`` becomes ``quantity`` and ``("query", "period")``
    becomes ``period``.
    """
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATIONS]
        details.append({
            "field":   ".".join(loc),
            "message": error.get("msg", "Invalid value"),
        })

    return _envelope(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error. Please check your input.",
        ErrorCode.VALIDATION_ERROR,
        details,
        details[0]["field"] if len(details) == 1 else None,
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """
    Constraint violations from the remote schema: duplicate LPO numbers or
    destinations, and rows still referenced by stock or LPOs.
    """
    logger.warning(f"IntegrityError on {request.method} {request.url.path}: {exc.orig}")
    text = str(exc.orig).lower()
    if "foreign key" in text:
        message = "The record is still referenced by other records."
    else:
        message = "The record conflicts with existing data."
    return _envelope(status.HTTP_409_CONFLICT, message, ErrorCode.DUPLICATE_ENTRY)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
        ErrorCode.INTERNAL_SERVER_ERROR,
    )
