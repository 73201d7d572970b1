"""Global error handling.

Every exception is converted to the same JSON error body with an
appropriate HTTP status code.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from ledger.config import settings
from ledger.core.errors import get_error
from ledger.core.exceptions import LedgerError

logger = logging.getLogger(__name__)


def _error_body(
    error_code: str, message: str, user_message: str, suggestion: str, retry_allowed: bool
) -> dict:
    return {
        "error_code": error_code,
        "message": message,
        "user_message": user_message,
        "suggestion": suggestion,
        "retry_allowed": retry_allowed,
    }


async def handle_ledger_error(request: Request, exc: LedgerError) -> JSONResponse:
    """Handle application validation and lookup failures.

    Args:
        request: The incoming request
        exc: The ledger exception

    Returns:
        JSONResponse with error details from catalog
    """
    error_info = get_error(exc.error_code)

    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    logger.warning(f"Ledger error: {exc.error_code}", extra=extra)

    return JSONResponse(
        status_code=exc.http_status,
        content=_error_body(
            exc.error_code,
            error_info["message"],
            error_info["user_message"],
            error_info["suggestion"],
            error_info["retry_allowed"],
        ),
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic request validation errors.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse with field-level messages joined in `message`
    """
    error_messages = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            "VAL_001",
            " | ".join(error_messages),
            "Invalid input data",
            "Please check your input and try again",
            True,
        ),
    )


async def handle_integrity_error(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Handle database integrity errors.

    Unique violations (e.g. two requests creating the same category at once)
    become 409; anything else is a 500.
    """
    # str(exc) carries SQL and bound parameters; only log it in debug.
    if settings.debug:
        logger.exception(
            f"Database integrity error on {request.url.path}",
            extra={"path": request.url.path, "method": request.method},
        )
    else:
        logger.error(
            f"Database integrity error on {request.url.path}",
            extra={"path": request.url.path, "method": request.method},
        )

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=_error_body(
                "DB_002",
                "Resource already exists",
                "This record already exists",
                "Please retry the request",
                True,
            ),
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "DB_001",
            "Database operation failed",
            "A database error occurred",
            "Please try again later",
            True,
        ),
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing internal details."""
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "SYS_001",
            "Internal server error",
            "An unexpected error occurred",
            "Please try again later",
            True,
        ),
    )
