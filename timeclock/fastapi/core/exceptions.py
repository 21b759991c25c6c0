"""
Business-rule errors raised by the time clock.

Each error is an ``HTTPException`` so routers can let it propagate
unchanged, and carries a stable ``error_code`` that clients can switch on.
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class TimeClockError(HTTPException):
    """Base class for user-visible business-rule failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "TIME_CLOCK_ERROR"

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)


class ConflictError(TimeClockError):
    """A write would violate a uniqueness rule (e.g. a second active entry)."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"


class NotFoundError(TimeClockError):
    """The record does not exist or is not visible to the caller."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class InvalidStateError(TimeClockError):
    """The operation is not valid for the record's current status."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "INVALID_STATE"


class SignatureValidationError(TimeClockError):
    """A signature payload is not a base64 image data URI."""

    status_code = 422
    error_code = "VALIDATION_ERROR"

    def __init__(self, field: str, detail: str):
        self.field = field
        super().__init__(detail)


class ForbiddenError(TimeClockError):
    """The caller lacks the role required for the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"


async def time_clock_error_handler(request: Request, exc: TimeClockError) -> JSONResponse:
    content = {"detail": exc.detail, "code": exc.error_code}
    field = getattr(exc, "field", None)
    if field:
        content["field"] = field
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"},
    )


def setup_exception_handlers(app):
    app.add_exception_handler(TimeClockError, time_clock_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
