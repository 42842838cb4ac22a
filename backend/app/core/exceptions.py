"""
Service Exceptions
Failure signals raised by the service layer.

Services never build HTTP responses themselves. They raise one of the
exceptions below and the handler registered in main.py turns it into a
JSON response with the matching status code.
"""

from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse


class ServiceError(Exception):
    """
    Base exception for all service failures.

    Attributes:
        message: Human readable message returned as "detail"
        status_code: HTTP status the controller layer should answer with
        details: Optional extra context (ids, field names)
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {"detail": self.message}
        if self.details:
            result["details"] = self.details
        return result


class BadRequestError(ServiceError):
    """Invalid references or conflicting values in a request payload."""

    status_code = 400


class NotFoundError(ServiceError):
    """A requested record (or one it references) does not exist."""

    status_code = 404


class ServerError(ServiceError):
    """Wrapped database or filesystem failure."""

    status_code = 500


async def service_exception_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """
    Convert ServiceError to JSON response.

    Server errors are also written to the error log so they can be
    inspected later; client errors are not logged.
    """
    if exc.status_code >= 500:
        # Imported here to avoid a models import at module load time
        from app.services.error_logging import error_logger

        error_logger.log_error(
            exc,
            request=request,
            user=getattr(request.state, "user", None),
            severity="error",
            context=exc.details or None,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
