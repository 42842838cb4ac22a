"""
Error Handler Middleware

Last line of defence for requests: anything that escapes the routers and
the ServiceError handler ends up here, is written to the error log and is
answered with a 500 carrying the log entry id.
"""

from typing import Callable, Optional
from uuid import UUID

from fastapi import HTTPException, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.services.error_logging import error_logger


def _request_user(request: Request):
    # Set by get_current_user on authenticated requests
    return getattr(request.state, "user", None)


def internal_error_response(error_id: Optional[UUID]) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error. Contact the administrator.",
            "error_id": str(error_id) if error_id else None,
        },
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Log unhandled exceptions and turn them into JSON responses.

    HTTPExceptions keep their status; only 5xx ones are logged.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except HTTPException as http_exc:
            if http_exc.status_code >= 500:
                error_logger.log_error(
                    http_exc,
                    request=request,
                    user=_request_user(request),
                    context={"status_code": http_exc.status_code, "detail": http_exc.detail},
                )
            return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})
        except Exception as exc:
            error_id = error_logger.log_error(
                exc,
                request=request,
                user=_request_user(request),
                severity="critical",
                context={"unhandled": True},
            )
            return internal_error_response(error_id)
