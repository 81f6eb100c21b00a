"""Request logging middleware for the gym API.

Every request gets an X-Request-ID (propagated when the caller sends one),
and its completion is logged with status code and duration.
"""
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from libs.common.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request context for log records and time each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request_id=request.headers.get(REQUEST_ID_HEADER),
            path=request.url.path,
            method=request.method,
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "%s %s failed after %.2fms",
                request.method,
                request.url.path,
                (time.perf_counter() - started) * 1000,
            )
            raise
        finally:
            clear_request_context()

        if request.url.path != "/health":
            level = "warning" if response.status_code >= 400 else "info"
            getattr(logger, level)(
                "%s %s -> %d",
                request.method,
                request.url.path,
                response.status_code,
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "status_code": response.status_code,
                        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    }
                },
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def add_observability_middleware(app: FastAPI) -> None:
    """
    Configure logging and install the request middleware on ``app``.
    """
    configure_logging()
    app.add_middleware(RequestContextMiddleware)
