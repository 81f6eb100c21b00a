"""Map the error taxonomy onto HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from libs.common.errors import (
    GymError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)
from libs.common.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_ERROR = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: 422,
    TransientStoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def gym_error_handler(request: Request, exc: GymError) -> JSONResponse:
    status_code = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    if status_code >= 500:
        logger.error("Store failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def add_exception_handlers(app: FastAPI) -> None:
    """Register handlers so repository errors reach clients as JSON."""
    app.add_exception_handler(GymError, gym_error_handler)
