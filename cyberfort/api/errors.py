import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cyberfort.config import settings
from cyberfort.exceptions import (
    InvalidInput,
    StorageFailure,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, exc: Exception | None = None) -> JSONResponse:
    content = {"message": message}
    if exc is not None and not settings.is_production:
        content["detail"] = str(exc)
    return JSONResponse(status_code=status_code, content=content)


def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"message": str(exc)})


def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Malformed request body for %s", request.url.path)
    return _error(400, "Invalid request body", exc)


def upstream_error_handler(request: Request, exc: UpstreamUnavailable) -> JSONResponse:
    logger.error("Upstream service unavailable: %s", exc)
    return _error(500, "Reputation service unavailable", exc)


def storage_error_handler(request: Request, exc: StorageFailure) -> JSONResponse:
    logger.error("History storage error: %s", exc)
    return _error(500, "Failed to access check history", exc)


async def exception_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled exception")
        return _error(500, "Internal server error", exc)
