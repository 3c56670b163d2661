"""Utility functions for mapping domain exceptions to HTTP exceptions."""

from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ....infrastructure.logging import get_logger
from ..constants import EXCEPTION_MAPPING
from ..exceptions import DomainError, ErrorKind

logger = get_logger(__name__)


def map_exception(error: DomainError) -> HTTPException:
    """Map a domain exception to a corresponding HTTP exception."""
    mapper = EXCEPTION_MAPPING.get(error.kind)
    if mapper is not None:
        return mapper(str(error))

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected error occurred: {str(error)}"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global handlers for domain and request validation errors."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        """Convert domain exceptions to appropriate HTTP responses."""
        http_exception = map_exception(exc)
        logger.warning(
            f"{request.method} {request.url.path} failed: {exc}",
            extra={"status_code": http_exception.status_code, "call_path": exc.call_path},
        )
        return JSONResponse(
            status_code=http_exception.status_code,
            content={"detail": http_exception.detail},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report malformed JSON, bad path ids and schema violations as 400."""
        logger.info(f"Request validation error on {request.method} {request.url.path}: {exc.errors()}")
        http_exception = EXCEPTION_MAPPING[ErrorKind.INVALID_INPUT](jsonable_encoder(exc.errors()))
        return JSONResponse(
            status_code=http_exception.status_code,
            content={"detail": http_exception.detail},
        )


def handle_exception(error: Exception) -> Optional[HTTPException]:
    """
    Handle an exception and return an appropriate HTTP exception if possible.

    For use in route handlers when you want to handle exceptions manually.

    Args:
        error: The exception to handle

    Returns:
        An HTTPException if the error can be mapped, None otherwise
    """
    if isinstance(error, DomainError):
        http_exception = map_exception(error)
        logger.warning(
            f"Request failed: {error}",
            extra={"status_code": http_exception.status_code, "call_path": error.call_path},
        )
        return http_exception
    elif isinstance(error, HTTPException):
        return error

    logger.error(f"Unhandled error: {error}", exc_info=error)
    return None
