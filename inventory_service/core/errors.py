"""
Domain errors raised by the registry and the photo store.

Each error carries the HTTP status it is reported with; the handlers installed
by ``install_error_handlers`` turn them into ``{"error": message}`` bodies.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logger import get_logger

_logger = get_logger(__name__)


class InventoryServiceError(Exception):
    """Base class for errors reported to clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryServiceError):
    """A required field was missing or empty."""

    status_code = 400


class NotFoundError(InventoryServiceError):
    """No item (or no photo) exists for the requested id."""

    status_code = 404


class MethodNotAllowedError(InventoryServiceError):
    """No route serves this method and path."""

    status_code = 405


class StorageError(InventoryServiceError):
    """Writing a photo to the cache directory failed."""

    status_code = 500


def _error_response(status_code: int, message: str) -> ORJSONResponse:
    return ORJSONResponse(status_code=status_code, content={"error": message})


# PUBLIC_INTERFACE
def install_error_handlers(app: FastAPI) -> None:
    """Register handlers translating every failure into an ``{"error": ...}`` body."""

    @app.exception_handler(InventoryServiceError)
    async def inventory_error_handler(request: Request, exc: InventoryServiceError):
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        _logger.info("Undecodable request", extra={"path": request.url.path, "errors": str(exc.errors())})
        return _error_response(400, "Malformed request body")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        _logger.error("Unhandled exception", exc_info=exc, extra={"path": request.url.path})
        return _error_response(500, "Internal server error")
