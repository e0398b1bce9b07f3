# app/core/errors.py
"""
Error taxonomy for the storefront.

Every domain error is an HTTPException carrying its own status code, so
services raise them directly and the handlers registered in
`register_exception_handlers` render a uniform `{"message": ...}` body.
"""
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ShopError(HTTPException):
    """Base class for errors surfaced to API callers."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"

    def __init__(self, message: str | None = None):
        super().__init__(status_code=self.status_code, detail=message or self.message)


class ValidationError(ShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class UnauthorizedError(ShopError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class NotFoundError(ShopError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ItemNotFoundError(NotFoundError):
    message = "Item not found"


class AccountNotFoundError(NotFoundError):
    message = "User not found"


class LineNotFoundError(NotFoundError):
    message = "Item not in cart"


class ConflictError(ShopError):
    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


class StoreError(ShopError):
    """Backing-store failure. The message never carries internal detail."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"


def _message_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationError.message
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = loc[-1] if loc else "request"
    if first.get("type") == "missing":
        return f"{field} is required"
    return f"{field}: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers mapping every error to a `{"message": str}` body."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return _message_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return _message_response(
            ValidationError.status_code,
            _describe_validation_error(exc),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Store failure on %s %s", request.method, request.url.path)
        return _message_response(StoreError.status_code, StoreError.message)
