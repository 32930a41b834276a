"""Map storefront failures to ``{error, message}`` JSON responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.exceptions import (
    OrderNotFound,
    StatusUpdateFailure,
    StoreError,
    SubmissionFailure,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


async def validation_error(request: Request, exc: ValidationError):
    return _error(400, "Validation failed", str(exc.messages))


async def cart_not_found(request: Request, exc: ObjectNotFoundError):
    return _error(404, "Not found", str(exc))


async def order_not_found(request: Request, exc: OrderNotFound):
    return _error(404, "Order not found", str(exc))


async def submission_failure(request: Request, exc: SubmissionFailure):
    return _error(502, "Failed to create order", str(exc))


async def status_update_failure(request: Request, exc: StatusUpdateFailure):
    return _error(502, "Failed to update order", str(exc))


async def store_error(request: Request, exc: StoreError):
    logger.error("order_store_error", path=request.url.path, error=str(exc), status_code=exc.status_code)
    return _error(502, "Order store unavailable", str(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error)
    app.add_exception_handler(ObjectNotFoundError, cart_not_found)
    app.add_exception_handler(OrderNotFound, order_not_found)
    app.add_exception_handler(SubmissionFailure, submission_failure)
    app.add_exception_handler(StatusUpdateFailure, status_update_failure)
    app.add_exception_handler(StoreError, store_error)
