"""Maps billing errors to HTTP responses by their error kind."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from billing.api.schemas import ErrorResponse
from billing.exceptions import (
    BillingError,
    ErrorKind,
    InvalidStatusTransition,
    InvoiceNotFound,
    PaymentNotFound,
)

logger = structlog.get_logger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 409,
}


def _title(exc: BillingError) -> str:
    if isinstance(exc, PaymentNotFound):
        return "Payment not found"
    if isinstance(exc, InvoiceNotFound):
        return "Invoice not found"
    if isinstance(exc, InvalidStatusTransition):
        return "Invalid status transition"
    if exc.kind == ErrorKind.VALIDATION:
        return "Validation failed"
    return "Invalid request"


def _error(status_code: int, message: str, details: str) -> JSONResponse:
    body = ErrorResponse(code=status_code, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    """Install exception handlers for billing and Protean errors on ``app``."""

    @app.exception_handler(BillingError)
    async def billing_error_handler(request: Request, exc: BillingError) -> JSONResponse:
        return _error(_STATUS_BY_KIND[exc.kind], _title(exc), exc.message)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(400, "Validation failed", str(exc.messages))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        return _error(400, "Validation failed", details)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", path=request.url.path)
        return _error(500, "Internal server error", str(exc))
