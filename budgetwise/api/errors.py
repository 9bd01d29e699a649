"""
Translate service exceptions into HTTP responses.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from budgetwise.core.exceptions import (
    BudgetWiseError, ConfigurationError, ConflictError, ExternalServiceError,
    NotFoundError, PermissionDeniedError, ValidationError
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ExternalServiceError: status.HTTP_502_BAD_GATEWAY,
}


def status_for(exc: BudgetWiseError) -> int:
    for exc_type, code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_service_error(request: Request, exc: BudgetWiseError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=code, content={"success": False, "detail": str(exc)})


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(BudgetWiseError, handle_service_error)
