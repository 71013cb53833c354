"""
Global error handling for the FastAPI application.
Maps domain exceptions to HTTP responses and catches anything left unhandled.
"""

import logging
import traceback
from typing import Any, Dict, Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError

from bizdesk.application.dto.base_dto import ErrorResponseDTO, validation_error_from_pydantic
from bizdesk.config import settings
from bizdesk.domain.models.base import (
    DomainException, ValidationError, EntityNotFoundError,
    DuplicateEntityError, BusinessRuleViolation
)

logger = logging.getLogger(__name__)


# Most specific classes first
DOMAIN_ERROR_STATUS = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation Error"),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND, "Not Found"),
    (DuplicateEntityError, status.HTTP_409_CONFLICT, "Conflict"),
    (BusinessRuleViolation, status.HTTP_400_BAD_REQUEST, "Bad Request"),
]


def _error_details(exc: DomainException) -> Optional[Any]:
    if isinstance(exc, ValidationError):
        return exc.errors
    if isinstance(exc, EntityNotFoundError):
        return {"entity_type": exc.entity_type, "entity_id": exc.entity_id}
    if isinstance(exc, DuplicateEntityError):
        return {"entity_type": exc.entity_type, "field": exc.field, "value": exc.value}
    return None


def format_domain_error(exc: DomainException, request_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Format a domain exception into the error response body.
    """
    status_code, error = status.HTTP_400_BAD_REQUEST, "Bad Request"
    for exc_type, exc_status, exc_error in DOMAIN_ERROR_STATUS:
        if isinstance(exc, exc_type):
            status_code, error = exc_status, exc_error
            break

    body = ErrorResponseDTO(
        error=error,
        message=exc.message,
        code=exc.code,
        details=_error_details(exc),
        status_code=status_code,
        request_id=request_id
    )
    return body.model_dump(mode="json")


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def _response(body: Dict[str, Any]) -> JSONResponse:
    if body.get("request_id") is None:
        body.pop("request_id", None)
    return JSONResponse(status_code=body["status_code"], content=body)


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Render domain exceptions raised by use cases and DTOs."""
    body = format_domain_error(exc, _request_id(request))
    logger.info(f"{request.method} {request.url.path} -> {body['status_code']} {exc.code}: {exc.message}")
    return _response(body)


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI's request validation errors in the domain error shape."""
    error = validation_error_from_pydantic(exc, skip_prefix=("body", "query", "path"))
    return await domain_exception_handler(request, error)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and handle any exceptions.
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Log the exception with its traceback and return a 500 response.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response: Dict[str, Any] = {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
            "details": None,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
        }

        # Add request ID if available
        request_id = _request_id(request)
        if request_id:
            error_response["request_id"] = request_id

        # In debug mode, add more information
        if settings.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=error_response["status_code"],
            content=error_response
        )
