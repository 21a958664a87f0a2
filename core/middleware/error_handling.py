"""
Error handling with security-compliant error sanitization.

Every failure leaves the API as ``{"success": false, "message": ...}``,
with an ``errors`` list for field level violations. Store failures are
logged with their traceback and answered with a generic message.
"""

import logging
import re
from typing import Any, Callable, Optional
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import RecruitingError, StoreFailure, ValidationError

logger = logging.getLogger(__name__)

# Patterns for sensitive data that should never be logged
SENSITIVE_PATTERNS = [
    re.compile(r'password["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'token["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'api[_-]?key["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'secret["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'authorization["\s:]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'\bBearer\s+[A-Za-z0-9\-_.]+', re.IGNORECASE),
]

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def sanitize_error_message(message: str) -> str:
    """
    Remove sensitive information from error messages.

    Args:
        message: Original error message

    Returns:
        Sanitized error message
    """
    sanitized = str(message)
    for pattern in SENSITIVE_PATTERNS:
        sanitized = pattern.sub('[REDACTED]', sanitized)
    return sanitized


def error_response(
    status_code: int,
    message: str,
    errors: Optional[list[dict[str, Any]]] = None,
) -> JSONResponse:
    """Build the failure envelope."""
    content: dict[str, Any] = {
        "success": False,
        "message": sanitize_error_message(message),
    }
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def format_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """
    Format request validation errors as field violations.

    Args:
        exc: The validation exception

    Returns:
        List of formatted validation errors
    """
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part != "body"]
        errors.append({
            "field": ".".join(loc) or "body",
            "constraint": error["type"],
            "message": sanitize_error_message(error["msg"]),
        })
    return errors


def handle_domain_error(exc: RecruitingError, method: str, path: str) -> JSONResponse:
    """Map a domain error to its envelope and status."""
    if isinstance(exc, StoreFailure):
        logger.error(f"Store failure: {method} {path}", exc_info=exc)
        return error_response(exc.status_code, exc.message)

    logger.info(f"{type(exc).__name__}: {method} {path} - {sanitize_error_message(exc.message)}")
    errors = exc.details if isinstance(exc, ValidationError) else None
    return error_response(exc.status_code, exc.message, errors)


class ErrorHandlingMiddleware:
    """
    Last-resort error handling for anything the exception handlers miss.

    Features:
    - Sanitizes error messages to prevent sensitive data leakage
    - Answers with the failure envelope
    - Logs errors with appropriate severity
    """

    def __init__(self, app: Callable):
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            await self.app(scope, receive, send)
        except Exception as exc:
            response = self._handle_exception(exc, scope)
            await response(scope, receive, send)

    def _handle_exception(self, exc: Exception, scope: dict) -> Response:
        request_path = scope.get("path", "unknown")
        request_method = scope.get("method", "unknown")

        if isinstance(exc, RecruitingError):
            return handle_domain_error(exc, request_method, request_path)

        if isinstance(exc, SQLAlchemyError):
            logger.error(f"SQLAlchemy error: {request_method} {request_path}", exc_info=True)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, StoreFailure().message)

        logger.error(
            f"Unhandled exception: {request_method} {request_path} - "
            f"{type(exc).__name__}: {sanitize_error_message(str(exc))}",
            exc_info=True,
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def setup_error_handlers(app):
    """
    Set up exception handlers for FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(RecruitingError)
    async def domain_exception_handler(request: Request, exc: RecruitingError):
        """Handle business-rule failures."""
        return handle_domain_error(exc, request.method, request.url.path)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request body validation errors."""
        errors = format_validation_errors(exc)
        logger.info(f"Validation error: {request.method} {request.url.path} - {errors}")
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "; ".join(f"{e['field']}: {e['message']}" for e in errors) or "Invalid request",
            errors,
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
        """Handle store errors that escaped the store wrapper."""
        logger.error(f"SQLAlchemy error: {request.method} {request.url.path}", exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, StoreFailure().message)
