"""
Global exception handlers for the FastAPI application.

Every error response carries a single human-readable string::

    {"error": "<description>"}

Validation failures additionally include a ``details`` list.  The domain
exceptions below are raised by the service layer and the auth dependency;
services never import FastAPI's ``HTTPException``.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────
# Domain exceptions  (raised by service layer, caught by handlers below)
# ────────────────────────────────────────────────────────────────────────────


class AppException(Exception):
    """Base exception for all application-level errors."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.status_code = status_code
        self.message = message
        self.details = details
        self.headers = headers
        super().__init__(message)


class AuthenticationError(AppException):
    """Missing, malformed or rejected bearer token (401)."""

    def __init__(self, reason: str = "missing_token"):
        # The reason is kept for logs only; callers always see one message.
        self.reason = reason
        super().__init__(
            status_code=401,
            message="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ValidationException(AppException):
    """Request payload failed a field-level check (400)."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(status_code=400, message=message, details=details)


class NotFoundException(AppException):
    """Resource not found (404)."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            status_code=404,
            message=f"{resource} not found",
            details={"id": str(identifier)},
        )


class StoreError(AppException):
    """The database rejected an operation (500, raw store message)."""

    def __init__(self, message: str):
        super().__init__(status_code=500, message=message)


def store_error_message(exc: BaseException) -> str:
    """
    Extract the driver-level message from a SQLAlchemy error.

    ``DBAPIError`` wraps the driver exception in ``orig``; its text is what
    the database reported (e.g. the violated constraint).
    """
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


# ────────────────────────────────────────────────────────────────────────────
# FastAPI exception handler registration
# ────────────────────────────────────────────────────────────────────────────


def _error_body(message: str, details: Any = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message}
    if details is not None:
        body["details"] = details
    return body


def add_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI application instance."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        """Handle domain-specific exceptions raised by services and dependencies."""
        if isinstance(exc, AuthenticationError):
            logger.info(
                "Rejected unauthenticated %s %s (%s)",
                request.method,
                request.url.path,
                exc.reason,
            )
        details = None if isinstance(exc, NotFoundException) else exc.details
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, details),
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle standard HTTP exceptions (e.g. 404 from path-not-found)."""
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """
        Handle Pydantic / FastAPI request-validation errors.

        Returns a 400 whose ``error`` string names every failing field, plus
        a ``details`` list for programmatic use.
        """
        errors = []
        for err in exc.errors():
            loc = " -> ".join(str(part) for part in err["loc"])
            errors.append({"field": loc, "message": err["msg"]})
        summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        return JSONResponse(
            status_code=400,
            content=_error_body(f"Validation failed: {summary}", errors),
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        """Surface database failures that no service translated."""
        logger.error(
            "Database error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(store_error_message(exc)),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected exceptions."""
        logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("Internal server error"),
        )
