"""
Global exception handlers for the FastAPI application.

Centralises error formatting so every error response follows one of two
JSON shapes::

    {"message": "<human-readable description>", "errors": <details or null>}

or, for request validation failures::

    {"success": false,
     "error": {"issues": [{"code": ..., "path": [...], "message": ...}],
               "name": "ValidationError"}}

This module also defines domain-specific exceptions that the service layer
can raise without importing FastAPI's HTTPException.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lab_system.core.config import settings
from lab_system.docs.error_examples import default_message
from lab_system.docs.issues import issue_from_error

logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────
# Domain exceptions  (raised by service layer, caught by handlers below)
# ────────────────────────────────────────────────────────────────────────────


class AppException(Exception):
    """Base exception for all application-level errors."""

    def __init__(self, status_code: int, message: str, details: Any = None):
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundException(AppException):
    """Resource not found (404)."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            status_code=404,
            message=f"{resource} with id '{identifier}' not found",
        )


class ConflictException(AppException):
    """Resource already exists / unique-constraint violation (409)."""

    def __init__(self, message: str):
        super().__init__(status_code=409, message=message)


class BusinessRuleViolation(AppException):
    """Business rule was violated (422)."""

    def __init__(self, message: str):
        super().__init__(status_code=422, message=message)


# ────────────────────────────────────────────────────────────────────────────
# FastAPI exception handler registration
# ────────────────────────────────────────────────────────────────────────────


def add_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI application instance."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        """Handle domain-specific exceptions raised by the service layer."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message, "errors": exc.details},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle standard HTTP exceptions, including unknown routes."""
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = f"Not Found - {request.url.path}"
        else:
            message = exc.detail
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """
        Handle request-validation errors.

        Issues use the same codes and paths as the examples in the
        OpenAPI document.
        """
        issues = []
        for err in exc.errors():
            issue = issue_from_error(err, strip_location=True)
            issues.append(
                {
                    "code": issue.code,
                    "path": list(issue.path),
                    "message": issue.message or default_message(issue.code),
                }
            )
        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "error": {"issues": issues, "name": "ValidationError"},
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """
        Catch-all for unexpected exceptions.

        The exception message is only echoed back outside production.
        """
        logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path
        )
        return JSONResponse(
            status_code=500,
            content={
                "message": "Internal Server Error",
                "errors": None if settings.is_production else str(exc),
            },
        )
