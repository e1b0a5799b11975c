"""
Global error handling middleware for the FastAPI application.

Catches WhisperLiveError subclasses, Pydantic validation errors, and
unhandled exceptions, converting them into a consistent
``{"error": "<message>"}`` JSON envelope.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.exceptions import WhisperLiveError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    Registers three handlers in priority order:
    1. ``WhisperLiveError``: maps domain errors to their status code.
    2. ``RequestValidationError``: malformed JSON body or wrong field types (400).
    3. ``Exception``: catch-all for unexpected server errors (500).

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(WhisperLiveError)
    async def whisperlive_error_handler(_request: Request, exc: WhisperLiveError) -> JSONResponse:
        """Convert domain-specific errors into a JSON error envelope."""
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.code, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request bodies that are not a JSON object with a string prompt."""
        logger.info("Rejected request body: %s", exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def generic_error_handler(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler; reports the message, never the stack trace."""
        logger.exception("Unhandled error in request")
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) or "An unknown error occurred"},
        )
