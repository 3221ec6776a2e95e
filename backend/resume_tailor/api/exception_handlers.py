"""
Exception handlers — map pipeline errors to the {"error", "kind"} response envelope.

Only the short user-facing message is returned; internal messages, causes and
backend details go to the log.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from resume_tailor.exceptions import TailorError

logger = logging.getLogger(__name__)


async def tailor_exception_handler(request: Request, exc: TailorError) -> JSONResponse:
    """Handle every TailorError subclass using its own kind and status code."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc} details={exc.details}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies use the same envelope as ValidationError."""
    errors = exc.errors()
    logger.warning(f"Invalid request on {request.url.path}: {len(errors)} error(s), first={errors[0] if errors else None}")

    message = "The request is missing required information."
    if errors:
        loc = ".".join(str(p) for p in errors[0].get("loc", ()) if p != "body")
        message = f"Invalid value for '{loc}': {errors[0].get('msg')}" if loc else str(errors[0].get("msg"))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "kind": "validation_error"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unexpected {type(exc).__name__} on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": TailorError.default_user_message, "kind": TailorError.kind},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI app."""
    app.add_exception_handler(TailorError, tailor_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
