# print_queue/core/error_handlers.py

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import traceback
import uuid

from .exceptions import PrintQueueError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_CODE_MAP = {
    ErrorCode.INVALID_FIELDS: 400,
    ErrorCode.INVALID_STATUS: 400,
    ErrorCode.ORDER_NOT_FOUND: 404,
}

UNEXPECTED_ERROR_MESSAGE = "Unexpected server error"


def setup_error_handlers(app: FastAPI):
    """Set up global error handlers for the FastAPI application."""

    @app.exception_handler(PrintQueueError)
    async def print_queue_error_handler(request: Request, exc: PrintQueueError):
        """Handle application errors raised by the order service."""
        status_code = STATUS_CODE_MAP.get(exc.code, 400)

        logger.warning(
            f"{exc.code.value}: {exc.user_message}",
            extra={
                "error_code": exc.code.value,
                "context": exc.context,
                "request_url": str(request.url),
                "request_method": request.method,
            },
        )

        return JSONResponse(status_code=status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed JSON bodies never reach the service."""
        logger.warning(
            "Request body could not be parsed",
            extra={
                "validation_errors": exc.errors(),
                "request_url": str(request.url),
                "request_method": request.method,
            },
        )
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Keep the flat ``{"error": ...}`` shape for framework errors (404, 405...)."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Last resort for failures raised outside the request-id middleware."""
        return unexpected_error_response(request, exc)


def unexpected_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure and answer with a generic message."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        extra={
            "exception_type": type(exc).__name__,
            "request_id": getattr(request.state, "request_id", None),
            "request_url": str(request.url),
            "request_method": request.method,
            "traceback": traceback.format_exc(),
        },
    )

    # Don't expose internal details to the client
    return JSONResponse(status_code=500, content={"error": UNEXPECTED_ERROR_MESSAGE})


# Middleware for request ID tracking
async def add_request_id_middleware(request: Request, call_next):
    """
    Add request ID for better error tracking.

    Unhandled errors are turned into the generic 500 here rather than in
    Starlette's outermost error middleware, so those responses still pass back
    through the header middlewares.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    try:
        response = await call_next(request)
    except Exception as exc:
        response = unexpected_error_response(request, exc)
    response.headers["X-Request-ID"] = request_id
    return response


async def add_security_headers_middleware(request: Request, call_next):
    """Attach conservative browser security headers to every response."""
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    return response
