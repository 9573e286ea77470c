# remainder_service/core/errors.py
"""
Error taxonomy and the top-level formatting step.

Every failure leaves the service in the same JSON envelope::

    {"success": false, "message": "...", "errors": [...]}

Application code raises one of the ``AppError`` subclasses below. Errors
produced by the framework (request validation, unmatched routes, rate
limiting), by the record store, or by unexpected bugs are translated into
the same envelope by the handlers installed with
``register_exception_handlers``.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Validation errors"
ROUTE_NOT_FOUND_MESSAGE = "Route not found"
INTERNAL_MESSAGE = "Internal server error"

# pydantic prefixes messages raised from custom validators
_VALUE_ERROR_PREFIX = "Value error, "

# Framework error types raised when a path identifier is malformed
_ID_ERROR_TYPES = {"uuid_parsing", "uuid_type", "uuid_version"}


class AppError(Exception):
    """
    Base class for errors surfaced to API clients.

    Attributes:
        status_code: HTTP status code of the response.
        message: Human-readable summary placed in the envelope.
        errors: Optional list of structured per-field entries.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = INTERNAL_MESSAGE

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    """A field is malformed, missing, or out of range."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = VALIDATION_MESSAGE


class BadRequestError(AppError):
    """The request is well-formed field by field but not acceptable as a whole."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class NotFoundError(AppError):
    """A well-formed identifier that matches no record."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    """Unexpected store or runtime failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = INTERNAL_MESSAGE


class StoreConstraintError(Exception):
    """
    Raised by the record store when a write violates a field constraint.

    The store checks constraints independently of the request schemas, so
    this error means the schema layer was bypassed or disagreed with the
    store.

    Attributes:
        field: Name of the offending field, if known.
        message: Description of the violated constraint.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


def error_body(message: str, errors: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    """Build the failure envelope."""
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


def render_error(exc: AppError) -> JSONResponse:
    """Serialize an ``AppError`` into the failure envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.errors),
    )


def format_validation_errors(errors: Any) -> list[dict[str, Any]]:
    """
    Convert pydantic error dicts into the service's per-field entries.

    Args:
        errors: Sequence of error dicts as returned by
            ``RequestValidationError.errors()``.

    Returns:
        List of ``{"field", "location", "message"}`` dicts, one per error,
        with ``"value"`` added when the offending input is a scalar.
    """
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        location = loc[0] if loc else "body"
        field = ".".join(loc[1:]) if len(loc) > 1 else location

        message = str(error.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        if location == "path" and error.get("type") in _ID_ERROR_TYPES:
            field = "id"
            message = "Invalid remainder ID"

        entry: dict[str, Any] = {
            "field": field,
            "location": location,
            "message": message,
        }
        value = error.get("input")
        if isinstance(value, str | int | float | bool):
            entry["value"] = value
        formatted.append(entry)
    return formatted


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an ``AppError`` raised by a handler."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info(
            "%s %s -> %s: %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return render_error(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render body, query and path validation failures as a 400."""
    errors = format_validation_errors(exc.errors())
    logger.info(
        "%s %s rejected with %d validation error(s)",
        request.method,
        request.url.path,
        len(errors),
    )
    return render_error(ValidationError(errors=errors))


async def store_constraint_handler(
    request: Request, exc: StoreConstraintError
) -> JSONResponse:
    """Remap a store-detected constraint violation to the validation shape."""
    logger.warning(
        "Store rejected %s %s: %s", request.method, request.url.path, exc.message
    )
    errors = [{"field": exc.field or "body", "location": "body", "message": exc.message}]
    return render_error(ValidationError(errors=errors))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Render framework HTTP errors.

    Routing misses (404) and method mismatches (405) both mean no route
    serves the request, so both become the "Route not found" 404.
    """
    if exc.status_code in (
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=error_body(ROUTE_NOT_FOUND_MESSAGE),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Render a slowapi limit breach in the standard envelope.

    Kept synchronous: ``SlowAPIMiddleware`` calls it without awaiting.
    """
    logger.warning("Rate limit exceeded for %s: %s", request.client, exc.detail)
    limited = _rate_limit_exceeded_handler(request, exc)
    headers = {
        name: value
        for name, value in limited.headers.items()
        if name.lower().startswith("x-ratelimit") or name.lower() == "retry-after"
    }
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=error_body(f"Rate limit exceeded: {exc.detail}"),
        headers=headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Mask any unexpected failure behind a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return render_error(InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install every handler that produces the failure envelope.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StoreConstraintError, store_constraint_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
