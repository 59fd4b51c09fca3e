"""
Turns errors escaping the routes into ``{"detail", "code", "errors"?}`` bodies.

4xx outcomes are logged at INFO, 5xx at ERROR with the traceback. A 5xx body
never carries the underlying message.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from car_market.domain.errors import DomainError

logger = logging.getLogger(__name__)

STATUS_CODE_MAP: dict[str, int] = {
    "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "PERSISTENCE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Where FastAPI says a value came from; clients only need the field name
_LOCATION_PREFIXES = ("body", "query", "path")


def _request_context(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Status comes from ``STATUS_CODE_MAP``; unmapped codes are a 400."""
    error_dict = exc.to_dict()

    status_code = STATUS_CODE_MAP.get(exc.error_code, status.HTTP_400_BAD_REQUEST)

    if status_code >= 500:
        logger.error(
            "Domain error occurred",
            exc_info=exc,
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                "context": exc.context,
                **_request_context(request),
            },
        )
    else:
        logger.info(
            "Client error",
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                **_request_context(request),
            },
        )

    response_content: dict[str, Any] = {
        "detail": error_dict.get("message", str(exc)),
        "code": error_dict.get("code", exc.error_code),
    }

    if status_code >= 500:
        response_content["detail"] = "An internal error occurred"

    if "errors" in error_dict:
        response_content["errors"] = error_dict["errors"]

    return JSONResponse(status_code=status_code, content=response_content)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Pydantic rejections, e.g. ``car_id=abc``, a missing ``make`` or a
    301-character title. Nested fields are dotted: ``dimensions.length``.
    """
    errors = [
        {
            "field": ".".join(
                str(loc) for loc in error["loc"] if loc not in _LOCATION_PREFIXES
            ),
            "message": error["msg"],
            "code": error["type"],
        }
        for error in exc.errors()
    ]

    logger.info(
        "Request validation error",
        extra={"errors": errors, **_request_context(request)},
    )

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content={
            "detail": "Invalid request parameters",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    logger.info(
        "Value error",
        extra={"error_message": str(exc), **_request_context(request)},
    )

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content={
            "detail": str(exc),
            "code": "INVALID_VALUE",
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            **_request_context(request),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(ValueError, handle_value_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info("Exception handlers registered successfully")
