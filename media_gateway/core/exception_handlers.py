"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every response produced
here has the {"error": "<message>"} shape and one of the five gateway
statuses; unsupported methods are reported as unknown routes.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from media_gateway.core.config import get_settings
from media_gateway.domain.exceptions import (
    BadRequestException,
    ErrorKind,
    ForbiddenException,
    GatewayException,
    InternalException,
    NotFoundException,
    UnauthenticatedException,
)

logger = logging.getLogger(__name__)

# Framework HTTP errors folded onto gateway kinds; anything else 4xx is a bad request.
_HTTP_STATUS_EXCEPTIONS: dict[int, type[GatewayException]] = {
    401: UnauthenticatedException,
    403: ForbiddenException,
    404: NotFoundException,
    405: NotFoundException,
}


def _gateway_exception_handler(request: Request, exc: GatewayException) -> JSONResponse:
    """Return {"error": message} with the status of the exception's kind."""
    if exc.kind is ErrorKind.INTERNAL:
        logger.error("Internal gateway error %s: %s", exc.error_code, exc.details)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400; field details stay in the logs."""
    logger.info("Request validation failed: %s", exc.errors())
    return _gateway_exception_handler(request, BadRequestException())


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Map Starlette HTTP errors onto the gateway's statuses."""
    exc_class = _HTTP_STATUS_EXCEPTIONS.get(exc.status_code)
    if exc_class is not None:
        mapped = exc_class()
    elif exc.status_code < 500:
        mapped = BadRequestException()
    else:
        mapped = InternalException(error_code="HTTP_ERROR", details={"status": exc.status_code})
    return _gateway_exception_handler(request, mapped)


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; append exception text only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    message = InternalException().message
    settings = getattr(request.app.state, "settings", None) or get_settings()
    if settings.debug:
        message = f"{message}: {exc}"
    return JSONResponse(status_code=500, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: GatewayException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(GatewayException, _gateway_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
