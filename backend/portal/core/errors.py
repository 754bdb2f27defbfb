import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


class PortalError(Exception):
    """Base for failures surfaced to the caller as ``{"detail": message}``."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    pass


class InvalidIdentifier(PortalError):
    pass


class InvalidDocument(PortalError):
    pass


class DuplicateDocument(InvalidDocument):
    pass


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransition(PortalError):
    status_code = status.HTTP_409_CONFLICT


def first_validation_message(errors) -> str:
    """Reduce pydantic's error list to the single message shown to the caller."""
    if not errors:
        return "Dados inválidos"
    error = errors[0]
    message = str(error.get("msg", "Dados inválidos"))
    if message.startswith(_VALUE_ERROR_PREFIX):
        # raised by our own validators, already phrased for the user
        return message[len(_VALUE_ERROR_PREFIX):]
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    if loc:
        return f"{loc[-1]}: {message}"
    return message


async def _portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    logger.warning(
        "request_failed method=%s path=%s status=%s error=%s detail=%s",
        request.method,
        request.url.path,
        exc.status_code,
        type(exc).__name__,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = first_validation_message(exc.errors())
    logger.warning(
        "request_invalid method=%s path=%s detail=%s",
        request.method,
        request.url.path,
        message,
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, _portal_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
