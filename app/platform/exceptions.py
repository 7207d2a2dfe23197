import logging
from typing import Dict

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.api_client import ApiError, ErrorKind, SessionExpiredError
from app.platform.response import api_response

LOGIN_PAGE = "/login"


class FieldValidationError(Exception):
    """A form value failed a local check; nothing was sent to the backend."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    @property
    def errors(self) -> Dict[str, str]:
        return {self.field: self.message}


class FlowStateError(Exception):
    """The requested step is not allowed from where the browser currently is."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def validation_errors(errors) -> Dict[str, str]:
    """Collapse pydantic error entries into {field.path: message}."""
    collapsed = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "__root__"
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        collapsed.setdefault(field, message)
    return collapsed


def api_error_status(exc: ApiError) -> int:
    if exc.kind == ErrorKind.NO_RESPONSE:
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if exc.kind == ErrorKind.SETUP:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if exc.status_code and 400 <= exc.status_code < 500:
        return exc.status_code
    return status.HTTP_502_BAD_GATEWAY


def add_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return api_response(
            message=str(exc.detail) or "Error",
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return api_response(
            message="Validation failed",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            errors=validation_errors(exc.errors()),
        )

    @app.exception_handler(ValidationError)
    async def model_validation_handler(request: Request, exc: ValidationError):
        return api_response(
            message="Validation failed",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            errors=validation_errors(exc.errors()),
        )

    @app.exception_handler(FieldValidationError)
    async def field_validation_handler(request: Request, exc: FieldValidationError):
        return api_response(
            message=exc.message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            errors=exc.errors,
        )

    @app.exception_handler(FlowStateError)
    async def flow_state_handler(request: Request, exc: FlowStateError):
        return api_response(message=exc.message, status_code=status.HTTP_409_CONFLICT)

    @app.exception_handler(SessionExpiredError)
    async def session_expired_handler(request: Request, exc: SessionExpiredError):
        return api_response(
            message="Your session has expired. Please sign in again.",
            status_code=status.HTTP_401_UNAUTHORIZED,
            redirect=LOGIN_PAGE,
        )

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return api_response(message=exc.message, status_code=api_error_status(exc))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logging.exception(f"Unhandled exception: {exc}")
        return api_response(
            message="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
