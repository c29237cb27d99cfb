"""
Terminal error translation for the HTTP API.

Every failure leaves the service as {"success": false, "message": ...} with
a status code. Full detail is logged server-side only.
"""
import logging
from typing import Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError

from ..core.exceptions import (
    AuthServiceError,
    DUPLICATE_EMAIL_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    get_status_code,
    get_user_message,
)
from ..domain.policies.password_policy import PASSWORD_POLICY_MESSAGE

logger = logging.getLogger(__name__)

_FIELD_MESSAGES = {
    "email": "Valid email is required",
    "fullName": "Full name must be at least 2 characters",
    "full_name": "Full name must be at least 2 characters",
    "password": PASSWORD_POLICY_MESSAGE,
}
_LOGIN_MESSAGE = "Email and password are required"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def _validation_message(request: Request, errors: Sequence[dict]) -> str:
    if request.url.path.endswith("/login"):
        return _LOGIN_MESSAGE
    for error in errors:
        fields = [str(part) for part in error.get("loc", ()) if part != "body"]
        for field in fields:
            if field in _FIELD_MESSAGES:
                return _FIELD_MESSAGES[field]
    return "Invalid request body"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthServiceError)
    async def auth_service_error_handler(request: Request, exc: AuthServiceError):
        status_code = get_status_code(exc)
        if status_code >= 500:
            logger.error(
                "%s %s failed: %s",
                request.method, request.url.path, exc.message,
                exc_info=exc,
            )
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return error_response(status_code, get_user_message(exc))

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        logger.info("%s %s hit a duplicate key", request.method, request.url.path)
        return error_response(400, DUPLICATE_EMAIL_MESSAGE)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(request, exc.errors())
        logger.info("%s %s invalid input: %s", request.method, request.url.path, message)
        return error_response(400, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, GENERIC_ERROR_MESSAGE)
