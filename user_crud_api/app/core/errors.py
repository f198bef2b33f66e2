"""
Domain errors and their translation into HTTP responses.

Services raise subclasses of ``UserCrudError``; they never build HTTP
responses themselves.  ``register_exception_handlers`` installs
handlers on the FastAPI application that render every error, including
FastAPI's own request validation failures, as one JSON shape::

    {"statusCode": 404, "message": "User with ID 1 not found", "error": "Not Found"}

Validation failures additionally carry an ``errors`` list naming each
offending field.
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class UserCrudError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors

    @property
    def error(self) -> str:
        return HTTPStatus(self.status_code).phrase

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "statusCode": self.status_code,
            "message": self.message,
            "error": self.error,
        }
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(UserCrudError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(UserCrudError):
    """No live record has the requested id."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(UserCrudError):
    """The email address already belongs to another record."""

    status_code = status.HTTP_409_CONFLICT


class InternalError(UserCrudError):
    """Unexpected store failure.  Never retried automatically."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def validation_error_from(exc: RequestValidationError) -> ValidationError:
    """Convert FastAPI's validation exception into a ``ValidationError``.

    Each pydantic error location such as ``("body", "email")`` or
    ``("path", "user_id")`` is reduced to its last named component.
    """
    errors = []
    for item in exc.errors():
        names = [str(part) for part in item.get("loc", ()) if isinstance(part, str)]
        field = names[-1] if names else "body"
        errors.append({"field": field, "message": item.get("msg", "Invalid value")})
    message = "; ".join(f"{e['field']}: {e['message']}" for e in errors) or "Invalid request"
    return ValidationError(message, errors=errors)


async def user_crud_error_handler(request: Request, exc: UserCrudError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = validation_error_from(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, error.message)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = {
        "statusCode": exc.status_code,
        "message": str(exc.detail),
        "error": HTTPStatus(exc.status_code).phrase,
    }
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = InternalError("Internal server error")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on ``app``."""
    app.add_exception_handler(UserCrudError, user_crud_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
