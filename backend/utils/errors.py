# backend/utils/errors.py
import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for failures that are reported to the caller as-is.

    Each subclass fixes the HTTP status; ``extra`` is merged into the JSON body
    next to ``error``.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.message
        self.extra: Dict[str, Any] = extra
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


# --- Data integrity ---

class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"

    def __init__(self, message: Optional[str] = None, fields: Iterable[str] = ()):
        super().__init__(message, fields=list(fields))


class DuplicateEntry(AppError):
    """Unique constraint violation reported by the store."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Already exists"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message, field=field)
        self.field = field


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


# --- Authentication ---

class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class AuthenticationRequired(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Access token required"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        super().__init__(message, requireLogin=True, **extra)


class TokenInvalid(AuthenticationRequired):
    message = "Invalid token"


class TokenExpired(AuthenticationRequired):
    message = "Token expired"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, expired=True)


# --- Authorization ---

class InsufficientPermissions(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Insufficient permissions"

    def __init__(self, role: Optional[str], required_roles: List[str]):
        super().__init__(None, role=role, requiredRoles=required_roles)


class RoleMissing(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "No role present in token"

    def __init__(self, required_roles: List[str]):
        super().__init__(None, requiredRoles=required_roles)


# --- Handlers ---

_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # loc looks like ("body", "customer_name"); keep the field part only
    fields = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _REQUEST_PARTS:
            loc = loc[1:]
        if loc and str(loc[0]) not in fields:
            fields.append(str(loc[0]))
    if fields:
        message = "Missing or invalid fields: " + ", ".join(fields)
    else:
        message = "Invalid request body"
    return _app_error_handler(request, ValidationFailed(message, fields=fields))


def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("error handling %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
