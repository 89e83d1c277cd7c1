"""Error taxonomy and the handlers that render it as the response envelope.

Every failure leaves the API as ``{"success": false, ...}``. Authentication
and CSRF failures put their text under ``error``; everything else uses
``message``. Request validation failures additionally carry
``errors: [{path, message}]``.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


class ApiError(HTTPException):
    key = "message"

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        errors: Optional[List[Dict[str, str]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.message = message
        self.errors = errors

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, self.key: self.message}
        if self.errors is not None:
            body["errors"] = self.errors
        return body


class AuthenticationError(ApiError):
    key = "error"

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, message, headers={"WWW-Authenticate": "Bearer"})


class CsrfError(ApiError):
    key = "error"

    def __init__(self, message: str = "Invalid or missing CSRF token") -> None:
        super().__init__(status.HTTP_403_FORBIDDEN, message)


class AuthorizationError(ApiError):
    def __init__(self, message: str) -> None:
        super().__init__(status.HTTP_403_FORBIDDEN, message)


class NotFoundError(ApiError):
    def __init__(self, message: str = "Not found") -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, message)


class ValidationFailed(ApiError):
    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed") -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, message, errors=errors)


class BadRequestError(ApiError):
    def __init__(self, message: str) -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, message)


def _error_path(loc) -> str:
    parts = list(loc)
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(str(p) for p in parts)


def _error_message(msg: str) -> str:
    # pydantic prefixes messages raised from validators
    for prefix in ("Value error, ", "Assertion failed, "):
        if msg.startswith(prefix):
            return msg[len(prefix):]
    return msg


def format_validation_errors(raw_errors) -> List[Dict[str, str]]:
    """Flatten pydantic/FastAPI error dicts into ``[{path, message}]``."""
    return [
        {"path": _error_path(err.get("loc", ())), "message": _error_message(err.get("msg", "Invalid value"))}
        for err in raw_errors
    ]


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc, ApiError):
        return await api_error_handler(request, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Validation failed",
            "errors": format_validation_errors(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
