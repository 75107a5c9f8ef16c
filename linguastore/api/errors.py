from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from linguastore.schemas.common import ApiError
from linguastore.services.auth import AuthenticationError
from linguastore.services.store import TranslationNotFoundError, TranslationQueryError

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    message: str,
    error: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    payload = ApiError(code=status_code, message=message, error=error)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(payload),
        headers=headers,
    )


def _collect_field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group validation messages by dotted field path, dropping the request part."""
    errors: dict[str, list[str]] = {}
    for item in exc.errors():
        location = [str(part) for part in item.get("loc", ())]
        if location and location[0] in {"body", "query", "path"}:
            location = location[1:]
        field = ".".join(location) or "request"
        errors.setdefault(field, []).append(str(item.get("msg", "Invalid value")))
    return errors


def install_error_handlers(app: FastAPI, *, expose_details: bool = False) -> None:
    """Render every failure as ``{code, message, error}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return _error_response(
            exc.status_code,
            message,
            error=exc.detail,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "The given data was invalid.",
            error=_collect_field_errors(exc),
        )

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        return _error_response(
            status.HTTP_401_UNAUTHORIZED,
            str(exc) or "Unauthenticated.",
            error=str(exc) or None,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(TranslationNotFoundError)
    async def not_found_handler(request: Request, exc: TranslationNotFoundError):
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc), error=str(exc))

    @app.exception_handler(TranslationQueryError)
    async def query_error_handler(request: Request, exc: TranslationQueryError):
        logger.error("Translation query failed on %s %s: %s", request.method, request.url.path, exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Translation query failed",
            error=str(exc) if expose_details else None,
        )
