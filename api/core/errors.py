"""
Error taxonomy and the FastAPI handlers that turn it into `{"error": ...}`
responses.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConstraintConflict(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND


# Anything else the store reports, connectivity included.
class StoreError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = str(err.get("msg") or "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "invalid request body"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        logger.info(
            "request_failed method=%s path=%s status=%d error=%s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        logger.info("request_invalid method=%s path=%s error=%s", request.method, request.url.path, message)
        return error_response(message, status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request_crashed method=%s path=%s", request.method, request.url.path)
        return error_response("internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)
