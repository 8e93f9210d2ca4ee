"""
Exception handlers producing the uniform error envelope.

``register_exception_handlers`` is called by ``create_app``.  Domain
errors keep their own status and code; storage failures and anything
unexpected are logged with a traceback and reported without internal
detail unless ``settings.debug`` is set.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .exceptions import AppError, ConflictError, DatabaseError
from .logging_config import log_request_failure

logger = logging.getLogger(__name__)


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    error: Dict[str, Any] = {"code": code, "message": message, "statusCode": status_code}
    if details:
        error["details"] = details
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
        },
    )


def _app_error_response(request: Request, exc: AppError, exc_info: bool = False) -> JSONResponse:
    log_request_failure(logger, request, exc.status_code, exc.code, exc.message, exc_info=exc_info)
    return error_response(request, exc.status_code, exc.code, exc.message, exc.details)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to ``app``."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _app_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
                "message": error.get("msg", ""),
            }
            for error in exc.errors()
        ]
        message = "; ".join(f"{f['field']}: {f['message']}" if f["field"] else f["message"] for f in fields)
        log_request_failure(logger, request, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", message)
        return error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "VALIDATION_ERROR",
            message or "Dados da requisição inválidos",
            {"errors": fields},
        )

    @app.exception_handler(sqlite3.IntegrityError)
    async def integrity_error_handler(request: Request, exc: sqlite3.IntegrityError) -> JSONResponse:
        # A unique index caught a duplicate that slipped past the service checks.
        conflict = ConflictError("Registro duplicado", code="DUPLICATE_RESOURCE")
        return _app_error_response(request, conflict)

    @app.exception_handler(sqlite3.Error)
    async def database_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
        details = {"reason": str(exc)} if settings.debug else None
        return _app_error_response(request, DatabaseError(request.url.path, details), exc_info=True)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        try:
            code = HTTPStatus(exc.status_code).name
        except ValueError:
            code = "HTTP_ERROR"
        message = str(exc.detail)
        log_request_failure(logger, request, exc.status_code, code, message)
        return error_response(request, exc.status_code, code, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        message = str(exc) if settings.debug else "Erro interno do servidor"
        log_request_failure(
            logger, request, 500, "INTERNAL_SERVER_ERROR", str(exc), exc_info=True
        )
        return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR", message)
