"""
Blog API Error Responses
Maps the error taxonomy onto HTTP status codes and a uniform JSON body
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from .errors import AuthorizationError, BlogError, StoreError
from .logging_config import api_logger


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def error_body(message: str, error_code: str, details: Optional[Dict[str, Any]] = None) -> Dict:
    body = {
        "ok": False,
        "detail": message,
        "error_code": error_code,
        "timestamp": _timestamp(),
    }
    if details:
        body["details"] = details
    return body


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    """Render content pipeline errors."""
    if isinstance(exc, StoreError):
        api_logger.error(
            f"Store error: {exc.message}",
            error=exc.__cause__ or exc,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body("An unexpected error occurred", exc.error_code),
        )

    api_logger.warning(
        f"API Error: {exc.message}",
        status_code=exc.status_code,
        error_code=exc.error_code,
        path=request.url.path,
    )
    headers = None
    if isinstance(exc, AuthorizationError) and exc.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.error_code, exc.details),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    api_logger.warning(
        f"HTTP Error: {exc.detail}",
        status_code=exc.status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, f"HTTP_{exc.status_code}"),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    api_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content=error_body("An unexpected error occurred", "INTERNAL_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
