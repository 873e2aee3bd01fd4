"""
Exception handlers - every error leaves the API as
{"success": false, "message": ..., "errors"?: {...}}.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

LOG = logging.getLogger(__name__)

_LOC_PREFIXES = {"body", "query", "path", "form", "header"}


def create_error_response(
    status_code: int,
    message: str,
    errors: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        return create_error_response(
            exc.status_code,
            detail.get("message", "Error"),
            detail.get("errors"),
            getattr(exc, "headers", None),
        )
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = f"Route not found: {request.url.path}"
    return create_error_response(exc.status_code, str(detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOC_PREFIXES]
        errors[".".join(loc) or "body"] = err.get("msg", "Invalid value")
    return create_error_response(status.HTTP_400_BAD_REQUEST, "Validation Error", errors)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOG.exception(f"Server error on {request.method} {request.url.path}")
    return create_error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
