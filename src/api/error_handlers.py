"""Translation of service errors into HTTP responses."""

import logging
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.errors import InventoryError, MalformedInputError

logger = logging.getLogger(__name__)

# First element of a FastAPI error location names where the value came from
_REQUEST_SOURCES = ("body", "query", "path", "header", "cookie")


def _request_errors_to_dict(exc: RequestValidationError) -> Dict[str, List[str]]:
    out: Dict[str, List[str]] = {}
    for issue in exc.errors():
        location = list(issue.get("loc", ()))
        if location and location[0] in _REQUEST_SOURCES:
            location = location[1:]
        key = ".".join(str(part) for part in location) or "_global"
        out.setdefault(key, []).append(issue.get("msg", "invalid value"))
    return out


async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = MalformedInputError("Invalid request", errors=_request_errors_to_dict(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "Internal server error", "details": {}},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
