# hostel_rooms/core/middleware.py
"""
HTTP plumbing for the room service: a request context middleware and
the handler that renders application exceptions as JSON.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from hostel_rooms.config.logging import get_logger
from hostel_rooms.core.exceptions import BaseAppException, ValidationError

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id, times it and logs the outcome.

    An upstream ``X-Request-ID`` is reused; otherwise a UUID is minted.
    Both the id and the elapsed time are echoed as response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        context = {"request_id": request_id, "method": request.method, "path": request.url.path}

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error("Unhandled error while serving request", extra=context, exc_info=True)
            raise
        elapsed = time.perf_counter() - started

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        context.update(status_code=response.status_code, process_time=f"{elapsed:.4f}s")
        if response.status_code >= 400:
            logger.warning(f"{request.method} {request.url.path} -> {response.status_code}", extra=context)
        else:
            logger.info(f"{request.method} {request.url.path} -> {response.status_code}", extra=context)
        return response


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI request validation failures in the application error envelope."""
    field_errors = {}
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        location = [str(part) for part in error.get("loc", ())][1:]
        field_errors.setdefault(".".join(location) or "__root__", []).append(error.get("msg", "invalid value"))
    error = ValidationError("Request validation failed", field_errors=field_errors)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


def register_middlewares(app: FastAPI) -> None:
    app.add_middleware(RequestContextMiddleware)


__all__ = [
    "RequestContextMiddleware",
    "app_exception_handler",
    "request_validation_handler",
    "register_exception_handlers",
    "register_middlewares",
]
