"""
FastAPI application entry point for the AI backend.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import get_settings
from backend.dependencies import get_dispatcher
from backend.routes import router

logger = logging.getLogger(__name__)


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected malformed request to %s", request.url.path)
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app() -> FastAPI:
    settings = get_settings()
    # Fail at startup rather than on the first request when the completion
    # service credential is missing.
    get_dispatcher()

    app = FastAPI(title="WolfPad AI Backend (FastAPI)", version="0.1.0")
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(router, prefix=settings.api_prefix)
    return app
