"""
Exception handlers for the preset server.

Maps preset errors to HTTP responses:
- PresetNotFoundError: 404 ``{"error": "Not found"}``
- PresetValidationError, CycleError: 400 ``{"error": ...}``
- CompileError raised outside the engine: 500 ``{"error", "source"}``
- Unknown routes and methods: 404 ``{"error": "Not found"}``

Every error is logged with method and path before it is serialized.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from presetsmith.core.errors import (
    CompileError,
    CycleError,
    PresetNotFoundError,
    PresetValidationError,
)

logger = logging.getLogger(__name__)

NOT_FOUND = {"error": "Not found"}


def register_exception_handlers(app: FastAPI) -> None:
    """Register preset error handlers on a FastAPI application."""

    @app.exception_handler(PresetNotFoundError)
    async def not_found_handler(request: Request, exc: PresetNotFoundError) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=404, content=NOT_FOUND)

    @app.exception_handler(PresetValidationError)
    async def validation_handler(request: Request, exc: PresetValidationError) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(CycleError)
    async def cycle_handler(request: Request, exc: CycleError) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(CompileError)
    async def compile_handler(request: Request, exc: CompileError) -> JSONResponse:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=500, content={"error": exc.message, "source": exc.source})

    @app.exception_handler(StarletteHTTPException)
    async def http_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.detail)
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=NOT_FOUND)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})
