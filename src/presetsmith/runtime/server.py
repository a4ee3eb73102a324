"""
FastAPI server factory for the preset service.

Creates and configures the FastAPI application with all routes.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response

from presetsmith.compiler import StyleCompiler, TailwindCliCompiler
from presetsmith.core.config import ServerConfig
from presetsmith.presets import PresetStore

from .exception_handlers import register_exception_handlers
from .routes import register_page_routes, register_preset_routes

logger = logging.getLogger(__name__)


def create_app(store: PresetStore, compiler: StyleCompiler) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Preset and asset persistence
        compiler: Style compiler adapter

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="presetsmith",
        description="Design preset resolution and CSS generation",
        version="0.1.0",
    )
    app.state.store = store
    app.state.compiler = compiler

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        logger.info("%s %s %s", request.method, request.url.path, response.status_code)
        return response

    register_exception_handlers(app)
    register_page_routes(app)
    register_preset_routes(app, store, compiler)

    return app


def create_app_from_config(config: ServerConfig) -> FastAPI:
    """Create the application with the filesystem store and Tailwind CLI compiler."""
    store = PresetStore(config.storage_root)
    compiler = TailwindCliCompiler(binary=config.tailwind_bin, cache_dir=config.cache_dir)
    return create_app(store, compiler)
