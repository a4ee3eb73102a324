"""
Preset HTTP routes.

    GET  /                  landing page
    GET  /edit              editor page
    GET  /assets/<path>     compiled asset (no-cache)
    POST /compile/<name>    compile a stored preset and persist its assets
    GET  /preset/<name>     raw stored preset text
    POST /preset/<name>     validate and store preset text
    POST /generate          compile preset text without persisting

Failures on /generate are always 400: an unknown ancestor or a cycle in
the submitted text is reported the same way as a parse or compile error.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, Response

from presetsmith.compiler import StyleCompiler
from presetsmith.core.errors import PresetNotFoundError, PresetValidationError
from presetsmith.presets import PresetStore, generate_preset, parse_preset_text, sanitize_path

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

MISSING_INPUT = "Missing name or input.\nPOST /preset/:name"


def register_page_routes(app: FastAPI, static_dir: Path = STATIC_DIR) -> None:
    """Register the static landing and editor documents."""

    @app.get("/", include_in_schema=False)
    async def landing() -> FileResponse:
        return FileResponse(static_dir / "index.html", media_type="text/html")

    @app.get("/edit", include_in_schema=False)
    async def editor() -> FileResponse:
        return FileResponse(static_dir / "editor.html", media_type="text/html")


def register_preset_routes(app: FastAPI, store: PresetStore, compiler: StyleCompiler) -> None:
    """
    Register preset, compile, and asset routes.

    Args:
        app: FastAPI application instance
        store: Preset and asset persistence
        compiler: Style compiler adapter
    """

    @app.get("/assets/{path:path}", tags=["Assets"], summary="Read a compiled asset")
    async def read_asset(path: str) -> Response:
        asset = store.asset_path(sanitize_path(path))
        if asset is None:
            raise PresetNotFoundError(path)
        return FileResponse(asset, headers={"cache-control": "no-cache"})

    @app.get("/preset/{name:path}", tags=["Presets"], summary="Read stored preset text")
    async def read_preset(name: str) -> Response:
        text = await store.read_text(sanitize_path(name))
        if text is None:
            raise PresetNotFoundError(name)
        return PlainTextResponse(text)

    @app.post("/preset", tags=["Presets"], include_in_schema=False)
    async def save_preset_without_name() -> Response:
        raise PresetValidationError(MISSING_INPUT)

    @app.post("/preset/{name:path}", tags=["Presets"], summary="Store preset text")
    async def save_preset(name: str, request: Request) -> Response:
        body = await _read_text(request)
        if not name or not body:
            raise PresetValidationError(MISSING_INPUT)
        await store.save(sanitize_path(name), body)
        return Response(status_code=200)

    @app.post("/compile/{name:path}", tags=["Presets"], summary="Compile and persist a preset")
    async def compile_preset(name: str) -> Response:
        name = sanitize_path(name)
        preset = await store.load(name)
        if preset is None:
            raise PresetNotFoundError(name)

        start = time.monotonic()
        logger.info("Generating %s", name)
        output = await generate_preset(preset, store, compiler)

        if output.error is not None:
            logger.error("Compile failed for %s: %s", name, output.error.message)
            return JSONResponse(
                status_code=500,
                content={
                    "error": output.error.message,
                    "source": output.error.source,
                    "json": _parse_json(output.config_json),
                },
            )

        await store.save_assets(name, output)
        logger.info("Finished in %dms", (time.monotonic() - start) * 1000)
        return JSONResponse(content={"json": _parse_json(output.config_json)})

    @app.post("/generate", tags=["Presets"], summary="Compile preset text without persisting")
    async def generate(request: Request) -> Response:
        body = await _read_text(request)
        preset = parse_preset_text(body)
        try:
            output = await generate_preset(preset, store, compiler)
        except PresetNotFoundError as e:
            raise PresetValidationError(e.message) from e

        if output.error is not None:
            return JSONResponse(
                status_code=400,
                content={"error": output.error.message, "json": output.config_json},
            )
        return JSONResponse(content={"css": output.css, "json": output.config_json})


def _parse_json(text: str) -> Any:
    return json.loads(text) if text else None


async def _read_text(request: Request) -> str:
    try:
        return (await request.body()).decode("utf-8")
    except UnicodeDecodeError as e:
        raise PresetValidationError("Invalid preset: body is not UTF-8") from e
