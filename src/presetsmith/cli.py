"""
presetsmith CLI.

Commands:
    serve      Start the preset HTTP server on loopback
    generate   Print CSS (or configuration) for a preset file, nothing is saved
    compile    Compile a stored preset and write its assets
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape

from presetsmith.core.config import ServerConfig
from presetsmith.core.errors import PresetError, PresetNotFoundError
from presetsmith.core.logging import setup_logging
from presetsmith.specs import ErrorDetail

if TYPE_CHECKING:
    from presetsmith.compiler import TailwindCliCompiler

app = typer.Typer(
    help="Resolve design presets and compile them to CSS",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def _fail(message: str, source: str | None = None) -> typer.Exit:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    if source:
        err_console.print(f"  at: {escape(source)}")
    return typer.Exit(code=1)


def _compile_failed(error: ErrorDetail) -> typer.Exit:
    return _fail(error.message, error.source)


def _config(root: Path | None) -> ServerConfig:
    config = ServerConfig.from_env()
    if root is not None:
        config.storage_root = root
    setup_logging(config.log_level)
    return config


def _compiler(config: ServerConfig) -> TailwindCliCompiler:
    from presetsmith.compiler import TailwindCliCompiler

    return TailwindCliCompiler(binary=config.tailwind_bin, cache_dir=config.cache_dir)


@app.command("serve")
def serve(
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default: $PORT or 8000)"),
    root: Path | None = typer.Option(None, "--root", "-r", help="Storage root directory"),
) -> None:
    """Start the preset server on 127.0.0.1."""
    import uvicorn

    from presetsmith.runtime import create_app_from_config

    config = _config(root)
    if port is not None:
        config.port = port

    console.print(f"[green]Started on {config.host}:{config.port}[/green]")
    console.print(f"Storage root: {config.storage_root}", soft_wrap=True)
    uvicorn.run(
        create_app_from_config(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


@app.command("generate")
def generate(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Preset file (YAML or JSON)"),
    show_json: bool = typer.Option(False, "--json", help="Print the configuration instead of CSS"),
    root: Path | None = typer.Option(None, "--root", "-r", help="Storage root for extends"),
) -> None:
    """Generate CSS for a preset file without persisting anything."""
    from presetsmith.presets import PresetStore, generate_preset, parse_preset_text

    config = _config(root)
    store = PresetStore(config.storage_root)

    try:
        preset = parse_preset_text(file.read_text())
        output = asyncio.run(generate_preset(preset, store, _compiler(config)))
    except PresetError as e:
        raise _fail(e.message) from e

    if output.error is not None:
        raise _compile_failed(output.error)

    # Raw output so the CSS and JSON stay pipeable
    typer.echo(output.config_json if show_json else output.css)


@app.command("compile")
def compile_preset(
    name: str = typer.Argument(..., help="Stored preset name"),
    root: Path | None = typer.Option(None, "--root", "-r", help="Storage root directory"),
) -> None:
    """Compile a stored preset and write presets/<name>.css and .mjs."""
    from presetsmith.presets import PresetStore, generate_preset, sanitize_path

    config = _config(root)
    store = PresetStore(config.storage_root)
    name = sanitize_path(name)

    async def _run() -> tuple[Path, Path]:
        preset = await store.load(name)
        if preset is None:
            raise PresetNotFoundError(name)

        output = await generate_preset(preset, store, _compiler(config))
        if output.error is not None:
            raise _compile_failed(output.error)
        return await store.save_assets(name, output)

    try:
        css_path, module_path = asyncio.run(_run())
    except PresetError as e:
        raise _fail(e.message) from e

    console.print(f"[green]Wrote[/green] {css_path}", soft_wrap=True)
    console.print(f"[green]Wrote[/green] {module_path}", soft_wrap=True)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
