"""
Preset persistence.

Layout under the storage root:

    systems/<name>.yml      preset source documents, stored verbatim
    presets/<name>.css      compiled stylesheet
    presets/<name>.mjs      ``export default <configuration>;``

Every read parses from disk; nothing is cached between requests.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from presetsmith.core.errors import PresetValidationError
from presetsmith.specs import CompiledOutput, Preset

logger = logging.getLogger(__name__)

SYSTEMS_DIR = "systems"
ASSETS_DIR = "presets"
PRESET_EXTENSION = ".yml"

_DOT_RUNS = re.compile(r"\.{2,}")


def sanitize_path(value: str) -> str:
    """Collapse runs of dots so a name cannot climb out of its root."""
    return _DOT_RUNS.sub(".", str(value)).lstrip("/")


def parse_document(text: str) -> dict[str, Any]:
    """
    Parse preset text in either notation.

    Text starting with ``{`` is read as JSON, anything else as YAML.

    Raises:
        PresetValidationError: Text does not parse, or is not a mapping
    """
    try:
        if text.strip().startswith("{"):
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise PresetValidationError(f"Invalid preset: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PresetValidationError(
            f"Invalid preset: expected a mapping, got {type(data).__name__}"
        )
    return data


def parse_preset_text(text: str, name: str | None = None) -> Preset:
    """Parse and validate preset text into a Preset."""
    data = parse_document(text)
    if name is not None:
        data["name"] = name
    try:
        return Preset.model_validate(data)
    except ValidationError as e:
        raise PresetValidationError(f"Invalid preset: {e}") from e


class PresetStore:
    """Filesystem-backed preset sources and compiled assets."""

    def __init__(self, root: Path):
        self.root = Path(root)
        self.systems_dir = self.root / SYSTEMS_DIR
        self.assets_dir = self.root / ASSETS_DIR

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def _inside(self, base: Path, relative: str) -> Path | None:
        path = (base / sanitize_path(relative)).resolve()
        if not path.is_relative_to(base.resolve()):
            return None
        return path

    def preset_path(self, name: str) -> Path | None:
        return self._inside(self.systems_dir, name + PRESET_EXTENSION)

    def asset_path(self, path: str) -> Path | None:
        """Path of an existing compiled asset, or None."""
        asset = self._inside(self.assets_dir, path)
        if asset is None or not asset.is_file():
            return None
        return asset

    # -------------------------------------------------------------------------
    # Presets
    # -------------------------------------------------------------------------

    async def read_text(self, name: str) -> str | None:
        """Raw stored preset text, or None if unknown."""
        path = self.preset_path(name)
        if path is None:
            return None
        return await asyncio.to_thread(_read_if_exists, path)

    async def load(self, name: str) -> Preset | None:
        """Load and parse a stored preset, or None if unknown."""
        text = await self.read_text(name)
        if text is None:
            return None
        return parse_preset_text(text, name=sanitize_path(name))

    async def save(self, name: str, text: str) -> Path:
        """
        Validate and store preset text verbatim.

        Raises:
            PresetValidationError: Missing name/body or unparseable body
        """
        if not name or not text:
            raise PresetValidationError("Missing name or input.\nPOST /preset/:name")

        parse_document(text)
        path = self.preset_path(name)
        if path is None:
            raise PresetValidationError(f"Invalid preset name: {name}")

        await asyncio.to_thread(_write, path, text)
        logger.info("Saved preset %s", name)
        return path

    # -------------------------------------------------------------------------
    # Compiled assets
    # -------------------------------------------------------------------------

    async def save_assets(self, name: str, output: CompiledOutput) -> tuple[Path, Path]:
        """Write the stylesheet and configuration module for a compiled preset."""
        css_path = self._inside(self.assets_dir, name + ".css")
        module_path = self._inside(self.assets_dir, name + ".mjs")
        if css_path is None or module_path is None:
            raise PresetValidationError(f"Invalid preset name: {name}")

        await asyncio.to_thread(_write, css_path, output.css)
        await asyncio.to_thread(_write, module_path, f"export default {output.config_json};\n")
        logger.info("Saved assets for %s", name)
        return css_path, module_path


def _read_if_exists(path: Path) -> str | None:
    if not path.is_file():
        return None
    return path.read_bytes().decode("utf-8")


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
