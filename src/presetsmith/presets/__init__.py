"""
Preset resolution and template synthesis.

Usage:
    from presetsmith.presets import PresetStore, generate_preset
    from presetsmith.compiler import TailwindCliCompiler

    store = PresetStore(Path("."))
    preset = await store.load("default")
    output = await generate_preset(preset, store, TailwindCliCompiler())
"""

from .chain import PresetSource, resolve_chain
from .components import (
    ComponentRenderer,
    LightDomRenderer,
    ShadowDomRenderer,
    merge_components,
    select_renderer,
    synthesize_template,
)
from .config_builder import build_config, generate_colors, generate_screens, merge_theme
from .engine import generate_preset
from .plugins import (
    ALL_PLUGINS,
    DEFAULT_PLUGINS,
    CatalogAll,
    CatalogDefault,
    CatalogNone,
    ExplicitList,
    parse_selection,
    resolve_chain_plugins,
    resolve_plugins,
)
from .safelist import build_safelist
from .store import PresetStore, parse_document, parse_preset_text, sanitize_path
from .tokens import parse_token_table

__all__ = [
    # Tokens
    "parse_token_table",
    # Plugins
    "ALL_PLUGINS",
    "DEFAULT_PLUGINS",
    "CatalogAll",
    "CatalogNone",
    "CatalogDefault",
    "ExplicitList",
    "parse_selection",
    "resolve_plugins",
    "resolve_chain_plugins",
    # Chain
    "PresetSource",
    "resolve_chain",
    # Config
    "build_config",
    "generate_screens",
    "generate_colors",
    "merge_theme",
    # Components
    "ComponentRenderer",
    "LightDomRenderer",
    "ShadowDomRenderer",
    "select_renderer",
    "merge_components",
    "synthesize_template",
    "build_safelist",
    # Pipeline
    "generate_preset",
    # Persistence
    "PresetStore",
    "parse_document",
    "parse_preset_text",
    "sanitize_path",
]
