"""
Theme configuration builder.

Merges the token tables of a resolved chain (ancestors first, leaf last)
into the configuration object consumed by the style compiler:

    {
        "corePlugins": [...],          # only when some preset selects plugins
        "variants": {...},             # leaf pass-through
        "theme": {
            "extend": {"screens", "colors", "spacing", "borderRadius", "width", "height"},
            ...raw leaf theme...
        },
        "safelist": [...],             # only when the leaf asks for one
    }

Token syntax is not checked here; the compiler rejects bad values.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from presetsmith.specs import Preset

from .plugins import resolve_chain_plugins
from .tokens import merge_token_tables, parse_token_table

RAW_PREFIX = "raw:"
DEFAULT_SHADE = "DEFAULT"

ORIENTATION_SCREENS: dict[str, Any] = {
    "portrait": {"raw": "(orientation: portrait)"},
    "landscape": {"raw": "(orientation: landscape)"},
}

FIXED_COLORS: dict[str, Any] = {
    "transparent": "transparent",
    "current": "currentColor",
}


def generate_screens(devices: Mapping[str, str] | None) -> dict[str, Any]:
    """
    Build named breakpoints.

    The orientation breakpoints are always present; a declared device with
    the same name replaces one. ``raw:`` values become raw media queries.
    """
    screens: dict[str, Any] = dict(ORIENTATION_SCREENS)
    for device, value in (devices or {}).items():
        if value.startswith(RAW_PREFIX):
            screens[device] = {"raw": value[len(RAW_PREFIX) :].strip()}
        else:
            screens[device] = value
    return screens


def generate_colors(colors: Mapping[str, str] | None) -> dict[str, Any]:
    """
    Build the color palette.

    Each declared color is wrapped as ``{"DEFAULT": value}`` so shades can
    be added next to it by the compiler configuration.
    """
    palette: dict[str, Any] = dict(FIXED_COLORS)
    for key, value in (colors or {}).items():
        palette[key] = {DEFAULT_SHADE: value}
    return palette


def merge_theme(extension: Mapping[str, Any], raw_theme: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Combine generated tokens with the leaf's raw ``theme`` override.

    Precedence (highest last):
        1. generated tokens, under ``extend``
        2. raw theme keys, copied verbatim; a raw ``extend`` replaces the generated one

    The merge is shallow.
    """
    theme: dict[str, Any] = {"extend": dict(extension)}
    if raw_theme:
        theme.update(raw_theme)
    return theme


def merge_config(
    theme: Mapping[str, Any],
    *,
    plugins: Sequence[str] | None = None,
    variants: Mapping[str, Any] | None = None,
    safelist: Sequence[str] | None = None,
) -> dict[str, Any]:
    """
    Assemble the top-level configuration object.

    ``corePlugins`` is attached whenever the chain declared a selection,
    even if it resolved to nothing, since an empty list disables every
    core plugin.
    """
    config: dict[str, Any] = {}
    if plugins is not None:
        config["corePlugins"] = list(plugins)
    if variants:
        config["variants"] = dict(variants)
    config["theme"] = dict(theme)
    if safelist is not None:
        config["safelist"] = list(safelist)
    return config


def build_extension(presets: Sequence[Preset]) -> dict[str, Any]:
    """Merge every token table of the chain and map it to theme keys."""
    tables = {
        "colors": merge_token_tables(*(parse_token_table(p.colors) for p in presets)),
        "spacing": merge_token_tables(*(parse_token_table(p.spacing) for p in presets)),
        "sizes": merge_token_tables(*(parse_token_table(p.sizes) for p in presets)),
        "devices": merge_token_tables(*(parse_token_table(p.devices) for p in presets)),
        "borderRadius": merge_token_tables(*(parse_token_table(p.border_radius) for p in presets)),
    }

    extension: dict[str, Any] = {
        "screens": generate_screens(tables["devices"]),
        "colors": generate_colors(tables["colors"]),
    }
    if tables["borderRadius"]:
        extension["borderRadius"] = tables["borderRadius"]
    if tables["spacing"]:
        extension["spacing"] = tables["spacing"]
    if tables["sizes"]:
        extension["width"] = dict(tables["sizes"])
        extension["height"] = dict(tables["sizes"])
    return extension


def build_config(
    chain: Sequence[Preset],
    leaf: Preset,
    safelist: Sequence[str] | None = None,
) -> dict[str, Any]:
    """
    Build the compiler configuration for a leaf preset.

    Args:
        chain: Resolved ancestors, furthest first (leaf excluded)
        leaf: The requested preset
        safelist: Class names to protect from purging, if requested

    Returns:
        Configuration object, JSON serializable
    """
    presets = [*chain, leaf]
    extension = build_extension(presets)
    return merge_config(
        merge_theme(extension, leaf.theme),
        plugins=resolve_chain_plugins(presets),
        variants=leaf.variants,
        safelist=safelist,
    )
