"""
Plugin (utility generator) selection and resolution.

A preset selects which core plugins of the style compiler are enabled:

    plugins: all                      # every known plugin
    plugins: none                     # nothing from this preset
    plugins: default                  # curated default subset
    plugins: [flex, "grid*", margin]  # explicit list, ``*`` is a prefix wildcard

Selections from every preset in a chain are resolved independently,
concatenated ancestor-first, then deduplicated and sorted.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from presetsmith.specs import Preset

WILDCARD = "*"

# Core plugin catalog of the Tailwind CSS v3 compiler, in compiler order.
ALL_PLUGINS: tuple[str, ...] = (
    "preflight",
    "container",
    "accessibility",
    "pointerEvents",
    "visibility",
    "position",
    "inset",
    "isolation",
    "zIndex",
    "order",
    "gridColumn",
    "gridColumnStart",
    "gridColumnEnd",
    "gridRow",
    "gridRowStart",
    "gridRowEnd",
    "float",
    "clear",
    "margin",
    "boxSizing",
    "lineClamp",
    "display",
    "aspectRatio",
    "size",
    "height",
    "maxHeight",
    "minHeight",
    "width",
    "minWidth",
    "maxWidth",
    "flex",
    "flexShrink",
    "flexGrow",
    "flexBasis",
    "tableLayout",
    "captionSide",
    "borderCollapse",
    "borderSpacing",
    "transformOrigin",
    "translate",
    "rotate",
    "skew",
    "scale",
    "transform",
    "animation",
    "cursor",
    "touchAction",
    "userSelect",
    "resize",
    "scrollSnapType",
    "scrollSnapAlign",
    "scrollSnapStop",
    "scrollMargin",
    "scrollPadding",
    "listStylePosition",
    "listStyleType",
    "listStyleImage",
    "appearance",
    "columns",
    "breakBefore",
    "breakInside",
    "breakAfter",
    "gridAutoColumns",
    "gridAutoFlow",
    "gridAutoRows",
    "gridTemplateColumns",
    "gridTemplateRows",
    "flexDirection",
    "flexWrap",
    "placeContent",
    "placeItems",
    "alignContent",
    "alignItems",
    "justifyContent",
    "justifyItems",
    "gap",
    "space",
    "divideWidth",
    "divideStyle",
    "divideColor",
    "divideOpacity",
    "placeSelf",
    "alignSelf",
    "justifySelf",
    "overflow",
    "overscrollBehavior",
    "scrollBehavior",
    "textOverflow",
    "hyphens",
    "whitespace",
    "textWrap",
    "wordBreak",
    "borderRadius",
    "borderWidth",
    "borderStyle",
    "borderColor",
    "borderOpacity",
    "backgroundColor",
    "backgroundOpacity",
    "backgroundImage",
    "gradientColorStops",
    "boxDecorationBreak",
    "backgroundSize",
    "backgroundAttachment",
    "backgroundClip",
    "backgroundPosition",
    "backgroundRepeat",
    "backgroundOrigin",
    "fill",
    "stroke",
    "strokeWidth",
    "objectFit",
    "objectPosition",
    "padding",
    "textAlign",
    "textIndent",
    "verticalAlign",
    "fontFamily",
    "fontSize",
    "fontWeight",
    "textTransform",
    "fontStyle",
    "fontVariantNumeric",
    "lineHeight",
    "letterSpacing",
    "textColor",
    "textOpacity",
    "textDecoration",
    "textDecorationColor",
    "textDecorationStyle",
    "textDecorationThickness",
    "textUnderlineOffset",
    "fontSmoothing",
    "placeholderColor",
    "placeholderOpacity",
    "caretColor",
    "accentColor",
    "opacity",
    "backgroundBlendMode",
    "mixBlendMode",
    "boxShadow",
    "boxShadowColor",
    "outlineStyle",
    "outlineWidth",
    "outlineOffset",
    "outlineColor",
    "ringWidth",
    "ringColor",
    "ringOpacity",
    "ringOffsetWidth",
    "ringOffsetColor",
    "blur",
    "brightness",
    "contrast",
    "dropShadow",
    "grayscale",
    "hueRotate",
    "invert",
    "saturate",
    "sepia",
    "filter",
    "backdropBlur",
    "backdropBrightness",
    "backdropContrast",
    "backdropGrayscale",
    "backdropHueRotate",
    "backdropInvert",
    "backdropOpacity",
    "backdropSaturate",
    "backdropSepia",
    "backdropFilter",
    "transitionProperty",
    "transitionDelay",
    "transitionDuration",
    "transitionTimingFunction",
    "willChange",
    "content",
    "forcedColorAdjust",
)

# Layout, typography and color essentials for a component library.
DEFAULT_PLUGINS: tuple[str, ...] = (
    "preflight",
    "container",
    "alignContent",
    "alignItems",
    "alignSelf",
    "animation",
    "backgroundColor",
    "blur",
    "borderColor",
    "borderRadius",
    "borderStyle",
    "borderWidth",
    "boxShadow",
    "display",
    "flex",
    "flexDirection",
    "flexGrow",
    "flexShrink",
    "flexWrap",
    "float",
    "fontFamily",
    "fontSize",
    "fontStyle",
    "fontWeight",
    "gap",
    "gridColumn",
    "gridColumnEnd",
    "gridColumnStart",
    "gridRow",
    "gridRowEnd",
    "gridRowStart",
    "gridTemplateColumns",
    "gridTemplateRows",
    "height",
    "justifyContent",
    "justifyItems",
    "justifySelf",
    "lineHeight",
    "margin",
    "minHeight",
    "minWidth",
    "overflow",
    "outlineStyle",
    "outlineWidth",
    "outlineOffset",
    "outlineColor",
    "padding",
    "position",
    "ringColor",
    "ringOffsetColor",
    "ringOffsetWidth",
    "ringOpacity",
    "ringWidth",
    "textAlign",
    "textColor",
    "textDecoration",
    "textOverflow",
    "visibility",
    "whitespace",
    "width",
    "zIndex",
)


# =============================================================================
# Selection variants
# =============================================================================


@dataclass(frozen=True)
class CatalogAll:
    """Every plugin in the catalog."""


@dataclass(frozen=True)
class CatalogNone:
    """No plugins."""


@dataclass(frozen=True)
class CatalogDefault:
    """The curated default subset."""


@dataclass(frozen=True)
class ExplicitList:
    """Explicit identifiers; entries ending in ``*`` are prefix wildcards."""

    entries: tuple[str, ...]


PluginSelection = CatalogAll | CatalogNone | CatalogDefault | ExplicitList

_KEYWORDS: dict[str, PluginSelection] = {
    "all": CatalogAll(),
    "none": CatalogNone(),
    "default": CatalogDefault(),
}


def parse_selection(raw: Any) -> PluginSelection:
    """
    Turn a raw preset value into a selection variant.

    Anything that is neither a known keyword nor a list selects nothing.
    """
    if isinstance(raw, str):
        return _KEYWORDS.get(raw.strip(), CatalogNone())
    if isinstance(raw, list | tuple):
        return ExplicitList(entries=tuple(str(entry).strip() for entry in raw))
    return CatalogNone()


def resolve_plugins(
    selection: PluginSelection | Any,
    catalog: Sequence[str] = ALL_PLUGINS,
) -> list[str]:
    """
    Expand a selection into concrete plugin identifiers.

    Args:
        selection: Selection variant, or a raw preset value
        catalog: Known plugin identifiers, in catalog order

    Returns:
        Identifiers in catalog order (keywords) or sorted (lists),
        without duplicates
    """
    if not isinstance(selection, CatalogAll | CatalogNone | CatalogDefault | ExplicitList):
        selection = parse_selection(selection)

    match selection:
        case CatalogAll():
            return list(catalog)
        case CatalogNone():
            return []
        case CatalogDefault():
            return list(DEFAULT_PLUGINS)
        case ExplicitList(entries=entries):
            return sorted(_dedupe(_expand_entries(entries, catalog)))


def _expand_entries(entries: Iterable[str], catalog: Sequence[str]) -> list[str]:
    expanded: list[str] = []
    for entry in entries:
        if entry.endswith(WILDCARD):
            stem = entry[: -len(WILDCARD)]
            expanded.extend(plugin for plugin in catalog if plugin.startswith(stem))
        else:
            expanded.append(entry)
    return expanded


def _dedupe(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def resolve_chain_plugins(
    presets: Sequence[Preset],
    catalog: Sequence[str] = ALL_PLUGINS,
) -> list[str] | None:
    """
    Resolve plugin selections across a chain (ancestor first, leaf last).

    Returns:
        Sorted, duplicate-free identifiers, or None when no preset in the
        chain declares a selection at all
    """
    declared = [preset.plugin_selection for preset in presets if preset.plugin_selection is not None]
    if not declared:
        return None

    combined: list[str] = []
    for raw in declared:
        combined.extend(resolve_plugins(raw, catalog))
    return sorted(set(combined))
