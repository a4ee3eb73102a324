"""
Component template synthesis.

Turns merged component definitions into the CSS authoring template that
the style compiler expands. Two renderers share one interface:

- LightDomRenderer: plain class selectors (``.btn``, ``.btn__icon``,
  ``.btn--large``, ``.btn-primary``, ``.btn:hover``)
- ShadowDomRenderer: part selectors for encapsulated elements
  (``btn::part(component)``, ``btn::part(icon)``, ...)

Output is a pure function of its input: identical definitions always give
byte-identical templates.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from presetsmith.specs import ComponentDefinition, Preset

BASELINE_DIRECTIVES = (
    "@tailwind base;",
    "@tailwind components;",
    "@tailwind utilities;",
)

SHADOW_BASE_PART = "component"


def _rule(selector: str, classes: str) -> str:
    return f"{selector} {{ @apply {classes}; }}"


def _child_rule(selector: str, classes: str) -> str:
    return f"{selector} {{ @apply {classes} ; }}"


# =============================================================================
# Renderers
# =============================================================================


class ComponentRenderer(Protocol):
    """Renders the rulesets of a single component."""

    def render(self, name: str, definition: ComponentDefinition) -> list[str]: ...


class LightDomRenderer:
    """Class-selector rules: base, parts, modifiers, variants, states."""

    def render(self, name: str, definition: ComponentDefinition) -> list[str]:
        rules: list[str] = []
        if definition.apply:
            rules.append(_rule(f".{name}", definition.apply))
        for part, classes in definition.parts.items():
            rules.append(_child_rule(f".{name}__{part}", classes))
        for modifier, classes in definition.modifiers.items():
            rules.append(_child_rule(f".{name}--{modifier}", classes))
        for variant, classes in definition.named_variants.items():
            rules.append(_child_rule(f".{name}-{variant}", classes))
        for state, classes in definition.states.items():
            rules.append(_child_rule(f".{name}:{state}", classes))

        if isinstance(definition.variants, list) and definition.variants and rules:
            # Legacy form: responsive/state variants of the whole component
            rules = [f"@variants {', '.join(definition.variants)} {{", *rules, "}"]
        return rules


class ShadowDomRenderer:
    """Part-selector rules: base, parts, states, variants. Modifiers do not apply."""

    def render(self, name: str, definition: ComponentDefinition) -> list[str]:
        base = f"{name}::part({SHADOW_BASE_PART})"
        rules: list[str] = []
        if definition.apply:
            rules.append(_rule(base, definition.apply))
        for part, classes in definition.parts.items():
            rules.append(_child_rule(f"{name}::part({part})", classes))
        for state, classes in definition.states.items():
            rules.append(_child_rule(f"{base}:{state}", classes))
        for variant, classes in definition.named_variants.items():
            rules.append(
                _child_rule(f"{name}.{name}-{variant}::part({SHADOW_BASE_PART})", classes)
            )
        return rules


def select_renderer(shadow_dom: bool) -> ComponentRenderer:
    """Pick the renderer once per resolution."""
    return ShadowDomRenderer() if shadow_dom else LightDomRenderer()


# =============================================================================
# Merging
# =============================================================================


def merge_components(presets: Sequence[Preset]) -> dict[str, ComponentDefinition]:
    """
    Merge component definitions across a chain (ancestor first).

    A later definition of the same component replaces whole fields it sets
    (``apply``, ``parts``, ...); fields it leaves out are inherited. Maps such
    as ``parts`` are never merged entry by entry.
    """
    merged: dict[str, ComponentDefinition] = {}
    for preset in presets:
        for name, definition in preset.components.items():
            previous = merged.get(name)
            if previous is None:
                merged[name] = definition
                continue
            overrides = {field: getattr(definition, field) for field in definition.model_fields_set}
            merged[name] = previous.model_copy(update=overrides)
    return merged


def collect_variables(presets: Sequence[Preset]) -> dict[str, str]:
    """Custom properties from every preset; later presets win."""
    variables: dict[str, str] = {}
    for preset in presets:
        for key, value in (preset.variables or {}).items():
            name = str(key).strip()
            if not name.startswith("--"):
                name = f"--{name}"
            variables[name] = str(value).strip()
    return variables


def collect_styles(presets: Sequence[Preset]) -> list[str]:
    """Literal CSS of every preset, in chain order."""
    return [preset.styles for preset in presets if preset.styles]


# =============================================================================
# Template
# =============================================================================


def render_components(
    components: Mapping[str, ComponentDefinition],
    renderer: ComponentRenderer,
) -> list[str]:
    """Render all components in insertion order."""
    rules: list[str] = []
    for name, definition in components.items():
        rules.extend(renderer.render(name, definition))
    return rules


def synthesize_template(
    components: Mapping[str, ComponentDefinition],
    renderer: ComponentRenderer,
    variables: Mapping[str, Any] | None = None,
    styles: Sequence[str] = (),
) -> str:
    """
    Build the complete CSS authoring template.

    Args:
        components: Merged component definitions
        renderer: Light-DOM or shadow-DOM renderer
        variables: Custom properties for a ``:root`` block (``--`` prefixed)
        styles: Literal CSS appended after the components layer

    Returns:
        Template text for the style compiler
    """
    sections = ["\n".join(BASELINE_DIRECTIVES)]

    if variables:
        declarations = "".join(f"  {name}: {value};\n" for name, value in variables.items())
        sections.append(f":root {{\n{declarations}}}")

    body = "".join(f"{rule}\n" for rule in render_components(components, renderer))
    sections.append(f"@layer components {{\n{body}}}")

    sections.extend(style.strip("\n") for style in styles)
    return "\n\n".join(sections) + "\n"
