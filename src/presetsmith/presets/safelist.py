"""
Safelist builder.

Collects the literal class names generated for components so the style
compiler keeps them even when they never appear in scanned content.
"""

from __future__ import annotations

from collections.abc import Sequence

from presetsmith.specs import Preset


def build_safelist(presets: Sequence[Preset]) -> list[str]:
    """
    Collect class names for every component in every preset of a chain.

    Order follows the chain and each definition; duplicates are kept.
    """
    names: list[str] = []
    for preset in presets:
        for name, definition in preset.components.items():
            names.append(name)
            names.extend(f"{name}__{part}" for part in definition.parts)
            names.extend(f"{name}--{modifier}" for modifier in definition.modifiers)
            names.extend(f"{name}-{variant}" for variant in definition.named_variants)
    return names
