"""
Preset inheritance chain resolution.

Flattens ``extends`` references into one ancestor-first sequence:

    A{extends: [B, C]}           -> [B, C]
    A{extends: B}, B{extends: C} -> [C, B]

The last declared ancestor sits closest to the leaf, so later entries win
when the chain is merged. The leaf itself is not part of the result.
"""

from __future__ import annotations

import logging
from typing import Protocol

from presetsmith.core.errors import CycleError, PresetNotFoundError
from presetsmith.specs import Preset

logger = logging.getLogger(__name__)


class PresetSource(Protocol):
    """Anything that can load a preset by name."""

    async def load(self, name: str) -> Preset | None: ...


async def resolve_chain(
    preset_or_name: Preset | str,
    source: PresetSource,
) -> list[Preset] | None:
    """
    Resolve the ancestors of a preset.

    Args:
        preset_or_name: Leaf preset, or the name of a stored preset
        source: Loader used for every ``extends`` reference

    Returns:
        Ancestors, furthest first. None if a leaf given by name is unknown.

    Raises:
        PresetNotFoundError: An ancestor name cannot be loaded
        CycleError: An ancestor extends a preset already on its path
    """
    if isinstance(preset_or_name, str):
        leaf = await source.load(preset_or_name)
        if leaf is None:
            return None
    else:
        leaf = preset_or_name

    path = [leaf.name] if leaf.name else []
    ancestors = await _resolve_ancestors(leaf, source, path)
    chain = _unique(ancestors)
    logger.debug("Resolved chain for %s: %s", leaf.label, [p.label for p in chain])
    return chain


async def _resolve_ancestors(
    preset: Preset,
    source: PresetSource,
    path: list[str],
) -> list[Preset]:
    resolved: list[Preset] = []

    # Walk in reverse so each earlier declaration is prepended before the later ones
    for name in reversed(preset.extends):
        if name in path:
            raise CycleError(path + [name])

        ancestor = await source.load(name)
        if ancestor is None:
            raise PresetNotFoundError(name)

        inherited = await _resolve_ancestors(ancestor, source, path + [name])
        resolved = inherited + [ancestor] + resolved

    return resolved


def _unique(presets: list[Preset]) -> list[Preset]:
    """Keep the first (furthest) occurrence of a preset reached twice."""
    seen: set[str] = set()
    unique: list[Preset] = []
    for preset in presets:
        key = preset.name or str(id(preset))
        if key in seen:
            continue
        seen.add(key)
        unique.append(preset)
    return unique
