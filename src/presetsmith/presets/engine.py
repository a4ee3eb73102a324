"""
Preset generation pipeline.

Runs the stages strictly in order:

1. chain resolution (ancestors of the leaf)
2. token and plugin resolution into the compiler configuration
3. configuration serialization
4. component template synthesis (+ safelist)
5. compiler invocation

Compiler failures are returned as ``CompiledOutput.error``; anything that
fails before the configuration is serialized (unknown ancestor, cycle)
is raised.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from presetsmith.core.errors import CompileError
from presetsmith.specs import CompiledOutput, ErrorDetail, Preset

from .chain import PresetSource, resolve_chain
from .components import (
    collect_styles,
    collect_variables,
    merge_components,
    select_renderer,
    synthesize_template,
)
from .config_builder import build_config
from .safelist import build_safelist

if TYPE_CHECKING:
    from presetsmith.compiler import StyleCompiler

logger = logging.getLogger(__name__)


def to_json(value: object) -> str:
    return json.dumps(value, indent=2)


async def generate_preset(
    preset: Preset,
    source: PresetSource,
    compiler: StyleCompiler,
) -> CompiledOutput:
    """
    Generate CSS and configuration for a preset.

    Args:
        preset: Leaf preset (stored or inline)
        source: Loader for ``extends`` references
        compiler: Style compiler adapter

    Returns:
        CompiledOutput with css on success, error on compiler failure
    """
    chain = await resolve_chain(preset, source) or []
    presets = [*chain, preset]

    safelist = build_safelist(presets) if preset.safelist else None
    config = build_config(chain, preset, safelist=safelist)

    try:
        if preset.resolve:
            config = await compiler.resolve_config(config)
    except CompileError as e:
        logger.warning("Config resolution failed for %s: %s", preset.label, e.message)
        return CompiledOutput(
            error=ErrorDetail(message=e.message, source=e.source), json=to_json(config)
        )

    config_json = to_json(config)

    template = synthesize_template(
        merge_components(presets),
        select_renderer(preset.shadow_dom),
        variables=collect_variables(presets),
        styles=collect_styles(presets),
    )

    try:
        css = await compiler.compile(config, template, minify=preset.minify)
    except CompileError as e:
        logger.warning("Compile failed for %s: %s", preset.label, e.message)
        return CompiledOutput(error=ErrorDetail(message=e.message, source=e.source), json=config_json)

    return CompiledOutput(css=css, json=config_json)
