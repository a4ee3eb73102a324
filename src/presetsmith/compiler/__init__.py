"""
Style compiler adapters.

Usage:
    from presetsmith.compiler import TailwindCliCompiler

    compiler = TailwindCliCompiler()
    css = await compiler.compile(config, template, minify=True)
"""

from .base import StyleCompiler
from .tailwind import TailwindCliCompiler, get_tailwind_binary

__all__ = [
    "StyleCompiler",
    "TailwindCliCompiler",
    "get_tailwind_binary",
]
