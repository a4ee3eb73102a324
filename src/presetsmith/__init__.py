"""
presetsmith - design presets compiled to CSS.

Resolves preset inheritance chains, merges design tokens into a style
compiler configuration, and synthesizes the component template that the
compiler expands into the final stylesheet.
"""

__version__ = "0.1.0"
