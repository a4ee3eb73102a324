"""
Style compiler interface.

The compiler is an external collaborator: it expands a CSS authoring
template against a configuration object (utility generation, vendor
prefixing, optional minification). Presets never talk to it directly;
the engine calls it through this protocol.
"""

from __future__ import annotations

from typing import Any, Protocol


class StyleCompiler(Protocol):
    """Compiles templates and resolves configuration defaults."""

    async def compile(self, config: dict[str, Any], template: str, *, minify: bool = False) -> str:
        """
        Compile a template.

        Returns:
            Final stylesheet text

        Raises:
            CompileError: The compiler rejected the template or configuration
        """
        ...

    async def resolve_config(self, config: dict[str, Any]) -> dict[str, Any]:
        """Return the configuration with the compiler's own defaults filled in."""
        ...
