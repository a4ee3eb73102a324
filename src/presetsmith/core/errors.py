"""
Error types for preset resolution, validation, and compilation.
"""

from __future__ import annotations


class PresetError(Exception):
    """Base exception for all presetsmith errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PresetNotFoundError(PresetError):
    """
    Raised when a preset (or compiled asset) name cannot be loaded.

    Examples:
    - Unknown name in an ``extends`` list
    - Missing stored preset on compile
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Preset not found: {name}")


class PresetValidationError(PresetError):
    """
    Raised when a preset document is missing or cannot be parsed.

    Examples:
    - Save request without a name or body
    - Body that is neither valid YAML nor JSON
    - Document that parses to something other than a mapping
    """

    pass


class CycleError(PresetError):
    """Raised when an ``extends`` chain refers back to a preset already on the path."""

    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__("Circular extends: " + " -> ".join(self.chain))


class CompileError(PresetError):
    """
    Raised by the style compiler when it rejects a template or configuration.

    Attributes:
        message: Compiler message (first meaningful stderr line)
        source: Offending template text, when the compiler reported a location
    """

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)
